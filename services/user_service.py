import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from core.config import Settings
from models.user_model import User, AccountType
from schemas.user_schema import UserCreate, AuthenticatedUser
from utils.auth_utils import (
    Hasher,
    create_user_token,
    generate_verification_token,
    token_expired,
    VERIFICATION_TOKEN_TTL,
    RESET_TOKEN_TTL,
)
from utils.exceptions import (
    DuplicateAccountError,
    InvalidCredentialsError,
    EmailNotVerifiedError,
    InvalidOrExpiredTokenError,
    SamePasswordError,
    InvalidAccountTypeError,
    NotFoundError,
    ValidationFailedError,
)
from utils.google_oauth import GoogleIdentity

logger = logging.getLogger(__name__)

VALID_ACCOUNT_TYPES = [t.value for t in AccountType]


class UserService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.db.scalar(select(User).where(User.email == email))

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def _commit_new_user(self, user: User):
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a race against a concurrent insert of the same email
            await self.db.rollback()
            raise DuplicateAccountError()

    async def create_user(self, user_data: UserCreate) -> tuple[User, str]:
        existing_user = await self.get_by_email(user_data.email)
        if existing_user:
            raise DuplicateAccountError()

        verification_required = self.settings.EMAIL_VERIFICATION_ENABLED
        new_user = User(
            email=user_data.email,
            password=await Hasher.hash_password(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            birthday=user_data.birthday,
            gender=user_data.gender,
            phone=user_data.phone,
            city=user_data.city,
            is_verified=not verification_required,
            verification_token=generate_verification_token(),
            verification_token_expiry=datetime.utcnow() + VERIFICATION_TOKEN_TTL,
        )
        await self._commit_new_user(new_user)
        logger.info(f"Registered user {new_user.id} ({new_user.email})")

        return new_user, create_user_token(new_user, self.settings)

    async def authenticate_user(self, email: str, password: str) -> tuple[User, str]:
        user = await self.get_by_email(email)
        if not user:
            await Hasher.burn_check(password)
            logger.warning(f"Login failed for unknown email {email}")
            raise InvalidCredentialsError()
        if not await Hasher.check_password(password, user.password):
            logger.warning(f"Login failed for user {user.id}: wrong password")
            raise InvalidCredentialsError()
        if self.settings.EMAIL_VERIFICATION_ENABLED and not user.is_verified:
            raise EmailNotVerifiedError()

        return user, create_user_token(user, self.settings)

    async def verify_email(self, token: str) -> User:
        user = await self.db.scalar(select(User).where(User.verification_token == token))
        if not user or token_expired(user.verification_token_expiry):
            raise InvalidOrExpiredTokenError(
                "Invalid or expired verification token", error="Verification failed"
            )

        user.is_verified = True
        user.verification_token = None
        user.verification_token_expiry = None
        await self.db.commit()
        logger.info(f"User {user.id} verified their email")
        return user

    async def refresh_verification_token(self, email: str) -> User:
        user = await self.get_by_email(email)
        if not user:
            raise NotFoundError("User not found", error="Verification failed")
        if user.is_verified:
            raise ValidationFailedError("Email is already verified", error="Verification failed")

        user.verification_token = generate_verification_token()
        user.verification_token_expiry = datetime.utcnow() + VERIFICATION_TOKEN_TTL
        await self.db.commit()
        return user

    async def send_reset_code(self, email: str) -> Optional[User]:
        """Store a fresh reset token; returns the user to notify, or None for unknown emails."""
        user = await self.get_by_email(email)
        if not user:
            logger.info(f"Password reset requested for unknown email {email}")
            return None

        # overwriting invalidates any earlier token
        user.reset_password_token = generate_verification_token()
        user.reset_password_expiry = datetime.utcnow() + RESET_TOKEN_TTL
        await self.db.commit()
        logger.info(f"Issued password reset token for user {user.id}")
        return user

    async def reset_password(self, token: str, new_password: str) -> bool:
        user = await self.db.scalar(select(User).where(User.reset_password_token == token))
        if not user:
            raise InvalidOrExpiredTokenError()
        if token_expired(user.reset_password_expiry):
            raise InvalidOrExpiredTokenError("Reset token has expired")

        user.password = await Hasher.hash_password(new_password)
        user.reset_password_token = None
        user.reset_password_expiry = None
        await self.db.commit()
        logger.info(f"Password reset for user {user.id}")
        return True

    async def change_password(self, principal: AuthenticatedUser, old_password: str, new_password: str) -> bool:
        user = await self.get_by_id(principal.id)
        if not user:
            raise NotFoundError("User record not found", error="User not found")

        if not await Hasher.check_password(old_password, user.password):
            raise InvalidCredentialsError("Current password is incorrect", error="Password change failed")
        if await Hasher.check_password(new_password, user.password):
            raise SamePasswordError()

        user.password = await Hasher.hash_password(new_password)
        await self.db.commit()
        logger.info(f"Password changed for user {user.id}")
        return True

    async def login_with_google(self, identity: GoogleIdentity) -> tuple[User, str]:
        user = await self.get_by_email(identity.email)
        if not user:
            user = User(
                email=identity.email,
                first_name=identity.given_name or "User",
                last_name=identity.family_name or "",
                password=await Hasher.unusable_password_hash(),
                is_verified=True,
            )
            try:
                await self._commit_new_user(user)
                logger.info(f"Created user {user.id} from Google sign-in")
            except DuplicateAccountError:
                # a parallel Google login created it first
                user = await self.get_by_email(identity.email)
                if user is None:
                    raise

        return user, create_user_token(user, self.settings)

    async def update_account_type(self, principal: AuthenticatedUser, account_type: Optional[str]) -> User:
        if account_type not in VALID_ACCOUNT_TYPES:
            raise InvalidAccountTypeError(
                f"Account type must be one of: {', '.join(VALID_ACCOUNT_TYPES)}"
            )

        user = await self.get_by_id(principal.id)
        if not user:
            raise NotFoundError("User record not found", error="User not found")

        user.account_type = AccountType(account_type)
        await self.db.commit()
        logger.info(f"User {user.id} account type set to {account_type}")
        return user
