# utils/auth_utils.py

import secrets
from datetime import datetime, timedelta

from fastapi.concurrency import run_in_threadpool
from jose import jwt, JWTError
from passlib.context import CryptContext

from core.config import Settings
from utils.exceptions import UnauthenticatedError

BCRYPT_ROUNDS = 10
VERIFICATION_TOKEN_TTL = timedelta(hours=24)
RESET_TOKEN_TTL = timedelta(hours=1)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

# verified against for unknown emails; built once at import
_DUMMY_HASH = pwd_context.hash(secrets.token_urlsafe(16))


class Hasher:
    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    # bcrypt is CPU-bound; the async variants keep it off the event loop.
    @staticmethod
    async def hash_password(password: str) -> str:
        return await run_in_threadpool(Hasher.get_password_hash, password)

    @staticmethod
    async def check_password(plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(Hasher.verify_password, plain_password, hashed_password)

    @staticmethod
    async def burn_check(plain_password: str) -> None:
        """Spend one bcrypt verification so unknown emails cost the same as wrong passwords."""
        await Hasher.check_password(plain_password, _DUMMY_HASH)

    @staticmethod
    async def unusable_password_hash() -> str:
        return await Hasher.hash_password(secrets.token_urlsafe(32))


def create_access_token(data: dict, settings: Settings, expires_delta: timedelta = None) -> str:
    to_encode = dict(data)
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_user_token(user, settings: Settings) -> str:
    return create_access_token({"sub": str(user.id), "email": user.email}, settings)


def decode_access_token(token: str, settings: Settings) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise UnauthenticatedError("Invalid or expired session token")

    if not payload.get("sub") or not payload.get("email"):
        raise UnauthenticatedError("Invalid or expired session token")
    return payload


def generate_verification_token() -> str:
    return secrets.token_hex(32)


def token_expired(expiry: datetime | None) -> bool:
    return expiry is None or expiry < datetime.utcnow()
