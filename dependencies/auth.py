from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from database import get_db
from models.user_model import User, AccountType
from schemas.user_schema import AuthenticatedUser
from utils.auth_utils import decode_access_token
from utils.exceptions import UnauthenticatedError, ForbiddenError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    if not token:
        raise UnauthenticatedError()

    payload = decode_access_token(token, settings)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise UnauthenticatedError("Invalid or expired session token")

    user = await db.get(User, user_id)
    if user is None:
        raise UnauthenticatedError("Invalid token or user")

    return AuthenticatedUser(id=user.id, email=user.email, account_type=user.account_type)


def forbid_creators(current_user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
    if current_user.account_type == AccountType.CREATOR:
        raise ForbiddenError("Creators are not allowed to create jobs")
    return current_user
