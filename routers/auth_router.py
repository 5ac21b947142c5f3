import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status

from core.config import Settings, get_settings
from dependencies.auth import get_current_user
from dependencies.services import get_user_service, get_email_service, get_google_client
from schemas.user_schema import (
    UserCreate, UserLogin, UserOut, EmailRequest, ResetPasswordForm,
    ChangePasswordForm, GoogleLoginRequest, AccountTypeUpdate, AuthenticatedUser,
)
from services.user_service import UserService
from utils.email_service import EmailService, dispatch_email
from utils.exceptions import AppError, InternalError, ValidationFailedError
from utils.google_oauth import GoogleOAuthClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

FORGOT_PASSWORD_MESSAGE = "If your email is registered, you will receive password reset instructions."


def auth_payload(message: str, user, token: str) -> dict:
    return {"message": message, "token": token, "user": UserOut.model_validate(user)}


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    background_tasks: BackgroundTasks,
    service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
    settings: Settings = Depends(get_settings),
):
    try:
        user, token = await service.create_user(user_data)
    except AppError:
        raise
    except Exception:
        logger.exception("Register error")
        raise InternalError("Internal server error during registration", error="Registration failed")

    if settings.EMAIL_VERIFICATION_ENABLED:
        background_tasks.add_task(
            dispatch_email, email_service.send_verification_email,
            user.email, user.verification_token, user.first_name,
        )
    return auth_payload("User registered successfully", user, token)


@router.post("/login")
async def login(user_data: UserLogin, service: UserService = Depends(get_user_service)):
    try:
        user, token = await service.authenticate_user(user_data.email, user_data.password)
    except AppError:
        raise
    except Exception:
        logger.exception("Login error")
        raise InternalError("Internal server error during login", error="Authentication failed")
    return auth_payload("Login successful", user, token)


@router.get("/verify-email/{token}")
async def verify_email(
    token: str,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    if not settings.EMAIL_VERIFICATION_ENABLED:
        return {"message": "Email verification is currently disabled."}
    try:
        user = await service.verify_email(token)
    except AppError:
        raise
    except Exception:
        logger.exception("Email verification error")
        raise InternalError("Internal server error during verification", error="Verification failed")
    return {"message": "Email verification successful", "user": UserOut.model_validate(user)}


@router.post("/resend-verification")
async def resend_verification(
    data: EmailRequest,
    background_tasks: BackgroundTasks,
    service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
    settings: Settings = Depends(get_settings),
):
    if not settings.EMAIL_VERIFICATION_ENABLED:
        return {"message": "Verification system is temporarily disabled."}
    try:
        user = await service.refresh_verification_token(data.email)
    except AppError:
        raise
    except Exception:
        logger.exception("Resend verification error")
        raise InternalError(
            "Internal server error while sending verification email", error="Verification failed"
        )

    background_tasks.add_task(
        dispatch_email, email_service.send_verification_email,
        user.email, user.verification_token, user.first_name,
    )
    return {"message": "Verification email sent successfully"}


@router.post("/forgot-password")
async def forgot_password(
    data: EmailRequest,
    background_tasks: BackgroundTasks,
    service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
):
    try:
        user = await service.send_reset_code(data.email)
    except AppError:
        raise
    except Exception:
        logger.exception("Forgot password error")
        raise InternalError(
            "Internal server error during password reset request", error="Password reset failed"
        )

    if user is not None:
        background_tasks.add_task(
            dispatch_email, email_service.send_password_reset_email,
            user.email, user.reset_password_token, user.first_name,
        )
    return {"message": FORGOT_PASSWORD_MESSAGE}


@router.post("/reset-password/{token}")
async def reset_password(
    token: str,
    form_data: ResetPasswordForm,
    service: UserService = Depends(get_user_service),
):
    try:
        await service.reset_password(token, form_data.password)
    except AppError:
        raise
    except Exception:
        logger.exception("Reset password error")
        raise InternalError("Internal server error during password reset", error="Password reset failed")
    return {"message": "Password has been reset successfully"}


@router.post("/change-password")
async def change_password(
    form_data: ChangePasswordForm,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    try:
        await service.change_password(current_user, form_data.old_password, form_data.new_password)
    except AppError:
        raise
    except Exception:
        logger.exception("Change password error")
        raise InternalError("Internal server error during password change", error="Password change failed")
    return {"message": "Password changed successfully"}


@router.get("/google/url")
async def google_auth_url(google: GoogleOAuthClient = Depends(get_google_client)):
    try:
        return {"url": google.authorization_url()}
    except AppError:
        raise
    except Exception:
        logger.exception("Google auth URL error")
        raise InternalError()


@router.post("/google/login")
async def login_with_google(
    data: GoogleLoginRequest,
    service: UserService = Depends(get_user_service),
    google: GoogleOAuthClient = Depends(get_google_client),
):
    if not data.id_token:
        raise ValidationFailedError("Google ID token is required", error="Authentication failed")
    try:
        identity = await google.verify_id_token(data.id_token)
        user, token = await service.login_with_google(identity)
    except AppError:
        raise
    except Exception:
        logger.exception("Google login error")
        raise InternalError("Internal server error during Google login", error="Authentication failed")
    return auth_payload("Login successful", user, token)


@router.patch("/account-type")
async def update_account_type(
    data: AccountTypeUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    try:
        user = await service.update_account_type(current_user, data.account_type)
    except AppError:
        raise
    except Exception:
        logger.exception("Update account type error")
        raise InternalError(
            "Internal server error while updating account type", error="Account type update failed"
        )
    return {"message": "Account type updated successfully", "user": UserOut.model_validate(user)}


@router.get("/me")
async def me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_by_id(current_user.id)
    return {"user": UserOut.model_validate(user)}
