# core/config.py

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    DATABASE_URL: str = "sqlite+aiosqlite:///./app.db"
    DB_ECHO: bool = False

    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_REDIRECT_URI: str = ""

    FRONTEND_URL: str = "http://localhost:3000"
    EMAIL_VERIFICATION_ENABLED: bool = False

    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = "noreply@example.com"
    MAIL_FROM_NAME: str = "Collab Platform"
    MAIL_PORT: int = 587
    MAIL_SERVER: str = ""
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            DATABASE_URL=os.getenv("DATABASE_URL", cls.model_fields["DATABASE_URL"].default),
            DB_ECHO=_env_bool("DB_ECHO"),
            JWT_SECRET=os.getenv("JWT_SECRET", ""),
            JWT_ALGORITHM=os.getenv("JWT_ALGORITHM", "HS256"),
            ACCESS_TOKEN_EXPIRE_MINUTES=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24)),
            GOOGLE_CLIENT_ID=os.getenv("GOOGLE_CLIENT_ID", ""),
            GOOGLE_CLIENT_SECRET=os.getenv("GOOGLE_CLIENT_SECRET", ""),
            GOOGLE_REDIRECT_URI=os.getenv("GOOGLE_REDIRECT_URI", ""),
            FRONTEND_URL=os.getenv("FRONTEND_URL", "http://localhost:3000"),
            EMAIL_VERIFICATION_ENABLED=_env_bool("EMAIL_VERIFICATION_ENABLED"),
            MAIL_USERNAME=os.getenv("MAIL_USERNAME", ""),
            MAIL_PASSWORD=os.getenv("MAIL_PASSWORD", ""),
            MAIL_FROM=os.getenv("MAIL_FROM", "noreply@example.com"),
            MAIL_FROM_NAME=os.getenv("MAIL_FROM_NAME", "Collab Platform"),
            MAIL_PORT=int(os.getenv("MAIL_PORT", 587)),
            MAIL_SERVER=os.getenv("MAIL_SERVER", ""),
            MAIL_STARTTLS=_env_bool("MAIL_STARTTLS", True),
            MAIL_SSL_TLS=_env_bool("MAIL_SSL_TLS"),
            CORS_ORIGINS=[
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the environment; used as a FastAPI dependency."""
    return Settings.from_env()
