# utils/google_oauth.py

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token
from google_auth_oauthlib.flow import Flow

from core.config import Settings
from utils.exceptions import (
    InvalidFederatedTokenError,
    IdentityProviderUnavailableError,
    InternalError,
)

logger = logging.getLogger(__name__)

GOOGLE_SCOPES = ["openid", "profile", "email"]
GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True)
class GoogleIdentity:
    email: str
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None


class GoogleOAuthClient:
    def __init__(self, settings: Settings):
        self.client_id = settings.GOOGLE_CLIENT_ID
        self.client_secret = settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = settings.GOOGLE_REDIRECT_URI

    def authorization_url(self) -> str:
        if not self.client_id or not self.redirect_uri:
            raise InternalError("Google OAuth is not configured", error="Internal server error")

        flow = Flow.from_client_config(
            {
                "web": {
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "auth_uri": GOOGLE_AUTH_URI,
                    "token_uri": GOOGLE_TOKEN_URI,
                    "redirect_uris": [self.redirect_uri],
                }
            },
            scopes=GOOGLE_SCOPES,
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )
        url, _state = flow.authorization_url(access_type="offline")
        return url

    def _verify(self, token: str) -> dict:
        return google_id_token.verify_oauth2_token(token, google_requests.Request(), audience=self.client_id)

    async def verify_id_token(self, token: str) -> GoogleIdentity:
        if not self.client_id:
            raise IdentityProviderUnavailableError("Google OAuth is not configured")

        try:
            payload = await run_in_threadpool(self._verify, token)
        except google_exceptions.TransportError:
            logger.exception("Could not reach Google to verify an ID token")
            raise IdentityProviderUnavailableError()
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            # malformed, bad signature, wrong audience/issuer, expired
            logger.warning(f"Rejected Google ID token: {e}")
            raise InvalidFederatedTokenError()

        email = payload.get("email")
        if not email:
            raise InvalidFederatedTokenError()

        return GoogleIdentity(
            email=email,
            given_name=payload.get("given_name"),
            family_name=payload.get("family_name"),
            picture=payload.get("picture"),
        )
