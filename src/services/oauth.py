"""Google OAuth 2.0 authorization-code flow."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import urlencode

import httpx
from jose import JWTError, jwt

from src.config import Settings, get_settings

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"  # noqa: S105
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"

STATE_EXPIRATION_MINUTES = 10


class OAuthError(Exception):
    """The provider refused the exchange or returned an unusable profile."""


class GoogleOAuthClient:
    """Builds the consent redirect and resolves callbacks into Google profiles."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.timeout = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.google_client_id and self.settings.google_client_secret)

    def create_state(self) -> str:
        """Signed, short-lived anti-CSRF state value."""
        payload = {
            "nonce": secrets.token_urlsafe(16),
            "exp": datetime.now(UTC) + timedelta(minutes=STATE_EXPIRATION_MINUTES),
        }
        return jwt.encode(payload, self.settings.session_secret, algorithm="HS256")

    def verify_state(self, state: str | None) -> bool:
        if not state:
            return False
        try:
            jwt.decode(state, self.settings.session_secret, algorithms=["HS256"])
        except JWTError:
            return False
        return True

    def authorization_url(self) -> str:
        params = {
            "client_id": self.settings.google_client_id,
            "redirect_uri": self.settings.google_redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": self.create_state(),
            "prompt": "select_account",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """Trade an authorization code for an access token."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.settings.google_client_id,
                    "client_secret": self.settings.google_client_secret,
                    "redirect_uri": self.settings.google_redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
            response.raise_for_status()
            data = response.json()

        access_token = data.get("access_token")
        if not access_token:
            raise OAuthError("Token response did not contain an access token")
        return access_token

    async def fetch_profile(self, access_token: str) -> dict[str, Any]:
        """Fetch the OpenID profile: ``{"sub", "email", "email_verified", "name"}``."""
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            response.raise_for_status()
            profile = response.json()

        if not profile.get("sub") or not profile.get("email"):
            raise OAuthError("Google profile is missing id or email")
        return profile

    async def resolve_profile(self, code: str) -> dict[str, Any]:
        """Run the full callback exchange for ``code``."""
        access_token = await self.exchange_code(code)
        return await self.fetch_profile(access_token)
