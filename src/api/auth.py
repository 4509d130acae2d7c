"""Authentication API endpoints."""

import logging
from typing import Annotated
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_email_service, get_oauth_client
from src.config import get_settings
from src.database import get_db
from src.errors import ForbiddenError, UpstreamError
from src.models.user import User
from src.schemas.auth import (
    AuthResponse,
    ResendVerificationRequest,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.common import ApiResponse, MessageResponse
from src.services.auth import (
    create_access_token,
    get_or_create_google_user,
    login_user,
    register_user,
    resend_verification,
    verify_email,
)
from src.services.email import EmailService
from src.services.oauth import GoogleOAuthClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
):
    """Register a new user and send the verification email."""
    user = register_user(db, email_service, user_data.email, user_data.password, user_data.name)
    return ApiResponse(
        data=UserResponse.model_validate(user),
        message="Registration successful. Please check your email to verify your account.",
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user, token = login_user(db, credentials.email, credentials.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/verify-email", response_model=MessageResponse)
def verify(
    db: Annotated[Session, Depends(get_db)],
    token: str = Query(""),
):
    """Confirm an email address from the link in the verification email."""
    verify_email(db, token)
    return MessageResponse(message="Email verified successfully. You can now log in.")


@router.post("/resend-verification", response_model=MessageResponse)
def resend(
    request: ResendVerificationRequest,
    db: Annotated[Session, Depends(get_db)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
):
    """Send a new verification link to an unverified account."""
    resend_verification(db, email_service, request.email)
    return MessageResponse(
        message="If an unverified account exists for this email, a new link has been sent."
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return ApiResponse(data=UserResponse.model_validate(current_user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return MessageResponse(message="Logged out successfully")


# --- Google OAuth ---


def _frontend_redirect(path: str, **params: str) -> RedirectResponse:
    url = f"{get_settings().frontend_url}{path}?{urlencode(params)}"
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/google")
def google_login(
    oauth: Annotated[GoogleOAuthClient, Depends(get_oauth_client)],
):
    """Redirect to the Google consent screen."""
    if not oauth.is_configured:
        raise UpstreamError("Google sign-in is not configured")
    return RedirectResponse(oauth.authorization_url(), status_code=status.HTTP_302_FOUND)


@router.get("/google/callback")
async def google_callback(
    db: Annotated[Session, Depends(get_db)],
    oauth: Annotated[GoogleOAuthClient, Depends(get_oauth_client)],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """Finish Google sign-in and hand the token to the frontend."""
    if error or not code:
        return _frontend_redirect("/login", error="AuthenticationFailed")
    if not oauth.verify_state(state):
        return _frontend_redirect("/login", error="InvalidState")

    try:
        profile = await oauth.resolve_profile(code)
        user = get_or_create_google_user(db, profile)
    except ForbiddenError as e:
        logger.warning(f"Google sign-in refused: {e.detail}")
        db.rollback()
        return _frontend_redirect("/login", error="EmailNotVerified")
    except Exception as e:
        logger.error(f"Google sign-in failed: {e}")
        db.rollback()
        return _frontend_redirect("/login", error="ServerAuthError")

    token = create_access_token(user.id, user.email)
    return _frontend_redirect("/oauth-callback", token=token)
