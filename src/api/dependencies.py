"""FastAPI dependencies for authentication, household context and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import ForbiddenError, UnauthorizedError
from src.models.enums import UserRole
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.email import EmailService
from src.services.household import HouseholdContext
from src.services.household import get_household_context as resolve_household_context
from src.services.household_service import HouseholdService
from src.services.llm import LLMService
from src.services.oauth import GoogleOAuthClient
from src.services.recipe_generator import RecipeGenerator

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise UnauthorizedError("Not authorized, no token")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Invalid authentication credentials")

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise UnauthorizedError("Invalid authentication credentials")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise UnauthorizedError("User not found")
    if not user.is_active:
        raise UnauthorizedError("Account is disabled")

    return user


def get_household_context(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> HouseholdContext:
    """Scope of the current request: the active household, or personal data."""
    context = resolve_household_context(db, current_user.id)
    if context is None:
        raise UnauthorizedError("User not found")
    return context


def get_current_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Require the admin role."""
    if current_user.role != UserRole.ADMIN.value:
        raise ForbiddenError("Admin access required")
    return current_user


def get_llm_service() -> LLMService:
    """Get LLM service instance."""
    return LLMService()


def get_email_service() -> EmailService:
    """Get email service instance."""
    return EmailService()


def get_oauth_client() -> GoogleOAuthClient:
    """Get Google OAuth client instance."""
    return GoogleOAuthClient()


def get_household_service(
    db: Annotated[Session, Depends(get_db)],
) -> HouseholdService:
    """Get household service with dependencies."""
    return HouseholdService(db)


def get_recipe_generator(
    db: Annotated[Session, Depends(get_db)],
    llm_service: Annotated[LLMService, Depends(get_llm_service)],
) -> RecipeGenerator:
    """Get recipe generator with dependencies."""
    return RecipeGenerator(db, llm_service)
