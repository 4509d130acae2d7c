"""Authentication service for JWT, password handling and account verification."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import transaction
from src.errors import ForbiddenError, UnauthorizedError, ValidationFailedError
from src.models.user import User, default_preferences
from src.services.dates import as_utc
from src.services.email import EmailService

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user or not user.password_hash:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def new_verification_token() -> tuple[str, datetime]:
    """Random token and its expiry."""
    expires_at = datetime.now(UTC) + timedelta(minutes=settings.verification_token_expiry_minutes)
    return secrets.token_hex(32), expires_at


def register_user(
    db: Session,
    email_service: EmailService,
    email: str,
    password: str,
    name: str,
) -> User:
    """Create an unverified account and email its confirmation link.

    The user row and the email form one unit: if sending fails the account is
    rolled back and the error propagates.
    """
    if get_user_by_email(db, email):
        raise ValidationFailedError("User already exists")

    token, expires_at = new_verification_token()
    with transaction(db):
        user = User(
            email=normalize_email(email),
            password_hash=get_password_hash(password),
            name=name.strip(),
            is_verified=False,
            verification_token=token,
            verification_token_expires_at=expires_at,
            preferences=default_preferences(),
        )
        db.add(user)
        db.flush()
        email_service.send_verification_email(user.email, user.name, token)

    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user


def login_user(db: Session, email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue a token.

    Raises:
        UnauthorizedError: Unknown email or wrong password.
        ForbiddenError: Correct password but the email is not verified yet.
    """
    user = authenticate_user(db, email, password)
    if not user:
        raise UnauthorizedError("Invalid credentials")
    if not user.is_verified:
        raise ForbiddenError("Please verify your email before logging in")
    if not user.is_active:
        raise ForbiddenError("Account is disabled")

    user.last_login = datetime.now(UTC)
    db.commit()
    db.refresh(user)
    return user, create_access_token(user.id, user.email)


def verify_email(db: Session, token: str) -> User:
    """Mark the account holding ``token`` as verified."""
    if not token:
        raise ValidationFailedError("Invalid or expired verification token")
    user = db.query(User).filter(User.verification_token == token).first()
    if (
        user is None
        or user.verification_token_expires_at is None
        or as_utc(user.verification_token_expires_at) <= datetime.now(UTC)
    ):
        raise ValidationFailedError("Invalid or expired verification token")

    user.is_verified = True
    user.verification_token = None
    user.verification_token_expires_at = None
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.id} verified their email")
    return user


def resend_verification(db: Session, email_service: EmailService, email: str) -> None:
    """Issue a fresh token to an unverified account.

    Does nothing for unknown or already verified addresses so callers can
    answer the same way in every case.
    """
    user = get_user_by_email(db, email)
    if user is None or user.is_verified:
        return

    token, expires_at = new_verification_token()
    with transaction(db):
        user.verification_token = token
        user.verification_token_expires_at = expires_at
        email_service.send_verification_email(user.email, user.name, token)


def _display_name(profile: dict[str, Any]) -> str:
    name = (profile.get("name") or "").strip()
    if len(name) < 2:
        name = profile["email"].split("@")[0]
    return name[:50]


def get_or_create_google_user(db: Session, profile: dict[str, Any]) -> User:
    """Resolve a Google profile to a local account.

    Looks up by Google id, then links an existing account with the same
    email, otherwise creates a verified account without a password. Linking
    and creating both require Google to have verified the email.
    """
    google_id = str(profile["sub"])
    user = db.query(User).filter(User.google_id == google_id).first()
    if user is None:
        if not profile.get("email_verified"):
            raise ForbiddenError("Google account email is not verified")
        user = get_user_by_email(db, profile["email"])
        if user is not None:
            user.google_id = google_id
            user.is_verified = True
            logger.info(f"Linked Google account to user {user.id}")
        else:
            user = User(
                email=normalize_email(profile["email"]),
                google_id=google_id,
                name=_display_name(profile),
                is_verified=True,
                preferences=default_preferences(),
            )
            db.add(user)
            logger.info(f"Created user from Google account {google_id}")

    user.last_login = datetime.now(UTC)
    db.commit()
    db.refresh(user)
    return user
