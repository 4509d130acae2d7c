"""User model."""

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


def default_preferences() -> dict:
    """Preferences of a user who has not set any."""
    return {
        "dietary_preferences": [],
        "allergies": [],
        "custom_allergies": "",
        "avoid_ingredients": "",
        "calorie_target": 0,
        "protein_target": 0,
        "cuisine_preferences": "",
    }


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "password_hash IS NOT NULL OR google_id IS NOT NULL",
            name="ck_users_has_credential",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    google_id = Column(String(255), unique=True, nullable=True, index=True)
    name = Column(String(50), nullable=False)
    role = Column(String(20), nullable=False, default="user")  # "user" | "admin"
    is_active = Column(Boolean, nullable=False, default=True)

    is_verified = Column(Boolean, nullable=False, default=False)
    verification_token = Column(String(64), nullable=True, index=True)
    verification_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    last_login = Column(DateTime(timezone=True), nullable=True)
    preferences = Column(JSON, nullable=True)

    active_household_id = Column(
        Integer, ForeignKey("households.id", ondelete="SET NULL", use_alter=True), nullable=True
    )

    # Relationships
    memberships = relationship(
        "HouseholdMember",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="HouseholdMember.joined_at",
    )

    @property
    def household_ids(self) -> list[int]:
        """IDs of every household the user belongs to, oldest membership first."""
        return [m.household_id for m in self.memberships]
