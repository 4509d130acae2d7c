"""Household and membership models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Household(Base, TimestampMixin):
    """A named group of users sharing pantry, shopping list and recipe history."""

    __tablename__ = "households"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    invite_code = Column(String(16), unique=True, nullable=False, index=True)
    invite_code_expires_at = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    members = relationship(
        "HouseholdMember",
        back_populates="household",
        cascade="all, delete-orphan",
        order_by=lambda: [HouseholdMember.joined_at, HouseholdMember.id],
    )

    def get_member(self, user_id: int) -> "HouseholdMember | None":
        """Return the membership of ``user_id``, if any."""
        return next((m for m in self.members if m.user_id == user_id), None)


class HouseholdMember(Base):
    """Membership of a user in a household."""

    __tablename__ = "household_members"
    __table_args__ = (
        UniqueConstraint("household_id", "user_id", name="uq_household_member"),
    )

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = Column(String(20), nullable=False, default="member")  # "owner" | "member"
    joined_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    name = Column(String(50), nullable=False)  # Display name at join time

    # Relationships
    household = relationship("Household", back_populates="members")
    user = relationship("User", back_populates="memberships")
