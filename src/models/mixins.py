"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import declared_attr


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class OwnershipMixin:
    """Mixin for records visible to a single user or to a whole household.

    ``household_id`` decides the scope: set means household data, null means
    personal data of ``user_id``. ``created_by_*`` records the actual author.
    """

    @declared_attr
    def user_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    @declared_attr
    def household_id(cls):
        return Column(
            Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=True, index=True
        )

    @declared_attr
    def created_by_user_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=True)

    created_by_name = Column(String(255), nullable=True)
