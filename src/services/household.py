"""Household context resolution and household/personal data scoping.

Every pantry item, shopping list item and recipe history entry belongs to
exactly one scope:

* ``PersonalScope`` - the user's private data, stored with ``household_id``
  null.
* ``HouseholdScope`` - data shared by all members of a household, stored
  with ``household_id`` set. ``user_id`` / ``created_by_*`` then only record
  who added the row.

The two never overlap: a personal query never returns household rows and a
household query never returns personal rows.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from src.models.user import User


@dataclass(frozen=True)
class PersonalScope:
    """Data owned by a single user."""

    user_id: int


@dataclass(frozen=True)
class HouseholdScope:
    """Data shared by a household."""

    household_id: int


Scope = PersonalScope | HouseholdScope


@dataclass(frozen=True)
class HouseholdContext:
    """Who is acting and which scope their data lives in."""

    user_id: int
    user_name: str
    household_id: int | None = None

    @property
    def scope(self) -> Scope:
        if self.household_id is not None:
            return HouseholdScope(self.household_id)
        return PersonalScope(self.user_id)


def get_household_context(db: Session, user_id: int) -> HouseholdContext | None:
    """Load the user and return their current context, or None if they don't exist."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        return None
    return context_for_user(user)


def context_for_user(user: User) -> HouseholdContext:
    """Build the context of an already-loaded user."""
    return HouseholdContext(
        user_id=user.id,
        user_name=user.name,
        household_id=user.active_household_id,
    )


def scope_filter(model: Any, context: HouseholdContext) -> list[Any]:
    """SQLAlchemy criteria restricting ``model`` rows to the context's scope.

    ``model`` must carry the ownership columns (see ``OwnershipMixin``).
    """
    scope = context.scope
    if isinstance(scope, HouseholdScope):
        return [model.household_id == scope.household_id]
    if isinstance(scope, PersonalScope):
        return [model.user_id == scope.user_id, model.household_id.is_(None)]
    raise TypeError(f"Unknown scope: {scope!r}")


def item_attribution(context: HouseholdContext) -> dict[str, Any]:
    """Ownership fields to stamp on a new row created in the context's scope."""
    return {
        "user_id": context.user_id,
        "household_id": context.household_id,
        "created_by_user_id": context.user_id,
        "created_by_name": context.user_name,
    }
