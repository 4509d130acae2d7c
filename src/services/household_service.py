"""Household lifecycle: creation, invites, membership and ownership changes."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import transaction
from src.errors import ForbiddenError, NotFoundError, UpstreamError, ValidationFailedError
from src.models.enums import HouseholdRole
from src.models.household import Household, HouseholdMember
from src.models.pantry import PantryItem
from src.models.recipe import RecipeHistory
from src.models.shopping_list import ShoppingListItem
from src.models.user import User
from src.services.dates import as_utc

logger = logging.getLogger(__name__)

MAX_INVITE_CODE_ATTEMPTS = 10

# Tables whose rows are shared with a household and go away with it
HOUSEHOLD_SCOPED_MODELS = (PantryItem, ShoppingListItem, RecipeHistory)


def generate_invite_code() -> str:
    """Random 8-character uppercase hex code."""
    return secrets.token_hex(4).upper()


class HouseholdService:
    """Service for household membership operations.

    Every method that touches more than one row runs inside a single
    ``transaction`` so membership and active-household pointers never
    disagree.
    """

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    # Lookups

    def get(self, household_id: int) -> Household:
        household = self.db.query(Household).filter(Household.id == household_id).first()
        if household is None:
            raise NotFoundError("Household not found")
        return household

    def get_active(self, user: User) -> tuple[Household, str] | None:
        """The user's active household and their role in it, or None in personal mode."""
        if user.active_household_id is None:
            return None
        household = (
            self.db.query(Household).filter(Household.id == user.active_household_id).first()
        )
        if household is None:
            return None
        member = household.get_member(user.id)
        return household, member.role if member else HouseholdRole.MEMBER.value

    def list_for_user(self, user: User) -> list[dict[str, Any]]:
        """Summaries of every household the user belongs to."""
        return [
            {
                "id": m.household.id,
                "name": m.household.name,
                "role": m.role,
                "member_count": len(m.household.members),
            }
            for m in user.memberships
        ]

    # Lifecycle

    def create(self, user: User, name: str) -> Household:
        """Create a household owned by ``user`` and make it their active one."""
        name = name.strip()
        if not name:
            raise ValidationFailedError("Household name is required")

        with transaction(self.db):
            household = Household(
                name=name,
                invite_code=self._unique_invite_code(),
                invite_code_expires_at=self._invite_code_expiry(),
                created_by=user.id,
            )
            self.db.add(household)
            HouseholdMember(
                household=household,
                user=user,
                role=HouseholdRole.OWNER.value,
                name=user.name,
            )
            self.db.flush()
            user.active_household_id = household.id

        logger.info(f"User {user.id} created household {household.id}")
        return household

    def rename(self, user: User, household_id: int, name: str | None) -> Household:
        household = self.get(household_id)
        self._require_owner(household, user, "Only owners can update household settings")
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationFailedError("Household name is required")
            household.name = name
        self.db.commit()
        return household

    def join(self, user: User, invite_code: str) -> Household:
        """Add ``user`` to the household behind ``invite_code`` (case-insensitive)."""
        code = invite_code.strip().upper()
        if not code:
            raise ValidationFailedError("Invite code is required")

        household = self.db.query(Household).filter(Household.invite_code == code).first()
        if household is None:
            raise NotFoundError("Invalid invite code")
        if as_utc(household.invite_code_expires_at) < datetime.now(UTC):
            raise ValidationFailedError("Invite code has expired")
        if household.get_member(user.id) is not None:
            raise ValidationFailedError("You are already a member of this household")

        with transaction(self.db):
            HouseholdMember(
                household=household,
                user=user,
                role=HouseholdRole.MEMBER.value,
                name=user.name,
            )
            user.active_household_id = household.id

        logger.info(f"User {user.id} joined household {household.id}")
        return household

    def leave(self, user: User, household_id: int) -> None:
        """Remove ``user`` from a household.

        An owner leaving hands ownership to the earliest-joined remaining
        member. The last member leaving deletes the household.
        """
        household = self.get(household_id)
        member = household.get_member(user.id)
        if member is None:
            raise ValidationFailedError("You are not a member of this household")

        with transaction(self.db):
            remaining = [m for m in household.members if m.user_id != user.id]
            if member.role == HouseholdRole.OWNER.value and remaining:
                successor = remaining[0]
                successor.role = HouseholdRole.OWNER.value
                logger.info(
                    f"Ownership of household {household.id} moved from user {user.id} "
                    f"to user {successor.user_id}"
                )
            self._remove_membership(household, member)
            if not remaining:
                self._delete_household(household)

        logger.info(f"User {user.id} left household {household_id}")

    def remove_member(self, user: User, household_id: int, member_user_id: int) -> Household:
        household = self.get(household_id)
        self._require_owner(household, user, "Only owners can remove members")
        if member_user_id == user.id:
            raise ValidationFailedError("Use leave endpoint to remove yourself")
        member = household.get_member(member_user_id)
        if member is None:
            raise NotFoundError("Member not found")

        with transaction(self.db):
            self._remove_membership(household, member)

        logger.info(f"User {member_user_id} removed from household {household_id} by {user.id}")
        return household

    def regenerate_invite_code(self, user: User, household_id: int) -> Household:
        household = self.get(household_id)
        self._require_owner(household, user, "Only owners can regenerate invite codes")
        household.invite_code = self._unique_invite_code()
        household.invite_code_expires_at = self._invite_code_expiry()
        self.db.commit()
        return household

    def switch(self, user: User, household_id: int) -> Household:
        household = self.get(household_id)
        if household.get_member(user.id) is None:
            raise ForbiddenError("You are not a member of this household")
        user.active_household_id = household.id
        self.db.commit()
        return household

    def clear_active(self, user: User) -> None:
        """Switch ``user`` to personal mode."""
        user.active_household_id = None
        self.db.commit()

    def delete(self, user: User, household_id: int) -> None:
        """Delete a household, its shared data and every membership (owner only)."""
        household = self.get(household_id)
        self._require_owner(household, user, "Only owners can delete the household")

        with transaction(self.db):
            for member in list(household.members):
                self._remove_membership(household, member)
            self._delete_household(household)

        logger.info(f"Household {household_id} deleted by user {user.id}")

    # Internals

    def _require_owner(self, household: Household, user: User, message: str) -> None:
        member = household.get_member(user.id)
        if member is None or not HouseholdRole(member.role).can_manage():
            raise ForbiddenError(message)

    def _remove_membership(self, household: Household, member: HouseholdMember) -> None:
        """Drop a membership and repoint the user's active household if needed."""
        user = member.user
        household.members.remove(member)
        if user is not None:
            if member in user.memberships:
                user.memberships.remove(member)
            if user.active_household_id == household.id:
                user.active_household_id = user.household_ids[0] if user.memberships else None
        self.db.delete(member)

    def _delete_household(self, household: Household) -> None:
        for model in HOUSEHOLD_SCOPED_MODELS:
            self.db.query(model).filter(model.household_id == household.id).delete(
                synchronize_session=False
            )
        self.db.delete(household)

    def _unique_invite_code(self) -> str:
        for _ in range(MAX_INVITE_CODE_ATTEMPTS):
            code = generate_invite_code()
            taken = self.db.query(Household.id).filter(Household.invite_code == code).first()
            if taken is None:
                return code
        logger.error(f"No free invite code after {MAX_INVITE_CODE_ATTEMPTS} attempts")
        raise UpstreamError("Could not generate a unique invite code")

    def _invite_code_expiry(self) -> datetime:
        return datetime.now(UTC) + timedelta(hours=self.settings.invite_code_expiry_hours)
