"""Tests for household context resolution and data scoping."""

from datetime import UTC, datetime, timedelta

import pytest

from src.models.household import Household, HouseholdMember
from src.models.pantry import PantryItem
from src.services.household import (
    HouseholdContext,
    HouseholdScope,
    PersonalScope,
    context_for_user,
    get_household_context,
    item_attribution,
    scope_filter,
)


@pytest.fixture
def household(db, make_user):
    owner = make_user("owner@example.com", "Olive Owner")
    household = Household(
        name="Home",
        invite_code="ABCD1234",
        invite_code_expires_at=datetime.now(UTC) + timedelta(days=1),
        created_by=owner.id,
    )
    db.add(household)
    db.flush()
    db.add(
        HouseholdMember(household_id=household.id, user_id=owner.id, role="owner", name="Olive")
    )
    owner.active_household_id = household.id
    db.commit()
    return household


def test_context_scope():
    assert HouseholdContext(1, "Sam").scope == PersonalScope(user_id=1)
    assert HouseholdContext(1, "Sam", household_id=7).scope == HouseholdScope(household_id=7)


def test_get_household_context(db, make_user, household):
    loner = make_user("loner@example.com", "Lonely Luke")
    owner_id = household.created_by

    assert get_household_context(db, loner.id) == HouseholdContext(loner.id, "Lonely Luke", None)
    assert get_household_context(db, owner_id) == HouseholdContext(
        owner_id, "Olive Owner", household.id
    )
    assert get_household_context(db, 999999) is None


def test_item_attribution_in_household():
    context = HouseholdContext(user_id=3, user_name="Sam", household_id=9)
    assert item_attribution(context) == {
        "user_id": 3,
        "household_id": 9,
        "created_by_user_id": 3,
        "created_by_name": "Sam",
    }


def test_item_attribution_personal():
    context = HouseholdContext(user_id=3, user_name="Sam")
    assert item_attribution(context)["household_id"] is None


def test_scopes_never_overlap(db, make_user, household):
    owner_id = household.created_by
    member = make_user("member@example.com", "Max Member")
    personal = HouseholdContext(owner_id, "Olive Owner")
    shared = HouseholdContext(owner_id, "Olive Owner", household.id)
    member_shared = HouseholdContext(member.id, "Max Member", household.id)
    member_personal = HouseholdContext(member.id, "Max Member")

    db.add_all(
        [
            PantryItem(name="Own Jam", **item_attribution(personal)),
            PantryItem(name="Shared Milk", **item_attribution(shared)),
            PantryItem(name="Member Eggs", **item_attribution(member_shared)),
            PantryItem(name="Member Own Tea", **item_attribution(member_personal)),
        ]
    )
    db.commit()

    def names(context):
        rows = db.query(PantryItem).filter(*scope_filter(PantryItem, context)).all()
        return sorted(r.name for r in rows)

    assert names(personal) == ["Own Jam"]
    assert names(shared) == ["Member Eggs", "Shared Milk"]
    assert names(member_shared) == ["Member Eggs", "Shared Milk"]
    assert names(member_personal) == ["Member Own Tea"]


def test_context_for_user(make_user):
    user = make_user("solo@example.com", "Solo Sue")
    assert context_for_user(user) == HouseholdContext(user.id, "Solo Sue", None)
