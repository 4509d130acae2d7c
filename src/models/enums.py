"""Enums for model fields."""

from enum import Enum


class UserRole(str, Enum):
    """Account roles."""

    USER = "user"
    ADMIN = "admin"


class HouseholdRole(str, Enum):
    """Membership roles within a household."""

    OWNER = "owner"
    MEMBER = "member"

    def can_manage(self) -> bool:
        """Check if this role may edit household settings and membership."""
        return self == HouseholdRole.OWNER


class PantryCategory(str, Enum):
    """Pantry item categories."""

    DAIRY = "Dairy"
    PRODUCE = "Produce"
    MEAT = "Meat"
    SEAFOOD = "Seafood"
    BAKERY = "Bakery"
    FROZEN = "Frozen"
    CANNED_GOODS = "Canned Goods"
    GRAINS_PASTA = "Grains & Pasta"
    SNACKS = "Snacks"
    BEVERAGES = "Beverages"
    CONDIMENTS = "Condiments"
    SPICES = "Spices"
    OTHER = "Other"


class StorageLocation(str, Enum):
    """Where a pantry item is kept."""

    FRIDGE = "Fridge"
    FREEZER = "Freezer"
    PANTRY = "Pantry"
    COUNTER = "Counter"


class ShoppingPriority(str, Enum):
    """Shopping list item priority."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort weight, higher first."""
        return {"low": 0, "normal": 1, "high": 2}[self.value]


class MealType(str, Enum):
    """Meal slots in a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class FeedbackType(str, Enum):
    """Kinds of user feedback."""

    BUG = "bug"
    UI = "ui"
    WORKFLOW = "workflow"
    FEATURE = "feature"


class FeedbackStatus(str, Enum):
    """Feedback triage status."""

    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    WONT_FIX = "wont-fix"

    def is_terminal(self) -> bool:
        """Check if this status marks the feedback as finished."""
        return self in (FeedbackStatus.RESOLVED, FeedbackStatus.CLOSED)


class FeedbackPriority(str, Enum):
    """Feedback priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
