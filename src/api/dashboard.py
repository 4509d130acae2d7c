"""Dashboard API endpoints."""

from collections import Counter
from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import get_household_context
from src.database import get_db
from src.models.enums import PantryCategory, StorageLocation
from src.models.pantry import PantryItem
from src.schemas.common import ApiResponse
from src.schemas.dashboard import ActivityEntry, DashboardOverview, LowStockEntry
from src.services.dates import as_utc, days_until
from src.services.household import HouseholdContext, scope_filter

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

LOW_STOCK_THRESHOLD = 2
EXPIRING_SOON_DAYS = 5
DANGER_DAYS = 2
TOP_LOW_STOCK = 5
RECENT_ACTIVITY = 10
DEFAULT_UNIT = "count"


def expiry_status(item: PantryItem, now: datetime) -> str:
    """``danger`` within 2 days (or past), ``warn`` within 5, otherwise ``ok``."""
    if item.expiration_date is None:
        return "ok"
    days = days_until(item.expiration_date, now)
    if days <= DANGER_DAYS:
        return "danger"
    if days <= EXPIRING_SOON_DAYS:
        return "warn"
    return "ok"


def format_expiry(item: PantryItem, now: datetime) -> str:
    """Short date for display; the year only when it differs from now."""
    if item.expiration_date is None:
        return "N/A"
    expires = as_utc(item.expiration_date)
    label = f"{expires:%b} {expires.day}"
    if expires.year != now.year:
        label = f"{label}, {expires.year}"
    return label


@router.get("/overview", response_model=ApiResponse[DashboardOverview])
def get_overview(
    context: Annotated[HouseholdContext, Depends(get_household_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Pantry summary for the current scope."""
    now = datetime.now(UTC)
    expiring_cutoff = now + timedelta(days=EXPIRING_SOON_DAYS)
    items = (
        db.query(PantryItem)
        .filter(*scope_filter(PantryItem, context))
        .order_by(PantryItem.updated_at.desc(), PantryItem.id.desc())
        .all()
    )

    low_stock = [i for i in items if i.quantity <= LOW_STOCK_THRESHOLD]
    top_low_stock = sorted(low_stock, key=lambda i: i.quantity)[:TOP_LOW_STOCK]
    expiring_soon = [
        i for i in items if i.expiration_date and as_utc(i.expiration_date) <= expiring_cutoff
    ]

    location_counts = Counter(i.storage_location or StorageLocation.PANTRY.value for i in items)
    category_counts = Counter(i.category or PantryCategory.OTHER.value for i in items)

    overview = DashboardOverview(
        low_stock=len(low_stock),
        low_stock_items=[
            LowStockEntry(id=i.id, item=i.name, qty=i.quantity, unit=i.unit or DEFAULT_UNIT)
            for i in top_low_stock
        ],
        expiring_soon=len(expiring_soon),
        pantry_size=len(items),
        recent_activity=[
            ActivityEntry(
                id=i.id,
                item=i.name,
                qty=i.quantity,
                unit=i.unit or DEFAULT_UNIT,
                expires=format_expiry(i, now),
                status=expiry_status(i, now),
            )
            for i in items[:RECENT_ACTIVITY]
        ],
        location_counts=dict(location_counts),
        category_counts=dict(category_counts),
    )
    return ApiResponse(data=overview)
