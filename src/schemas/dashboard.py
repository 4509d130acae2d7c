"""Dashboard schemas."""

from pydantic import BaseModel


class LowStockEntry(BaseModel):
    id: int
    item: str
    qty: float
    unit: str


class ActivityEntry(BaseModel):
    """Recently updated pantry item with its expiry status."""

    id: int
    item: str
    qty: float
    unit: str
    expires: str  # "Mar 4", "Jan 2, 2027" or "N/A"
    status: str  # "ok" | "warn" | "danger"


class DashboardOverview(BaseModel):
    """Pantry summary for the home screen."""

    low_stock: int
    low_stock_items: list[LowStockEntry]
    expiring_soon: int
    pantry_size: int
    recent_activity: list[ActivityEntry]
    location_counts: dict[str, int]
    category_counts: dict[str, int]
