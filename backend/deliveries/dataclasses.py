from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from core.money import ZERO

PAGE_SIZE = 10

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class PreparedDelivery:
    """A validated delivery ready for persistence (the store assigns the id)."""
    date: date
    client: str
    departure_location: str
    destination: str
    goods: str
    weight_kg: Decimal
    price_per_kg: Decimal
    total_ariary: Decimal
    vehicle_id: Any


@dataclass
class DeliveryRecord:
    """In-memory delivery row; `date` is kept as entered so bad rows can be represented."""
    date: Any
    client: str
    departure_location: str
    destination: str
    goods: str
    weight_kg: Decimal
    price_per_kg: Decimal
    total_ariary: Decimal
    vehicle_id: Any = None
    id: Any = None


@dataclass(frozen=True)
class ReportFilters:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search_term: str = ""

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None


@dataclass(frozen=True)
class SortSpec:
    column: Optional[str] = None
    direction: str = ASC


@dataclass(frozen=True)
class Aggregates:
    total_revenue: Decimal = ZERO
    total_weight: Decimal = ZERO
    average_price_per_kg: Decimal = ZERO


@dataclass
class ViewResult:
    items: List[Any]
    total_matched: int
    total_pages: int
    page: int
    aggregates: Aggregates = field(default_factory=Aggregates)


@dataclass(frozen=True)
class DashboardState:
    """
    Dashboard controls. Any filter change goes back to page 1; sorting keeps
    the current page.
    """
    filters: ReportFilters = field(default_factory=ReportFilters)
    sort: SortSpec = field(default_factory=SortSpec)
    page: int = 1

    def with_filters(self, **changes) -> "DashboardState":
        return replace(self, filters=replace(self.filters, **changes), page=1)

    def toggle_sort(self, column: str) -> "DashboardState":
        if self.sort.column == column:
            direction = DESC if self.sort.direction == ASC else ASC
            return replace(self, sort=SortSpec(column, direction))
        return replace(self, sort=SortSpec(column, ASC))

    def go_to(self, page: int) -> "DashboardState":
        return replace(self, page=page)

    def clear(self) -> "DashboardState":
        return DashboardState()
