"""
Dashboard reporting over the full delivery list.

Pipeline: filter -> sort -> aggregate (whole matched set) -> paginate.
Everything here is a pure function of its arguments; the same inputs always
give the same page and the same aggregates.
"""

from __future__ import annotations

import math
import unicodedata
from datetime import date
from typing import Any, Iterable, List, Optional, Sequence

from core.money import ZERO, d

from ..dataclasses import (
    ASC,
    DESC,
    PAGE_SIZE,
    Aggregates,
    ReportFilters,
    SortSpec,
    ViewResult,
)
from .computation import parse_delivery_date

NUMERIC_COLUMNS = {
    "weightKg": "weight_kg",
    "pricePerKg": "price_per_kg",
    "totalAriary": "total_ariary",
}
TEXT_COLUMNS = {
    "client": "client",
    "departureLocation": "departure_location",
    "destination": "destination",
    "goods": "goods",
}
SORTABLE_COLUMNS = {"date": "date", **NUMERIC_COLUMNS, **TEXT_COLUMNS}

SEARCH_FIELDS = ("client", "departure_location", "destination", "goods")


class InvalidSortColumn(ValueError):
    pass


def normalize_column(column: Optional[str]) -> Optional[str]:
    """Map a wire or snake_case column name to its wire name; None/'' means unsorted."""
    if not column:
        return None
    if column in SORTABLE_COLUMNS:
        return column
    for wire, attr in SORTABLE_COLUMNS.items():
        if attr == column:
            return wire
    raise InvalidSortColumn(f"Cannot sort by '{column}'. Allowed: {', '.join(SORTABLE_COLUMNS)}.")


def _record_date(record) -> Optional[date]:
    return parse_delivery_date(_as_date_text(getattr(record, "date", None)))


def _as_date_text(value: Any) -> Any:
    # model rows carry date objects, imported rows may carry raw text
    if isinstance(value, date):
        return value.isoformat()
    return value


# ---------- filtering ----------
def matches_date_range(record, filters: ReportFilters) -> bool:
    if not filters.has_date_range:
        return True
    record_date = _record_date(record)
    if record_date is None:
        return False
    if filters.start_date is not None and record_date < filters.start_date:
        return False
    if filters.end_date is not None and record_date > filters.end_date:
        return False
    return True


def matches_search(record, filters: ReportFilters) -> bool:
    term = (filters.search_term or "").lower()
    if not term:
        return True
    return any(term in str(getattr(record, name, "") or "").lower() for name in SEARCH_FIELDS)


def filter_deliveries(deliveries: Iterable[Any], filters: ReportFilters) -> List[Any]:
    return [r for r in deliveries if matches_date_range(r, filters) and matches_search(r, filters)]


# ---------- sorting ----------
def collation_key(text: str) -> tuple:
    """
    Approximate locale-aware ordering: accents and case are ignored first,
    then used to break ties so the order stays total and stable.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text)


def sort_deliveries(deliveries: Sequence[Any], sort: SortSpec) -> List[Any]:
    """
    Sort a matched set. Without a column the records come back newest first
    (reverse of creation order).
    """
    newest_first = list(reversed(deliveries))
    column = normalize_column(sort.column)
    if column is None:
        return newest_first
    reverse = sort.direction == DESC

    if column == "date":
        dated = [r for r in newest_first if _record_date(r) is not None]
        undated = [r for r in newest_first if _record_date(r) is None]
        # unparseable dates stay at the end in both directions
        return sorted(dated, key=_record_date, reverse=reverse) + undated

    attr = SORTABLE_COLUMNS[column]
    if column in NUMERIC_COLUMNS:
        return sorted(newest_first, key=lambda r: d(getattr(r, attr) or ZERO), reverse=reverse)
    return sorted(newest_first, key=lambda r: collation_key(str(getattr(r, attr) or "")), reverse=reverse)


# ---------- aggregation ----------
def aggregate(deliveries: Iterable[Any]) -> Aggregates:
    total_revenue = ZERO
    total_weight = ZERO
    for r in deliveries:
        total_revenue += d(r.total_ariary)
        total_weight += d(r.weight_kg)
    average = total_revenue / total_weight if total_weight > ZERO else ZERO
    return Aggregates(
        total_revenue=total_revenue,
        total_weight=total_weight,
        average_price_per_kg=average,
    )


# ---------- pagination ----------
def total_pages_for(total_matched: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total_matched / page_size)


def paginate(deliveries: Sequence[Any], page: int, page_size: int = PAGE_SIZE) -> List[Any]:
    start = (page - 1) * page_size
    return list(deliveries[start:start + page_size])


def build_view(
    all_deliveries: Sequence[Any],
    filters: Optional[ReportFilters] = None,
    sort: Optional[SortSpec] = None,
    page: int = 1,
) -> ViewResult:
    """
    Build one dashboard page.

    Args:
        all_deliveries: every delivery, in creation order
        filters: date range (inclusive) and free-text search; None means no filter
        sort: column + direction; None or no column means newest first
        page: 1-indexed page number; values below 1 are treated as 1

    Returns:
        ViewResult with at most PAGE_SIZE items and aggregates computed over the
        whole matched set, not just the returned page.
    """
    filters = filters or ReportFilters()
    sort = sort or SortSpec()
    page = max(int(page or 1), 1)

    matched = sort_deliveries(filter_deliveries(all_deliveries, filters), sort)
    return ViewResult(
        items=paginate(matched, page),
        total_matched=len(matched),
        total_pages=total_pages_for(len(matched)),
        page=page,
        aggregates=aggregate(matched),
    )


def direction_or_default(direction: Optional[str]) -> str:
    value = (direction or ASC).strip().lower()
    if value not in (ASC, DESC):
        raise ValueError(f"Invalid sort direction '{direction}'. Use 'asc' or 'desc'.")
    return value
