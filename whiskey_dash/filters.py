"""Search, filter and sort helpers for the bottle list view."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from dateutil import parser as date_parser

from .models import Bottle, SortField, SortOrder
from .stats import PLACEHOLDER


@dataclass(slots=True)
class FilterState:
    """Criteria selected in the collection view.  Empty strings match all."""

    search: str = ""
    country: str = ""
    type: str = ""
    distillery: str = ""
    sort_by: SortField = SortField.NAME
    sort_order: SortOrder = SortOrder.ASC

    def matches(self, bottle: Bottle) -> bool:
        if self.search:
            needle = self.search.lower()
            haystacks = (bottle.name, bottle.distillery, bottle.batch)
            if not any(needle in value.lower() for value in haystacks):
                return False
        if self.country and bottle.country != self.country:
            return False
        if self.type and bottle.type != self.type:
            return False
        if self.distillery and bottle.distillery != self.distillery:
            return False
        return True


def apply_filters(bottles: Iterable[Bottle], filters: Optional[FilterState] = None) -> list[Bottle]:
    """Return the matching bottles as a new, sorted list."""

    filters = filters or FilterState()
    selected = [bottle for bottle in bottles if filters.matches(bottle)]
    selected.sort(
        key=lambda bottle: _sort_value(bottle, filters.sort_by),
        reverse=filters.sort_order == SortOrder.DESC,
    )
    return selected


def filter_options(bottles: Iterable[Bottle]) -> dict[str, list[str]]:
    """Distinct values offered by the country, type and distillery pickers."""

    collection = list(bottles)
    return {
        "countries": sorted({bottle.country for bottle in collection}),
        "types": sorted({bottle.type for bottle in collection}),
        "distilleries": sorted(
            {bottle.distillery for bottle in collection if bottle.distillery and bottle.distillery != PLACEHOLDER}
        ),
    }


def _sort_value(bottle: Bottle, sort_by: SortField) -> tuple[int, object]:
    # The leading flag keeps missing values together ahead of real ones.
    if sort_by == SortField.PURCHASE_DATE:
        parsed = _parse_purchase_date(bottle.purchase_date)
        return (0, datetime.min) if parsed is None else (1, parsed)
    value = getattr(bottle, sort_by.value)
    if value is None:
        return (0, 0.0)
    if isinstance(value, str):
        return (1, value.lower())
    return (1, value)


def _parse_purchase_date(value: str) -> Optional[datetime]:
    if not value or not value.strip():
        return None
    try:
        return date_parser.parse(value).replace(tzinfo=None)
    except (ValueError, OverflowError):
        return None


__all__ = ["FilterState", "apply_filters", "filter_options"]
