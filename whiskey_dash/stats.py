"""Portfolio statistics for the collection dashboard."""
from __future__ import annotations

import re
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .models import Bottle, CollectionStats

PLACEHOLDER = "-"

_FIRST_NUMBER = re.compile(r"(\d+)")


def compute_stats(bottles: Iterable[Bottle]) -> CollectionStats:
    """Reduce the collection into dashboard totals and breakdowns.

    ``current_value`` is already a per-record total and is summed as is, while
    purchase price and replacement cost are per bottle and get multiplied by
    the quantity.  When a record has no replacement cost its ``current_value``
    is used in its place and is still multiplied by the quantity, matching the
    figures the dashboard has always shown.
    """

    collection = list(bottles)

    total_bottles = sum(bottle.quantity for bottle in collection)
    total_value = sum(bottle.current_value for bottle in collection)
    total_replacement_cost = sum(
        _replacement_cost_or_value(bottle) * bottle.quantity for bottle in collection
    )
    total_investment = sum(bottle.investment() for bottle in collection)

    country_breakdown: dict[str, int] = defaultdict(int)
    type_breakdown: dict[str, int] = defaultdict(int)
    distillery_breakdown: dict[str, int] = defaultdict(int)
    for bottle in collection:
        country_breakdown[bottle.country] += bottle.quantity
        type_breakdown[bottle.type] += bottle.quantity
        if bottle.distillery != PLACEHOLDER:
            distillery_breakdown[bottle.distillery] += bottle.quantity

    return CollectionStats(
        total_bottles=total_bottles,
        total_value=total_value,
        total_replacement_cost=total_replacement_cost,
        total_investment=total_investment,
        total_gain_loss=total_value - total_investment,
        average_age=average_age(collection),
        country_breakdown=dict(country_breakdown),
        type_breakdown=dict(type_breakdown),
        distillery_breakdown=dict(distillery_breakdown),
    )


def average_age(bottles: Iterable[Bottle]) -> float:
    """Mean of the first number in each age statement.

    Records with an empty or ``-`` age are left out.  Any other age without a
    number (``NAS``, for example) still counts, as zero.
    """

    ages = [_age_in_years(bottle.age) for bottle in bottles if bottle.age and bottle.age != PLACEHOLDER]
    if not ages:
        return 0.0
    return sum(ages) / len(ages)


def _age_in_years(age: str) -> int:
    match = _FIRST_NUMBER.search(age)
    return int(match.group(1)) if match else 0


def _replacement_cost_or_value(bottle: Bottle) -> float:
    if bottle.replacement_cost is not None:
        return bottle.replacement_cost
    return bottle.current_value


def format_currency(amount: float) -> str:
    """Render ``amount`` as whole US dollars, e.g. ``$1,235`` or ``-$50``.

    Small negative amounts keep their sign after rounding: ``-0.4`` is ``-$0``.
    """

    rounded = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded.is_signed() else ""
    return f"{sign}${abs(rounded):,}"


def format_percentage(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.1f}%"


__all__ = ["PLACEHOLDER", "average_age", "compute_stats", "format_currency", "format_percentage"]
