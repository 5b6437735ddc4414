"""Domain models used by the whiskey_dash backend.

The classes defined here are lightweight data containers that do not know
anything about persistence or transport concerns.  Note the asymmetry in
:class:`Bottle`: ``current_value`` is the total for every bottle on the record
while ``purchase_price`` and ``replacement_cost`` are per bottle.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional


class BottleStatus(str, Enum):
    UNOPENED = "unopened"
    OPENED = "opened"
    FINISHED = "finished"


class BottleSize(str, Enum):
    ML_375 = "375ml"
    ML_700 = "700ml"
    ML_750 = "750ml"
    L_1 = "1L"
    L_175 = "1.75L"


class SortField(str, Enum):
    NAME = "name"
    PURCHASE_PRICE = "purchase_price"
    CURRENT_VALUE = "current_value"
    PURCHASE_DATE = "purchase_date"
    ABV = "abv"
    REPLACEMENT_COST = "replacement_cost"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_SIZE = BottleSize.ML_750.value
DEFAULT_STATUS = BottleStatus.UNOPENED.value


@dataclass(slots=True)
class Bottle:
    """One inventory line: one or more physically identical bottles.

    Attributes mirror the columns of the collection spreadsheet.  ``quantity``
    is always at least one; importers coerce missing counts before a record is
    built.
    """

    name: str
    quantity: int = 1
    country: str = ""
    type: str = ""
    region: str = ""
    distillery: str = ""
    age: str = ""
    purchase_date: str = ""
    abv: float = 0.0
    size: str = DEFAULT_SIZE
    purchase_price: float = 0.0
    status: str = DEFAULT_STATUS
    batch: str = ""
    notes: str = ""
    current_value: float = 0.0
    replacement_cost: Optional[float] = None

    def investment(self) -> float:
        """Return the amount paid for every bottle on this record."""

        return self.purchase_price * self.quantity

    def display_value(self) -> float:
        """Return the per-bottle value shown on a bottle card.

        The replacement cost is preferred.  Without it the collection-total
        :attr:`current_value` is spread across :attr:`quantity`.
        """

        if self.replacement_cost is not None:
            return self.replacement_cost
        return self.current_value / self.quantity

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        if self.replacement_cost is None:
            payload.pop("replacement_cost")
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "Bottle":
        known = {name: payload[name] for name in cls.__dataclass_fields__ if name in payload}
        return cls(**known)


@dataclass(slots=True)
class ExpressionGroup:
    """All bottles sharing an identical name.

    ``representative_bottle`` is the first record encountered and supplies
    the descriptive fields (distillery, region, age, abv) for display.  Members
    are assumed to agree on those fields; nothing enforces it.
    """

    expression_name: str
    bottles: list[Bottle]
    total_quantity: int
    sizes: list[str]
    representative_bottle: Bottle


@dataclass(slots=True)
class BrandGroup:
    """All bottles whose extracted brand matches."""

    brand: str
    bottles: list[Bottle]
    total_bottles: int
    total_value: float
    total_investment: float
    expressions: list[str]


@dataclass(slots=True)
class CollectionStats:
    """Portfolio-level totals derived from the full collection."""

    total_bottles: int = 0
    total_value: float = 0.0
    total_replacement_cost: float = 0.0
    total_investment: float = 0.0
    total_gain_loss: float = 0.0
    average_age: float = 0.0
    country_breakdown: dict[str, int] = field(default_factory=dict)
    type_breakdown: dict[str, int] = field(default_factory=dict)
    distillery_breakdown: dict[str, int] = field(default_factory=dict)

    @property
    def gain_loss_percentage(self) -> float:
        if self.total_investment <= 0:
            return 0.0
        return self.total_gain_loss / self.total_investment * 100


__all__ = [
    "Bottle",
    "BottleSize",
    "BottleStatus",
    "BrandGroup",
    "CollectionStats",
    "DEFAULT_SIZE",
    "DEFAULT_STATUS",
    "ExpressionGroup",
    "SortField",
    "SortOrder",
]
