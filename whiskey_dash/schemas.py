"""Pydantic schemas and response serialisers for the API.

Responses are built from plain dictionaries.  Price and value fields are only
included when the request's :class:`ViewContext` is authorized; this hides
numbers from casual visitors and is not an access-control boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from .models import DEFAULT_SIZE, DEFAULT_STATUS, Bottle, BrandGroup, CollectionStats, ExpressionGroup
from .stats import format_currency, format_percentage

PRICE_FIELDS = ("purchase_price", "current_value", "replacement_cost")


@dataclass(frozen=True)
class ViewContext:
    """Presentation state passed explicitly to every serialiser."""

    authorized: bool = False


class BottlePayload(BaseModel):
    """Request body for appending a bottle to the collection."""

    name: str = Field("", description="Free-text product name, e.g. 'Elijah Craig Barrel Proof'")
    distillery: str = Field("", description="Producing distillery")
    quantity: int = Field(1, ge=1)
    country: str = ""
    type: str = ""
    region: str = ""
    age: str = ""
    purchase_date: str = ""
    abv: float = Field(0.0, ge=0, le=100)
    size: str = DEFAULT_SIZE
    purchase_price: float = Field(0.0, ge=0)
    status: str = DEFAULT_STATUS
    batch: str = ""
    notes: str = ""
    current_value: float = Field(0.0, ge=0, description="Value of all bottles on this record")
    replacement_cost: Optional[float] = Field(None, ge=0, description="Per-bottle replacement cost")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Elijah Craig Barrel Proof",
                "distillery": "Heaven Hill",
                "quantity": 2,
                "country": "US",
                "type": "Bourbon",
                "region": "Kentucky",
                "age": "12 years",
                "purchase_date": "3/14/2024",
                "abv": 62.2,
                "size": "750ml",
                "purchase_price": 75.0,
                "status": "unopened",
                "batch": "C923",
                "current_value": 180.0,
            }
        }

    def to_bottle(self) -> Bottle:
        return Bottle(**self.model_dump())


def serialize_bottle(bottle: Bottle, context: ViewContext) -> dict[str, object]:
    payload = bottle.to_dict()
    if not context.authorized:
        for name in PRICE_FIELDS:
            payload.pop(name, None)
        return payload
    payload.setdefault("replacement_cost", None)
    payload["value_per_bottle"] = bottle.display_value()
    return payload


def serialize_expression(group: ExpressionGroup, context: ViewContext) -> dict[str, object]:
    return {
        "expression_name": group.expression_name,
        "total_quantity": group.total_quantity,
        "sizes": group.sizes,
        "representative_bottle": serialize_bottle(group.representative_bottle, context),
        "bottles": [serialize_bottle(bottle, context) for bottle in group.bottles],
    }


def serialize_brand(group: BrandGroup, context: ViewContext) -> dict[str, object]:
    payload: dict[str, object] = {
        "brand": group.brand,
        "total_bottles": group.total_bottles,
        "expressions": group.expressions,
        "bottles": [serialize_bottle(bottle, context) for bottle in group.bottles],
    }
    if context.authorized:
        payload["total_value"] = group.total_value
        payload["total_investment"] = group.total_investment
    return payload


def serialize_stats(stats: CollectionStats, context: ViewContext) -> dict[str, object]:
    payload: dict[str, object] = {
        "total_bottles": stats.total_bottles,
        "average_age": stats.average_age,
        "country_breakdown": stats.country_breakdown,
        "type_breakdown": stats.type_breakdown,
        "distillery_breakdown": stats.distillery_breakdown,
    }
    if context.authorized:
        payload.update(
            {
                "total_value": stats.total_value,
                "total_replacement_cost": stats.total_replacement_cost,
                "total_investment": stats.total_investment,
                "total_gain_loss": stats.total_gain_loss,
                "gain_loss_percentage": stats.gain_loss_percentage,
                "formatted": {
                    "total_value": format_currency(stats.total_value),
                    "total_replacement_cost": format_currency(stats.total_replacement_cost),
                    "total_investment": format_currency(stats.total_investment),
                    "total_gain_loss": format_currency(stats.total_gain_loss),
                    "gain_loss_percentage": format_percentage(stats.gain_loss_percentage),
                },
            }
        )
    return payload


def serialize_new_bottle(bottle: Bottle, source: str, brand: str) -> dict[str, object]:
    return {
        "success": True,
        "message": "Whiskey added successfully",
        "source": source,
        "name": bottle.name,
        "brand": brand,
    }
