"""Group bottles into expressions (same name = same expression)."""
from __future__ import annotations

from typing import Iterable

from .collation import collation_key
from .models import Bottle, ExpressionGroup


def group_by_expression(bottles: Iterable[Bottle]) -> list[ExpressionGroup]:
    """Partition ``bottles`` by exact name and total each partition.

    Records keep their input order inside a group and the first one becomes
    the representative bottle.  Groups are returned sorted by name.
    """

    partitions: dict[str, list[Bottle]] = {}
    for bottle in bottles:
        partitions.setdefault(bottle.name, []).append(bottle)

    groups = [
        ExpressionGroup(
            expression_name=name,
            bottles=members,
            total_quantity=sum(bottle.quantity for bottle in members),
            sizes=sorted({bottle.size for bottle in members}),
            representative_bottle=members[0],
        )
        for name, members in partitions.items()
    ]
    groups.sort(key=lambda group: collation_key(group.expression_name))
    return groups


def bottles_for_expression(bottles: Iterable[Bottle], expression_name: str) -> list[Bottle]:
    return [bottle for bottle in bottles if bottle.name == expression_name]
