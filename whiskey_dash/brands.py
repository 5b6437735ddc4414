"""Brand inference and brand-level grouping.

Brand names are not stored with a bottle; they are inferred from the free-text
bottle name by an ordered cascade of rules.  The first rule that matches
decides how many leading words of the name make up the brand.  The two lookup
tables feeding the rules live in :class:`BrandVocabulary` so the heuristic can
be extended from a JSON file without touching the cascade.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from .collation import collation_key
from .models import Bottle, BrandGroup

logger = logging.getLogger(__name__)

DEFAULT_SINGLE_WORD_BRANDS = (
    "Ardbeg",
    "Laphroaig",
    "Weller",
    "Macallan",
    "Glenfiddich",
    "Glenlivet",
    "Lagavulin",
    "Bowmore",
    "Talisker",
    "Highland",
    "Lowland",
    "Speyside",
)

DEFAULT_DESCRIPTORS = (
    "Barrel",
    "Single",
    "Double",
    "Triple",
    "Cask",
    "Small",
    "Limited",
    "Special",
    "Reserve",
    "Traigh",
    "Bhan",
    "Wee",
    "Beastie",
    "Cardeas",
    "Sherry",
    "Oak",
    "Proof",
    "Strength",
)

_LEADING_DIGITS = re.compile(r"^\d+")
_YEAR = re.compile(r"^\d{4}$")
_AGE_STATEMENT = re.compile(r"^\d+[yY][ro]?$")
_APOSTROPHES = ("'", "’")


@dataclass(frozen=True)
class BrandVocabulary:
    """Lookup tables consulted by the brand rules."""

    single_word_brands: frozenset[str] = frozenset(DEFAULT_SINGLE_WORD_BRANDS)
    descriptors: tuple[str, ...] = DEFAULT_DESCRIPTORS

    def is_single_word_brand(self, token: str) -> bool:
        return token in self.single_word_brands

    def has_descriptor(self, token: str) -> bool:
        return any(descriptor in token for descriptor in self.descriptors)

    @classmethod
    def from_file(cls, path: Path) -> "BrandVocabulary":
        """Load the tables from a JSON document.

        The document may define ``single_word_brands`` and ``descriptors`` as
        lists of strings.  A missing key keeps the built-in table.
        """

        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
        brands = payload.get("single_word_brands", DEFAULT_SINGLE_WORD_BRANDS)
        descriptors = payload.get("descriptors", DEFAULT_DESCRIPTORS)
        logger.info("Loaded brand vocabulary from %s (%d brands, %d descriptors)", path, len(brands), len(descriptors))
        return cls(single_word_brands=frozenset(brands), descriptors=tuple(descriptors))


def is_qualifier(token: str) -> bool:
    """Return ``True`` for tokens that start an age, year or number qualifier."""

    return bool(_LEADING_DIGITS.match(token) or _YEAR.match(token) or _AGE_STATEMENT.match(token))


@dataclass(frozen=True)
class BrandRule:
    """A predicate over the name tokens and the brand width it implies."""

    name: str
    predicate: Callable[[Sequence[str], BrandVocabulary], bool]
    width: int


def _possessive(tokens: Sequence[str], _: BrandVocabulary) -> bool:
    return any(mark in tokens[0] for mark in _APOSTROPHES)


def _known_single_word(tokens: Sequence[str], vocabulary: BrandVocabulary) -> bool:
    return vocabulary.is_single_word_brand(tokens[0])


def _qualifier_follows(tokens: Sequence[str], _: BrandVocabulary) -> bool:
    return len(tokens) >= 2 and is_qualifier(tokens[1])


def _descriptor_follows(tokens: Sequence[str], vocabulary: BrandVocabulary) -> bool:
    return len(tokens) >= 2 and vocabulary.has_descriptor(tokens[1])


def _proper_noun_pair(tokens: Sequence[str], _: BrandVocabulary) -> bool:
    # A third token that is a qualifier or descriptor confirms the pair, but
    # the pair is kept either way once the second word looks like a name.
    if len(tokens) < 2 or not tokens[1]:
        return False
    first = tokens[1][0]
    return first == first.upper()


DEFAULT_RULES: tuple[BrandRule, ...] = (
    BrandRule("possessive", _possessive, 1),
    BrandRule("single_word_brand", _known_single_word, 1),
    BrandRule("qualifier", _qualifier_follows, 1),
    BrandRule("descriptor", _descriptor_follows, 1),
    BrandRule("proper_noun_pair", _proper_noun_pair, 2),
)


class BrandExtractor:
    """Evaluates the brand rules in order; the first match wins."""

    def __init__(
        self,
        vocabulary: Optional[BrandVocabulary] = None,
        rules: Sequence[BrandRule] = DEFAULT_RULES,
    ) -> None:
        self.vocabulary = vocabulary or BrandVocabulary()
        self.rules = tuple(rules)

    def extract(self, name: str) -> str:
        tokens = re.split(r"\s+", name)
        for rule in self.rules:
            if rule.predicate(tokens, self.vocabulary):
                return " ".join(tokens[: rule.width])
        return tokens[0]


_default_extractor = BrandExtractor()


def extract_brand(name: str, extractor: Optional[BrandExtractor] = None) -> str:
    """Return the brand inferred from a bottle name.

    Examples::

        extract_brand("Elijah Craig Barrel Proof")   # "Elijah Craig"
        extract_brand("Blanton's Gold")              # "Blanton's"
        extract_brand("Laphroaig 10 Cask Strength")  # "Laphroaig"
    """

    return (extractor or _default_extractor).extract(name)


def group_by_brand(bottles: Iterable[Bottle], extractor: Optional[BrandExtractor] = None) -> list[BrandGroup]:
    """Partition ``bottles`` by inferred brand and total each partition.

    ``total_value`` sums :attr:`Bottle.current_value` as stored (it already
    covers every bottle on the record) while ``total_investment`` multiplies
    the per-bottle purchase price by the quantity.
    """

    partitions: dict[str, list[Bottle]] = {}
    for bottle in bottles:
        partitions.setdefault(extract_brand(bottle.name, extractor), []).append(bottle)

    groups = [
        BrandGroup(
            brand=brand,
            bottles=members,
            total_bottles=sum(bottle.quantity for bottle in members),
            total_value=sum(bottle.current_value for bottle in members),
            total_investment=sum(bottle.investment() for bottle in members),
            expressions=sorted({bottle.name for bottle in members}),
        )
        for brand, members in partitions.items()
    ]
    groups.sort(key=lambda group: collation_key(group.brand))
    return groups


def bottles_for_brand(
    bottles: Iterable[Bottle],
    brand: str,
    extractor: Optional[BrandExtractor] = None,
) -> list[Bottle]:
    return [bottle for bottle in bottles if extract_brand(bottle.name, extractor) == brand]


__all__ = [
    "BrandExtractor",
    "BrandRule",
    "BrandVocabulary",
    "DEFAULT_RULES",
    "bottles_for_brand",
    "extract_brand",
    "group_by_brand",
    "is_qualifier",
]
