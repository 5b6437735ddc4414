"""Importers turning spreadsheet and database rows into :class:`Bottle` records.

Every numeric column is coerced here (unparseable prices become ``0``, missing
counts become ``1``) so the grouping and statistics code can trust its input.
"""
from __future__ import annotations

import io
import re
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional, Sequence

import pandas as pd
from dateutil import parser as date_parser

from .models import DEFAULT_SIZE, DEFAULT_STATUS, Bottle

# Positional layout of the collection spreadsheet (columns A to P).
SHEET_COLUMNS = (
    "name",
    "quantity",
    "country",
    "type",
    "region",
    "distillery",
    "age",
    "purchase_date",
    "abv",
    "size",
    "purchase_price",
    "status",
    "batch",
    "notes",
    "current_value",
    "replacement_cost",
)

# Header keywords per field, most specific first.  Fields are resolved in this
# order and a column claimed by one field is not offered to the next, so
# "Replacement Cost" is never mistaken for the purchase "cost" column.
HEADER_KEYWORDS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "replacement_cost": ("replacement cost", "replacement"),
    "current_value": ("current value", "value"),
    "purchase_price": ("purchase price", "price", "cost"),
    "quantity": ("count", "quantity", "qty"),
    "country": ("country of origin", "country"),
    "type": ("category", "style", "type"),
    "region": ("region",),
    "distillery": ("distillery",),
    "age": ("age",),
    "purchase_date": ("purchase date", "purchased"),
    "abv": ("abv",),
    "size": ("volume", "size"),
    "status": ("status", "opened", "closed"),
    "batch": ("errata", "batch"),
    "notes": ("notes",),
}

_LEADING_INT = re.compile(r"^\s*[-+]?\d+")
_LEADING_FLOAT = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)")


class SheetRowParser:
    """Parse one positional spreadsheet row into a :class:`Bottle`."""

    def parse_row(self, row: Sequence[object]) -> Optional[Bottle]:
        """Return a bottle for ``row`` or ``None`` when the row has no name.

        Short rows are padded so trailing optional columns (notes, current
        value, replacement cost) may be omitted.
        """

        cells = [_clean_string(value) for value in row][: len(SHEET_COLUMNS)]
        cells += [""] * (len(SHEET_COLUMNS) - len(cells))
        values = dict(zip(SHEET_COLUMNS, cells))

        if not values["name"]:
            return None

        return Bottle(
            name=values["name"],
            quantity=_parse_quantity(values["quantity"]),
            country=values["country"],
            type=values["type"],
            region=values["region"],
            distillery=values["distillery"],
            age=values["age"],
            purchase_date=values["purchase_date"],
            abv=_parse_number(values["abv"]) or 0.0,
            size=values["size"] or DEFAULT_SIZE,
            purchase_price=_parse_price(values["purchase_price"]) or 0.0,
            status=values["status"].lower() or DEFAULT_STATUS,
            batch=values["batch"],
            notes=values["notes"],
            current_value=_parse_price(values["current_value"]) or 0.0,
            replacement_cost=_parse_price(values["replacement_cost"]),
        )

    def parse_rows(self, rows: Iterable[Sequence[object]]) -> list[Bottle]:
        bottles = []
        for row in rows:
            bottle = self.parse_row(row)
            if bottle is not None:
                bottles.append(bottle)
        return bottles


class SpreadsheetImporter:
    """Load bottles from a spreadsheet export.

    The importer accepts CSV text (as downloaded from Google Sheets), a local
    CSV file or an Excel workbook.  The first row is the header: columns are
    matched to bottle fields by keyword and, when no column looks like a name
    column, the fixed positional layout is used instead.
    """

    def __init__(self, row_parser: Optional[SheetRowParser] = None) -> None:
        self.row_parser = row_parser or SheetRowParser()

    def load_csv_text(self, text: str) -> list[Bottle]:
        if not text.strip():
            return []
        dataframe = pd.read_csv(io.StringIO(text), header=None, dtype=str, keep_default_na=False, skip_blank_lines=True)
        return self.load_dataframe(dataframe)

    def load_file(self, path: Path, sheet_name: str | int = 0) -> list[Bottle]:
        """Read a ``.csv`` or Excel workbook from disk."""

        path = Path(path)
        if path.suffix.lower() in {".xlsx", ".xlsm", ".xls"}:
            dataframe = pd.read_excel(path, sheet_name=sheet_name, header=None, dtype=str)
        else:
            dataframe = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=True)
        return self.load_dataframe(dataframe)

    def load_dataframe(self, dataframe: pd.DataFrame) -> list[Bottle]:
        if dataframe.empty:
            return []
        dataframe = dataframe.fillna("")
        header = [_clean_string(value).lower() for value in dataframe.iloc[0].tolist()]
        body = dataframe.iloc[1:]
        columns = resolve_columns(header)
        return self.row_parser.parse_rows(self._iter_rows(body, columns))

    @staticmethod
    def _iter_rows(body: pd.DataFrame, columns: Optional[dict[str, int]]) -> Iterator[list[object]]:
        for _, row in body.iterrows():
            cells = row.tolist()
            if columns is None:
                yield cells
                continue
            yield [cells[columns[field]] if field in columns else "" for field in SHEET_COLUMNS]


def resolve_columns(header: Sequence[str]) -> Optional[dict[str, int]]:
    """Map bottle fields to header positions, or ``None`` for positional rows."""

    claimed: set[int] = set()
    columns: dict[str, int] = {}
    for field, keywords in HEADER_KEYWORDS.items():
        index = _find_column(header, keywords, claimed)
        if index is not None:
            columns[field] = index
            claimed.add(index)
    if "name" not in columns:
        return None
    return columns


def _find_column(header: Sequence[str], keywords: Sequence[str], claimed: set[int]) -> Optional[int]:
    for keyword in keywords:
        for index, title in enumerate(header):
            if index not in claimed and title == keyword:
                return index
    for keyword in keywords:
        for index, title in enumerate(header):
            if index not in claimed and keyword in title:
                return index
    return None


class DatabaseRowMapper:
    """Map a row of the ``liquor`` table onto a :class:`Bottle`."""

    def map_row(self, row: Mapping[str, object]) -> Bottle:
        price_cost = _parse_number(row.get("price_cost")) or 0.0
        replacement = _parse_number(row.get("replacement_cost")) or None
        status = _clean_string(row.get("opened_closed")).lower()
        return Bottle(
            name=_clean_string(row.get("name")),
            quantity=_parse_quantity(row.get("count")),
            country=_clean_string(row.get("country_of_origin")),
            type=_clean_string(row.get("category_style")),
            region=_clean_string(row.get("region")),
            distillery=_clean_string(row.get("distillery")),
            age=_clean_string(row.get("age")),
            purchase_date=format_purchase_date(row.get("purchased_approx")),
            abv=_parse_number(row.get("abv")) or 0.0,
            size=_clean_string(row.get("volume")) or DEFAULT_SIZE,
            purchase_price=price_cost,
            status=status or DEFAULT_STATUS,
            batch=_clean_string(row.get("errata")),
            notes="",
            current_value=replacement or price_cost,
            replacement_cost=replacement,
        )


def bottle_to_sheet_row(bottle: Bottle) -> list[str]:
    """Serialise a bottle into the positional spreadsheet layout."""

    return [
        bottle.name,
        str(bottle.quantity),
        bottle.country,
        bottle.type,
        bottle.region,
        bottle.distillery,
        bottle.age,
        bottle.purchase_date,
        _format_number(bottle.abv),
        bottle.size,
        f"${bottle.purchase_price:.2f}",
        bottle.status,
        bottle.batch,
        bottle.notes,
        f"${bottle.current_value:.2f}",
        "" if bottle.replacement_cost is None else f"${bottle.replacement_cost:.2f}",
    ]


def format_purchase_date(value: object) -> str:
    """Return ``value`` as ``M/D/YYYY``; unparseable text is kept verbatim."""

    stringified = _clean_string(value)
    if not stringified:
        return ""
    try:
        parsed = date_parser.parse(stringified)
    except (ValueError, OverflowError):
        return stringified
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


# ---------------------------------------------------------------------------
# Helper utilities
# ---------------------------------------------------------------------------

def _clean_string(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    return str(value).strip()


def _parse_number(value: object) -> float | None:
    match = _LEADING_FLOAT.match(_clean_string(value))
    if match is None:
        return None
    return float(match.group(0))


def _parse_price(value: object) -> float | None:
    return _parse_number(_clean_string(value).replace("$", "").replace(",", ""))


def _parse_quantity(value: object) -> int:
    match = _LEADING_INT.match(_clean_string(value))
    if match is None:
        return 1
    return max(int(match.group(0)), 1)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
