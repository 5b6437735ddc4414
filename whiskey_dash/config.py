"""Application configuration utilities for the whiskey_dash backend.

This module centralises environment-driven configuration so the rest of the
code base does not need to read environment variables directly.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load any variables defined in a local .env file. The call is idempotent and
# inexpensive, so importing it at module import time keeps the API ergonomic.
load_dotenv()

DATA_SOURCES = ("static", "sheets", "database")


@dataclass(frozen=True)
class AppConfig:
    """Strongly-typed container for runtime configuration.

    Attributes:
        project_root: Root directory of the project. Used to derive default
            paths so the app works out of the box after cloning the repo.
        data_file: JSON file holding the compiled static collection.
        database_file: SQLite database containing the ``liquor`` table.
        brand_rules_file: Optional JSON file overriding the brand lookup
            tables (known single-word brands and expression descriptors).
        default_source: Source used when a request does not name one; one of
            ``static``, ``sheets`` or ``database``.
        collection_password: Shared password that unlocks price and value
            fields in API responses.  ``None`` keeps them hidden for everyone.
        sheets_id: Google Sheets document ID of the collection spreadsheet.
        sheets_gid: Sheet (tab) ID used for the CSV export.
        sheets_range: A1 range used when appending rows.
        sheets_access_token: OAuth bearer token required to append rows.
    """

    project_root: Path
    data_file: Path
    database_file: Path
    brand_rules_file: Optional[Path]
    default_source: str
    collection_password: Optional[str]
    sheets_id: Optional[str]
    sheets_gid: str
    sheets_range: str
    sheets_access_token: Optional[str]

    @property
    def sheets_csv_url(self) -> Optional[str]:
        """Return the public CSV export URL of the configured sheet."""

        if not self.sheets_id:
            return None
        return f"https://docs.google.com/spreadsheets/d/{self.sheets_id}/export?format=csv&gid={self.sheets_gid}"


def load_config() -> AppConfig:
    """Create a new :class:`AppConfig` instance based on environment settings.

    Environment variables override the default values, allowing users to
    customise the runtime without touching the source code.
    """

    project_root = Path(__file__).resolve().parent.parent
    data_file = Path(
        getenv_with_default(
            "WHISKEY_DASH_DATA_FILE",
            project_root / "data" / "whiskey_collection.json",
        )
    )
    database_file = Path(
        getenv_with_default(
            "WHISKEY_DASH_DB_FILE",
            project_root / "whiskey_dash.db",
        )
    )
    brand_rules = getenv_with_default("WHISKEY_DASH_BRAND_RULES_FILE")

    default_source = getenv_with_default("WHISKEY_DASH_DEFAULT_SOURCE", "static").lower()
    if default_source not in DATA_SOURCES:
        raise ValueError(f"WHISKEY_DASH_DEFAULT_SOURCE must be one of {', '.join(DATA_SOURCES)}")

    # Ensure the directories exist so later code can safely create files.
    database_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.parent.mkdir(parents=True, exist_ok=True)

    return AppConfig(
        project_root=project_root,
        data_file=data_file,
        database_file=database_file,
        brand_rules_file=Path(brand_rules) if brand_rules else None,
        default_source=default_source,
        collection_password=getenv_with_default("WHISKEY_DASH_PASSWORD"),
        sheets_id=getenv_with_default("GOOGLE_SHEETS_ID"),
        sheets_gid=getenv_with_default("GOOGLE_SHEETS_GID", "0"),
        sheets_range=getenv_with_default("GOOGLE_SHEETS_RANGE", "Sheet1!A:P"),
        sheets_access_token=getenv_with_default("GOOGLE_SHEETS_ACCESS_TOKEN"),
    )


def getenv_with_default(name: str, default: Optional[Path | str] = None) -> Optional[str]:
    """Return the value of an environment variable or a sensible default.

    ``None`` values are propagated so callers can make explicit decisions about
    optional configuration values. Paths are converted to strings, keeping the
    return type uniform and easy to serialise.
    """

    from os import getenv

    value = getenv(name)
    if value is not None:
        return value
    if default is None:
        return None
    return str(default)
