"""SQLite persistence layer for the whiskey_dash backend.

The repository reads the ``liquor`` table that mirrors the collection
spreadsheet and appends new bottles to it.  It relies on the standard library
:mod:`sqlite3` module to keep dependencies lightweight.
"""
from __future__ import annotations

import sqlite3
from pathlib import Path

from .importers import DatabaseRowMapper
from .models import Bottle


class SQLiteRepository:
    """Encapsulates all SQLite access for the application."""

    source_name = "database"

    def __init__(self, database_path: Path, mapper: DatabaseRowMapper | None = None) -> None:
        self._database_path = database_path
        self._connection = sqlite3.connect(database_path, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        self._mapper = mapper or DatabaseRowMapper()

    def close(self) -> None:
        """Close the underlying SQLite connection."""

        self._connection.close()

    # ------------------------------------------------------------------
    # Schema management
    # ------------------------------------------------------------------
    def initialise_schema(self) -> None:
        """Create the ``liquor`` table if it does not exist."""

        cursor = self._connection.cursor()
        cursor.executescript(
            """
            CREATE TABLE IF NOT EXISTS liquor (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                count INTEGER NOT NULL DEFAULT 1,
                country_of_origin TEXT,
                category_style TEXT,
                region TEXT,
                distillery TEXT,
                age TEXT,
                purchased_approx TEXT,
                abv REAL,
                volume TEXT,
                price_cost REAL,
                opened_closed TEXT,
                errata TEXT,
                replacement_cost REAL
            );
            """
        )
        self._connection.commit()

    # ------------------------------------------------------------------
    # Bottle persistence
    # ------------------------------------------------------------------
    def list_bottles(self) -> list[Bottle]:
        """Return every bottle ordered by name and distillery."""

        cursor = self._connection.cursor()
        rows = cursor.execute(
            """
            SELECT
                name, count, country_of_origin, category_style, region, distillery,
                age, purchased_approx, abv, volume, price_cost, opened_closed,
                errata, replacement_cost
            FROM liquor
            ORDER BY name, distillery
            """
        ).fetchall()
        return [self._mapper.map_row(dict(row)) for row in rows]

    def append_bottle(self, bottle: Bottle) -> None:
        """Insert a single bottle; existing rows are never modified."""

        self._connection.execute(
            """
            INSERT INTO liquor (
                name, count, country_of_origin, category_style, region, distillery,
                age, purchased_approx, abv, volume, price_cost, opened_closed,
                errata, replacement_cost
            ) VALUES (
                :name, :count, :country_of_origin, :category_style, :region, :distillery,
                :age, :purchased_approx, :abv, :volume, :price_cost, :opened_closed,
                :errata, :replacement_cost
            )
            """,
            {
                "name": bottle.name,
                "count": bottle.quantity,
                "country_of_origin": bottle.country,
                "category_style": bottle.type,
                "region": bottle.region,
                "distillery": bottle.distillery,
                "age": bottle.age,
                "purchased_approx": bottle.purchase_date,
                "abv": bottle.abv,
                "volume": bottle.size,
                "price_cost": bottle.purchase_price,
                "opened_closed": bottle.status,
                "errata": bottle.batch,
                "replacement_cost": bottle.replacement_cost,
            },
        )
        self._connection.commit()
