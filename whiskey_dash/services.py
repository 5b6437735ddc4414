"""High-level application services orchestrating the whiskey_dash backend."""
from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

from .brands import BrandExtractor, BrandVocabulary, bottles_for_brand, extract_brand, group_by_brand
from .config import DATA_SOURCES, AppConfig
from .database import SQLiteRepository
from .dataset import StaticDataset
from .exceptions import DataSourceError, UnknownSourceError
from .expressions import group_by_expression
from .filters import FilterState, apply_filters, filter_options
from .models import Bottle, BrandGroup, CollectionStats, ExpressionGroup
from .sheets import GoogleSheetsClient
from .stats import compute_stats

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BrandDetail:
    """A brand group together with its expressions."""

    group: BrandGroup
    expressions: list[ExpressionGroup]


class CollectionService:
    """Loads the collection from a source and derives the dashboard views.

    Every view is recomputed from a fresh load of the requested source; nothing
    is cached between calls.
    """

    def __init__(
        self,
        config: AppConfig,
        dataset: StaticDataset,
        repository: SQLiteRepository,
        sheets_client: GoogleSheetsClient,
        extractor: Optional[BrandExtractor] = None,
    ) -> None:
        self._config = config
        self._dataset = dataset
        self._repository = repository
        self._sheets_client = sheets_client
        self._extractor = extractor or BrandExtractor()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def resolve_source(self, source: Optional[str]) -> str:
        name = (source or self._config.default_source).lower()
        if name not in DATA_SOURCES:
            raise UnknownSourceError(name)
        return name

    def load_bottles(self, source: Optional[str] = None) -> list[Bottle]:
        """Return the authoritative bottle list from ``source``.

        Failures of the underlying reader surface as :class:`DataSourceError`.
        """

        name = self.resolve_source(source)
        if name == "sheets":
            return self._sheets_client.fetch_bottles()
        if name == "database":
            try:
                return self._repository.list_bottles()
            except sqlite3.Error as exc:
                raise DataSourceError(name, f"Database read failed: {exc}") from exc
        return self._dataset.load()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def bottles(self, filters: Optional[FilterState] = None, source: Optional[str] = None) -> list[Bottle]:
        return apply_filters(self.load_bottles(source), filters)

    def filter_options(self, source: Optional[str] = None) -> dict[str, list[str]]:
        return filter_options(self.load_bottles(source))

    def stats(self, source: Optional[str] = None) -> CollectionStats:
        return compute_stats(self.load_bottles(source))

    def brands(self, source: Optional[str] = None) -> list[BrandGroup]:
        return group_by_brand(self.load_bottles(source), self._extractor)

    def brand_detail(self, brand: str, source: Optional[str] = None) -> Optional[BrandDetail]:
        """Return the group and expressions of ``brand`` or ``None`` if absent."""

        members = bottles_for_brand(self.load_bottles(source), brand, self._extractor)
        if not members:
            return None
        group = group_by_brand(members, self._extractor)[0]
        return BrandDetail(group=group, expressions=group_by_expression(members))

    def expressions(self, source: Optional[str] = None) -> list[ExpressionGroup]:
        return group_by_expression(self.load_bottles(source))

    def brand_of(self, name: str) -> str:
        """Return the brand ``name`` is grouped under by this service."""

        return extract_brand(name, self._extractor)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add_bottle(self, bottle: Bottle, source: Optional[str] = None) -> str:
        """Append ``bottle`` to ``source`` and return the source name used."""

        name = self.resolve_source(source)
        if name == "sheets":
            self._sheets_client.append_bottle(bottle)
        elif name == "database":
            try:
                self._repository.append_bottle(bottle)
            except sqlite3.Error as exc:
                raise DataSourceError(name, f"Database write failed: {exc}") from exc
        else:
            try:
                self._dataset.append(bottle)
            except OSError as exc:
                raise DataSourceError(name, f"Dataset write failed: {exc}") from exc
        logger.info("Added %s (%d bottles) to %s", bottle.name, bottle.quantity, name)
        return name

    # ------------------------------------------------------------------
    # Sync workflows
    # ------------------------------------------------------------------
    def sync_from_sheets(self) -> int:
        """Overwrite the static dataset with the spreadsheet contents."""

        return self._sync_from("sheets")

    def sync_from_database(self) -> int:
        """Overwrite the static dataset with the ``liquor`` table contents."""

        return self._sync_from("database")

    def _sync_from(self, source: str) -> int:
        bottles = self.load_bottles(source)
        try:
            written = self._dataset.save(bottles)
        except OSError as exc:
            raise DataSourceError("static", f"Dataset write failed: {exc}") from exc
        logger.info("Synced %d bottles from %s into %s", written, source, self._dataset.path)
        return written


def build_service(config: AppConfig) -> tuple[CollectionService, SQLiteRepository]:
    """Wire a :class:`CollectionService` from ``config``.

    The repository is returned as well so the caller can close it.
    """

    repository = SQLiteRepository(config.database_file)
    repository.initialise_schema()
    extractor = None
    if config.brand_rules_file is not None:
        extractor = BrandExtractor(BrandVocabulary.from_file(config.brand_rules_file))
    service = CollectionService(
        config,
        StaticDataset(config.data_file),
        repository,
        GoogleSheetsClient(config),
        extractor,
    )
    return service, repository
