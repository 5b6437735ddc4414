"""The compiled static collection shipped with the repository."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from .exceptions import DataSourceError
from .models import Bottle

logger = logging.getLogger(__name__)


class StaticDataset:
    """JSON file holding the authoritative bottle list.

    The sync commands overwrite the file from Google Sheets or the database;
    :meth:`append` adds a single record without touching existing ones.
    """

    source_name = "static"

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Bottle]:
        """Return every bottle in the file; a missing file is an empty collection."""

        if not self._path.exists():
            logger.warning("Static dataset %s does not exist; using an empty collection", self._path)
            return []
        try:
            with open(self._path, encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise DataSourceError(self.source_name, f"Unable to read {self._path}: {exc}") from exc
        return [Bottle.from_dict(item) for item in payload]

    def save(self, bottles: Iterable[Bottle]) -> int:
        records = [bottle.to_dict() for bottle in bottles]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as handle:
            json.dump(records, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        logger.info("Wrote %d bottles to %s", len(records), self._path)
        return len(records)

    def append(self, bottle: Bottle) -> None:
        bottles = self.load()
        bottles.append(bottle)
        self.save(bottles)
