"""Refresh the static dataset from Google Sheets or the SQLite database.

Usage::

    python -m whiskey_dash.sync sheets
    python -m whiskey_dash.sync database
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import load_config
from .exceptions import WhiskeyDashError
from .services import build_service

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sync the whiskey collection into the static dataset")
    parser.add_argument("source", choices=("sheets", "database"), help="Where to read the collection from")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_config()
    service, repository = build_service(config)
    try:
        if args.source == "sheets":
            written = service.sync_from_sheets()
        else:
            written = service.sync_from_database()
    except WhiskeyDashError as exc:
        logger.error("Sync from %s failed: %s", args.source, exc.message)
        return 1
    finally:
        repository.close()

    logger.info("Updated %s with %d bottles", config.data_file, written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
