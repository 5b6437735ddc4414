"""Google Sheets access for the whiskey_dash backend."""
from __future__ import annotations

import logging

import requests

from .config import AppConfig
from .exceptions import DataSourceError
from .importers import SpreadsheetImporter, bottle_to_sheet_row
from .models import Bottle

logger = logging.getLogger(__name__)

SHEETS_API_ENDPOINT = "https://sheets.googleapis.com/v4/spreadsheets"


class GoogleSheetsClient:
    """Read the collection spreadsheet and append new bottles to it."""

    source_name = "sheets"

    def __init__(self, config: AppConfig, importer: SpreadsheetImporter | None = None) -> None:
        self._config = config
        self._importer = importer or SpreadsheetImporter()

    # ------------------------------------------------------------------
    # Reads (public CSV export)
    # ------------------------------------------------------------------
    def fetch_bottles(self) -> list[Bottle]:
        """Download the sheet as CSV and parse every named row.

        The export endpoint needs no credentials as long as the sheet is
        shared by link.
        """

        url = self._config.sheets_csv_url
        if url is None:
            raise DataSourceError(self.source_name, "Google Sheets ID not configured")

        logger.info("Downloading collection CSV from Google Sheets")
        try:
            response = requests.get(url, timeout=30)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DataSourceError(self.source_name, f"CSV download failed: {exc}") from exc

        bottles = self._importer.load_csv_text(response.text)
        logger.info("Fetched %d bottles from Google Sheets", len(bottles))
        return bottles

    # ------------------------------------------------------------------
    # Writes (Sheets v4 API)
    # ------------------------------------------------------------------
    def append_bottle(self, bottle: Bottle) -> None:
        if not self._config.sheets_id:
            raise DataSourceError(self.source_name, "Google Sheets ID not configured")
        if not self._config.sheets_access_token:
            raise DataSourceError(self.source_name, "Google Sheets access token not configured")

        url = f"{SHEETS_API_ENDPOINT}/{self._config.sheets_id}/values/{self._config.sheets_range}:append"
        try:
            response = requests.post(
                url,
                headers={"Authorization": f"Bearer {self._config.sheets_access_token}"},
                params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
                json={"values": [bottle_to_sheet_row(bottle)]},
                timeout=30,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DataSourceError(self.source_name, f"Append failed: {exc}") from exc
        logger.info("Appended %s to Google Sheets", bottle.name)
