"""Google Sheets backed tabular source."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import GSpreadException

from ops_dashboard.config.settings import DashboardConfig
from ops_dashboard.errors import ConfigurationError, SourceFetchError
from ops_dashboard.source.base import Rows

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

# Dates come back as display strings, everything else (including
# date-serials in number-formatted cells) as raw values.
READ_PARAMS = {
    "valueRenderOption": "UNFORMATTED_VALUE",
    "dateTimeRenderOption": "FORMATTED_STRING",
}

FETCH_ERRORS = (GSpreadException, GoogleAuthError, requests.RequestException, OSError)


@dataclass
class WorksheetInfo:
    title: str
    row_count: int
    column_count: int


@dataclass
class SpreadsheetInfo:
    title: str
    worksheets: list[WorksheetInfo] = field(default_factory=list)


class GoogleSheetsSource:
    """Reads spreadsheet ranges with a service account.

    The gspread client is created on first use and shared by the concurrent
    range fetches of one report.
    """

    def __init__(self, config: DashboardConfig) -> None:
        problems = [p for p in config.validate() if p.startswith("GOOGLE_SHEETS_")]
        if problems:
            raise ConfigurationError(problems)
        self._config = config
        self._spreadsheet: gspread.Spreadsheet | None = None
        self._lock = threading.Lock()

    def _credentials(self) -> Credentials:
        info = {
            "type": "service_account",
            "client_email": self._config.client_email,
            "private_key": self._config.private_key,
            "token_uri": TOKEN_URI,
        }
        try:
            return Credentials.from_service_account_info(info, scopes=SCOPES)
        except ValueError as exc:
            raise ConfigurationError(
                [f"GOOGLE_SHEETS_PRIVATE_KEY is not a usable service account key: {exc}"]
            ) from exc

    def _get_spreadsheet(self) -> gspread.Spreadsheet:
        with self._lock:
            if self._spreadsheet is None:
                logger.debug("Opening spreadsheet %s", self._config.spreadsheet_id)
                client = gspread.authorize(self._credentials())
                try:
                    self._spreadsheet = client.open_by_key(self._config.spreadsheet_id)
                except FETCH_ERRORS as exc:
                    raise SourceFetchError(f"Cannot open spreadsheet: {exc}") from exc
            return self._spreadsheet

    def get_range(self, range_name: str) -> Rows:
        sheet = range_name.split("!", 1)[0]
        spreadsheet = self._get_spreadsheet()
        try:
            response = spreadsheet.values_get(range_name, params=READ_PARAMS)
        except FETCH_ERRORS as exc:
            raise SourceFetchError(f"Error reading {range_name}: {exc}", sheet=sheet) from exc
        rows = response.get("values", [])
        logger.debug("Read %d rows from %s", len(rows), range_name, extra={"sheet": sheet})
        return rows

    def describe(self) -> SpreadsheetInfo:
        """Spreadsheet title and worksheet dimensions."""
        spreadsheet = self._get_spreadsheet()
        try:
            worksheets = spreadsheet.worksheets()
        except FETCH_ERRORS as exc:
            raise SourceFetchError(f"Cannot list worksheets: {exc}") from exc
        return SpreadsheetInfo(
            title=spreadsheet.title,
            worksheets=[
                WorksheetInfo(title=ws.title, row_count=ws.row_count, column_count=ws.col_count)
                for ws in worksheets
            ],
        )
