"""Google Sheets implementation of the host workbook."""

import logging
from pathlib import Path
from typing import Optional, Union

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import settings
from ..errors import WorkbookError
from .a1 import quote_sheet_name, to_a1
from .models import CellValue
from .workbook import Workbook

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class GoogleSheetsWorkbook(Workbook):
    """One spreadsheet accessed through the Google Sheets v4 API."""

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_path: Optional[Path] = None,
        token_path: Optional[Path] = None,
        service=None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_path = credentials_path or settings.google_credentials_path
        self.token_path = token_path or settings.google_token_path
        self._service = service

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds = None

        if self.token_path.exists():
            creds = Credentials.from_authorized_user_file(str(self.token_path), SCOPES)

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not self.credentials_path.exists():
                    raise FileNotFoundError(
                        f"Google credentials file not found at {self.credentials_path}. "
                        "Please download it from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(str(self.credentials_path), SCOPES)
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            self.token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._service = build("sheets", "v4", credentials=self._get_credentials())
        return self._service

    def _sheet_properties(self) -> list[dict]:
        try:
            result = (
                self.service.spreadsheets()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    fields="sheets.properties(sheetId,title)",
                )
                .execute()
            )
        except HttpError as e:
            raise WorkbookError(f"Failed to get spreadsheet info: {e}")
        return [sheet["properties"] for sheet in result.get("sheets", [])]

    def _sheet_id(self, sheet: str) -> int:
        for properties in self._sheet_properties():
            if properties["title"] == sheet:
                return properties["sheetId"]
        raise WorkbookError(f'Sheet with name "{sheet}" not found.')

    def _batch_update(self, requests: list[dict], action: str) -> dict:
        try:
            return (
                self.service.spreadsheets()
                .batchUpdate(spreadsheetId=self.spreadsheet_id, body={"requests": requests})
                .execute()
            )
        except HttpError as e:
            raise WorkbookError(f"Failed to {action}: {e}")

    def _write(self, sheet: str, row: int, column: int, value, value_input_option: str):
        range_notation = f"{quote_sheet_name(sheet)}!{to_a1(row, column)}"
        try:
            (
                self.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.spreadsheet_id,
                    range=range_notation,
                    valueInputOption=value_input_option,
                    body={"values": [[value]]},
                )
                .execute()
            )
        except HttpError as e:
            raise WorkbookError(f"Failed to write {range_notation}: {e}")

    def sheet_names(self) -> list[str]:
        return [properties["title"] for properties in self._sheet_properties()]

    def read_values(self, sheet: str) -> list[list[CellValue]]:
        # A bare sheet name covers everything from A1 to the last used cell
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=quote_sheet_name(sheet),
                    valueRenderOption="UNFORMATTED_VALUE",
                )
                .execute()
            )
        except HttpError as e:
            raise WorkbookError(f"Failed to read sheet '{sheet}': {e}")
        return result.get("values", [])

    def insert_sheet(self, name: str) -> None:
        self._batch_update(
            [{"addSheet": {"properties": {"title": name}}}],
            f"create sheet '{name}'",
        )
        logger.info(f"Created sheet '{name}' in {self.spreadsheet_id}")

    def set_value(self, sheet: str, row: int, column: int, value: Union[str, int, float]) -> None:
        # Parsed like typed input so "1200" or "5%" land as numbers; text that looks
        # like a formula stays text
        is_formula_text = isinstance(value, str) and value.startswith("=")
        self._write(sheet, row, column, value, "RAW" if is_formula_text else "USER_ENTERED")

    def set_formula(self, sheet: str, row: int, column: int, formula: str) -> None:
        self._write(sheet, row, column, formula, "USER_ENTERED")

    def _update_note(self, sheet: str, row: int, column: int, cell: dict) -> None:
        self._batch_update(
            [
                {
                    "updateCells": {
                        "range": {
                            "sheetId": self._sheet_id(sheet),
                            "startRowIndex": row - 1,
                            "endRowIndex": row,
                            "startColumnIndex": column - 1,
                            "endColumnIndex": column,
                        },
                        "rows": [{"values": [cell]}],
                        "fields": "note",
                    }
                }
            ],
            f"update note on {sheet}!{to_a1(row, column)}",
        )

    def set_note(self, sheet: str, row: int, column: int, note: str) -> None:
        self._update_note(sheet, row, column, {"note": note})

    def clear_note(self, sheet: str, row: int, column: int) -> None:
        # Omitting "note" while naming it in fields removes it
        self._update_note(sheet, row, column, {})
