"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Optional
from unittest.mock import Mock

import pytest

from sheetsage.config import Settings
from sheetsage.errors import WorkbookError
from sheetsage.llm import LLMClient
from sheetsage.sheets.workbook import Workbook


class FakeWorkbook(Workbook):
    """In-memory workbook recording every write."""

    def __init__(self, sheets: Optional[dict] = None):
        self.sheets: dict[str, list[list]] = {
            name: [list(row) for row in grid] for name, grid in (sheets or {}).items()
        }
        self.formulas: dict[tuple[str, int, int], str] = {}
        self.notes: dict[tuple[str, int, int], str] = {}
        self.note_history: list[str] = []
        self.writes: list[tuple] = []
        self.read_count = 0
        self.fail_writes_to: set[tuple[str, int, int]] = set()

    def sheet_names(self) -> list[str]:
        return list(self.sheets)

    def read_values(self, sheet: str) -> list[list]:
        self.read_count += 1
        return [list(row) for row in self.sheets[sheet]]

    def insert_sheet(self, name: str) -> None:
        if name in self.sheets:
            raise WorkbookError(f"A sheet with the name \"{name}\" already exists.")
        self.sheets[name] = []
        self.writes.append(("insert_sheet", name))

    def _put(self, sheet: str, row: int, column: int, value) -> None:
        if (sheet, row, column) in self.fail_writes_to:
            raise WorkbookError(f"Protected cell {sheet}!R{row}C{column}")
        grid = self.sheets[sheet]
        while len(grid) < row:
            grid.append([])
        line = grid[row - 1]
        while len(line) < column:
            line.append("")
        line[column - 1] = value

    def set_value(self, sheet: str, row: int, column: int, value) -> None:
        self._put(sheet, row, column, value)
        self.formulas.pop((sheet, row, column), None)
        self.writes.append(("set_value", sheet, row, column, value))

    def set_formula(self, sheet: str, row: int, column: int, formula: str) -> None:
        # Display value stands in for the computed result
        self._put(sheet, row, column, "")
        self.formulas[(sheet, row, column)] = formula
        self.writes.append(("set_formula", sheet, row, column, formula))

    def set_note(self, sheet: str, row: int, column: int, note: str) -> None:
        self.notes[(sheet, row, column)] = note
        self.note_history.append(note)

    def clear_note(self, sheet: str, row: int, column: int) -> None:
        self.notes.pop((sheet, row, column), None)
        self.note_history.append("<cleared>")

    def value_at(self, sheet: str, row: int, column: int):
        return self.sheets[sheet][row - 1][column - 1]


class StubLLMClient(LLMClient):
    """LLM client returning canned text and recording requests."""

    def __init__(self, text: str = '{"edits": [], "reply": "ok"}'):
        self.text = text
        self.requests: list[dict] = []

    def generate(self, request_body: dict) -> str:
        self.requests.append(request_body)
        return self.text


def model_text(edits=None, reply: Optional[str] = None) -> str:
    """Build a model text payload."""
    payload = {}
    if edits is not None:
        payload["edits"] = edits
    if reply is not None:
        payload["reply"] = reply
    return json.dumps(payload)


@pytest.fixture
def workbook() -> FakeWorkbook:
    """A workbook with a small revenue table."""
    return FakeWorkbook(
        {
            "Sheet1": [
                ["Item", "Amount"],
                ["Revenue", 1000],
                ["COGS", 400],
            ],
            "Data Sheet": [["Rate"], [0.2]],
        }
    )


@pytest.fixture
def stub_llm() -> StubLLMClient:
    return StubLLMClient()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings with test values and no real delays."""
    return Settings(
        gemini_api_key="test-key-123",
        model_name="gemini-2.5-flash",
        google_credentials_path=tmp_path / "credentials.json",
        google_token_path=tmp_path / "token.json",
        spreadsheet_id="test-sheet-123",
        lock_wait_ms=10,
        note_clear_delay_seconds=0.0,
    )


@pytest.fixture
def no_sleep() -> Mock:
    return Mock()
