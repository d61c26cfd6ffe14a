"""Host workbook interface."""

from abc import ABC, abstractmethod
from typing import Union

from .models import CellValue


class Workbook(ABC):
    """The spreadsheet the assistant reads from and writes to.

    Rows and columns are 1-based throughout. Implementations raise
    ``WorkbookError`` when the host refuses an operation.
    """

    @abstractmethod
    def sheet_names(self) -> list[str]:
        """Return the names of all sheets, in workbook order."""
        pass

    @abstractmethod
    def read_values(self, sheet: str) -> list[list[CellValue]]:
        """Return display values of the sheet's used range (formulas are not returned)."""
        pass

    @abstractmethod
    def insert_sheet(self, name: str) -> None:
        """Create a new sheet. Raises if a sheet with that name exists."""
        pass

    @abstractmethod
    def set_value(self, sheet: str, row: int, column: int, value: Union[str, int, float]) -> None:
        """Write a literal value."""
        pass

    @abstractmethod
    def set_formula(self, sheet: str, row: int, column: int, formula: str) -> None:
        """Write a formula (starting with '=')."""
        pass

    @abstractmethod
    def set_note(self, sheet: str, row: int, column: int, note: str) -> None:
        """Attach a note to a cell, replacing any existing note."""
        pass

    def has_sheet(self, name: str) -> bool:
        """True if a sheet with exactly this name exists."""
        return name in self.sheet_names()

    def clear_note(self, sheet: str, row: int, column: int) -> None:
        """Remove the note on one cell. Defaults to writing an empty note."""
        self.set_note(sheet, row, column, "")
