"""Data models for workbook snapshots and edit directives."""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator

from .a1 import to_a1

CellValue = Union[str, int, float, bool, None]

# Sheet name -> rectangular grid of display values
WorkbookSnapshot = dict[str, list[list[CellValue]]]


class CreateSheet(BaseModel):
    """Directive asking for a new sheet."""

    action: Literal["addSheet"]
    name: StrictStr = Field(min_length=1)


class SetCell(BaseModel):
    """Directive writing one cell. Row and column are 1-based."""

    sheet: StrictStr = Field(min_length=1)
    row: StrictInt = Field(ge=1)
    column: StrictInt = Field(ge=1)
    value: Union[StrictStr, StrictInt, StrictFloat]

    @field_validator("row", "column", mode="before")
    @classmethod
    def _whole_number(cls, value: Any) -> Any:
        # JSON numbers like 2.0 address the same cell as 2
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @property
    def is_formula(self) -> bool:
        return str(self.value).startswith("=")

    @property
    def a1_notation(self) -> str:
        return to_a1(self.row, self.column)


EditDirective = Union[CreateSheet, SetCell]


def parse_directive(raw: Any) -> Optional[EditDirective]:
    """Return the directive ``raw`` describes, or None if it is malformed."""
    if not isinstance(raw, dict):
        return None
    for model in (CreateSheet, SetCell):
        try:
            return model.model_validate(raw)
        except ValidationError:
            continue
    return None


class DirectiveFailure(BaseModel):
    """A directive that was well-formed but could not be applied."""

    index: int
    message: str


class ApplyResult(BaseModel):
    """Outcome of applying one model response to the workbook."""

    reply: Optional[str] = None
    applied: int = 0
    ignored: int = 0
    failures: list[DirectiveFailure] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


class EditEvent(BaseModel):
    """A user edit reported by the host's edit-notification hook."""

    sheet: str
    row: int = Field(ge=1)
    column: int = Field(ge=1)
    value: Optional[str] = None
    old_value: Optional[str] = None

    @property
    def a1_notation(self) -> str:
        return to_a1(self.row, self.column)

    @property
    def is_meaningful(self) -> bool:
        """False for edits that clear a cell or re-enter the same value."""
        if not self.value or self.value.strip() == "":
            return False
        return self.value != self.old_value


class AutoEditOutcome(str, Enum):
    """What the auto-edit flow did with an edit event."""

    IGNORED = "ignored"
    LOCKED = "locked"
    COMPLETED = "completed"
    FAILED = "failed"
