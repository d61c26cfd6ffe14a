"""Workbook access: host interface, Google Sheets backend and snapshots."""

from .client import GoogleSheetsWorkbook
from .models import (
    ApplyResult,
    AutoEditOutcome,
    CreateSheet,
    DirectiveFailure,
    EditDirective,
    EditEvent,
    SetCell,
    WorkbookSnapshot,
    parse_directive,
)
from .snapshot import read_snapshot, serialize_snapshot
from .workbook import Workbook

__all__ = [
    "GoogleSheetsWorkbook",
    "Workbook",
    "ApplyResult",
    "AutoEditOutcome",
    "CreateSheet",
    "DirectiveFailure",
    "EditDirective",
    "EditEvent",
    "SetCell",
    "WorkbookSnapshot",
    "parse_directive",
    "read_snapshot",
    "serialize_snapshot",
]
