"""Workbook snapshot reader."""

import json
import logging

from .models import CellValue, WorkbookSnapshot
from .workbook import Workbook

logger = logging.getLogger(__name__)


def _rectangular(rows: list[list[CellValue]]) -> list[list[CellValue]]:
    """Pad ragged rows with empty strings so every row has the same width."""
    width = max((len(row) for row in rows), default=0)
    if width == 0:
        return []
    return [list(row) + [""] * (width - len(row)) for row in rows]


def read_snapshot(workbook: Workbook) -> WorkbookSnapshot:
    """Capture the display values of every sheet in the workbook."""
    snapshot: WorkbookSnapshot = {}
    for sheet_name in workbook.sheet_names():
        snapshot[sheet_name] = _rectangular(workbook.read_values(sheet_name))

    logger.debug(
        f"Snapshot captured {len(snapshot)} sheet(s): "
        + ", ".join(f"{name} ({len(grid)} rows)" for name, grid in snapshot.items())
    )
    return snapshot


def serialize_snapshot(snapshot: WorkbookSnapshot) -> str:
    """Render a snapshot as JSON text for the model."""
    return json.dumps(snapshot, ensure_ascii=False, separators=(",", ":"), default=str)
