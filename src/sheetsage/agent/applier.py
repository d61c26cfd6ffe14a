"""Apply the model's proposed edits to a workbook."""

import json
import logging
from typing import Optional

from ..errors import DirectiveApplyError, InvalidAiResponse
from ..sheets.models import ApplyResult, CreateSheet, DirectiveFailure, SetCell, parse_directive
from ..sheets.workbook import Workbook

logger = logging.getLogger(__name__)


class EditApplier:
    """Applies a batch of edit directives, best-effort.

    A directive that cannot be applied (unknown sheet, duplicate sheet name,
    rejected write) is logged and recorded; the rest of the batch still runs.
    Nothing is rolled back.
    """

    def __init__(self, workbook: Workbook):
        self.workbook = workbook

    def apply(self, ai_response_text: str) -> ApplyResult:
        """Parse the model's JSON text and apply its edits in order."""
        try:
            response_data = json.loads(ai_response_text)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to parse AI JSON response: {ai_response_text!r}")
            raise InvalidAiResponse() from e

        if not isinstance(response_data, dict):
            logger.error(f"AI JSON response is not an object: {ai_response_text!r}")
            raise InvalidAiResponse()

        result = ApplyResult()
        edits = response_data.get("edits")
        if isinstance(edits, list):
            for index, raw_edit in enumerate(edits):
                directive = parse_directive(raw_edit)
                if directive is None:
                    result.ignored += 1
                    continue
                try:
                    self._apply_directive(index, directive)
                    result.applied += 1
                except DirectiveApplyError as e:
                    result.failures.append(DirectiveFailure(index=index, message=str(e)))

        reply = response_data.get("reply")
        if isinstance(reply, str) and reply:
            result.reply = reply

        logger.info(
            f"Applied {result.applied} edit(s), {len(result.failures)} failed, "
            f"{result.ignored} ignored"
        )
        return result

    def _apply_directive(self, index: int, directive) -> None:
        if isinstance(directive, CreateSheet):
            self._create_sheet(index, directive)
        elif isinstance(directive, SetCell):
            self._set_cell(index, directive)

    def _create_sheet(self, index: int, directive: CreateSheet) -> None:
        try:
            self.workbook.insert_sheet(directive.name)
        except Exception as e:
            logger.warning(f"Could not create sheet '{directive.name}'. It might already exist. ({e})")
            raise DirectiveApplyError(f"Could not create sheet '{directive.name}': {e}", index) from e

    def _set_cell(self, index: int, directive: SetCell) -> None:
        location = f"{directive.sheet}!R{directive.row}C{directive.column}"

        try:
            sheet_exists = self.workbook.has_sheet(directive.sheet)
        except Exception as e:
            logger.error(f"Failed to look up sheet '{directive.sheet}': {e}")
            raise DirectiveApplyError(f"Failed to edit {location}: {e}", index) from e

        if not sheet_exists:
            logger.error(f'Sheet with name "{directive.sheet}" not found.')
            raise DirectiveApplyError(f'Sheet with name "{directive.sheet}" not found.', index)

        try:
            if directive.is_formula:
                self.workbook.set_formula(
                    directive.sheet, directive.row, directive.column, str(directive.value)
                )
            else:
                self.workbook.set_value(directive.sheet, directive.row, directive.column, directive.value)
        except Exception as e:
            logger.error(f"Failed to edit {location}: {e}")
            raise DirectiveApplyError(f"Failed to edit {location}: {e}", index) from e


def apply_ai_response(workbook: Workbook, ai_response_text: str) -> Optional[str]:
    """Apply the edits in ``ai_response_text`` and return the model's reply."""
    return EditApplier(workbook).apply(ai_response_text).reply
