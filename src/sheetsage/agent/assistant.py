"""Entry points: interactive chat and the automatic on-edit pass."""

import logging
import time
from typing import Callable, Optional

from ..config import Settings, settings as default_settings
from ..errors import AssistantError, EmptyPromptError
from ..llm import LLMClient
from ..sheets.models import ApplyResult, AutoEditOutcome, EditEvent
from ..sheets.snapshot import read_snapshot
from ..sheets.workbook import Workbook
from .applier import EditApplier
from .lock import AdvisoryLock, ProcessLock
from .prompts import build_request

logger = logging.getLogger(__name__)

THINKING_NOTE = "Gemini is thinking..."
COMPLETE_NOTE = "Task complete."


def build_edit_prompt(event: EditEvent) -> str:
    """Prompt asking the model to follow up on a user's edit."""
    return (
        f'In sheet "{event.sheet}", a user just changed cell {event.a1_notation} '
        f'to "{event.value}". Analyze this within the workbook context and '
        "perform logical follow-up edits."
    )


class SheetAssistant:
    """Runs snapshot -> request -> apply passes against one workbook."""

    def __init__(
        self,
        workbook: Workbook,
        llm_client: LLMClient,
        lock: Optional[AdvisoryLock] = None,
        sleep: Callable[[float], None] = time.sleep,
        settings: Optional[Settings] = None,
    ):
        self.workbook = workbook
        self.llm_client = llm_client
        self.lock = lock or ProcessLock()
        self.sleep = sleep
        self.settings = settings or default_settings
        self.applier = EditApplier(workbook)

    def run(self, prompt: str) -> ApplyResult:
        """One full pass: snapshot the workbook, query the model, apply its edits."""
        snapshot = read_snapshot(self.workbook)
        request_body = build_request(prompt, snapshot)
        ai_response_text = self.llm_client.generate(request_body)
        return self.applier.apply(ai_response_text)

    def process_chat_message(self, prompt: str) -> Optional[str]:
        """Handle a prompt from the chat panel and return the model's reply."""
        if not prompt:
            raise EmptyPromptError()

        try:
            return self.run(prompt).reply
        except Exception as e:
            logger.error(f"process_chat_message Error: {e}", exc_info=True)
            raise AssistantError(f"An error occurred: {e}") from e

    def handle_edit(self, event: EditEvent) -> AutoEditOutcome:
        """React to a user edit with follow-up edits from the model.

        Edits that clear a cell or re-enter the old value are ignored. If
        another pass holds the lock past the bounded wait the edit is dropped;
        the user has to edit again to retry.
        """
        if not event.is_meaningful:
            return AutoEditOutcome.IGNORED

        if not self.lock.try_acquire(self.settings.lock_wait_ms):
            logger.info(
                f"Skipping edit of {event.sheet}!{event.a1_notation}: another pass is running"
            )
            return AutoEditOutcome.LOCKED

        try:
            self._note(event, THINKING_NOTE)
            self.run(build_edit_prompt(event))
            self._note(event, COMPLETE_NOTE)
            self.sleep(self.settings.note_clear_delay_seconds)
            self.workbook.clear_note(event.sheet, event.row, event.column)
            return AutoEditOutcome.COMPLETED
        except Exception as e:
            logger.error(f"handle_edit Error: {e}", exc_info=True)
            try:
                self._note(event, f"AI Error: {e}")
            except Exception as note_error:
                logger.error(
                    f"Could not annotate {event.sheet}!{event.a1_notation} with the error: {note_error}"
                )
            return AutoEditOutcome.FAILED
        finally:
            self.lock.release()

    def _note(self, event: EditEvent, note: str) -> None:
        self.workbook.set_note(event.sheet, event.row, event.column, note)
