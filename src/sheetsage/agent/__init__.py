"""Gemini-backed spreadsheet assistant."""

from .applier import EditApplier, apply_ai_response
from .assistant import SheetAssistant, build_edit_prompt
from .lock import AdvisoryLock, ProcessLock
from .prompts import SYSTEM_PROMPT, build_request

__all__ = [
    "EditApplier",
    "apply_ai_response",
    "SheetAssistant",
    "build_edit_prompt",
    "AdvisoryLock",
    "ProcessLock",
    "SYSTEM_PROMPT",
    "build_request",
]
