"""API routes for SheetSage."""

import logging
from typing import Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

from ..agent import ProcessLock, SheetAssistant
from ..errors import AssistantError, ConfigurationError, EmptyPromptError
from ..sheets.models import AutoEditOutcome, EditEvent

logger = logging.getLogger(__name__)

router = APIRouter()

# One lock per process, so overlapping edit notifications never run two passes at once
_edit_lock = ProcessLock()


def build_assistant(spreadsheet_id: Optional[str] = None) -> SheetAssistant:
    """Create an assistant bound to a spreadsheet for the duration of one request."""
    from ..config import settings
    from ..llm import GeminiClient
    from ..sheets import GoogleSheetsWorkbook

    spreadsheet_id = spreadsheet_id or settings.spreadsheet_id
    if not spreadsheet_id:
        raise ConfigurationError("No spreadsheet given and SPREADSHEET_ID is not set.")

    return SheetAssistant(
        workbook=GoogleSheetsWorkbook(spreadsheet_id),
        llm_client=GeminiClient(settings.gemini_config()),
        lock=_edit_lock,
        settings=settings,
    )


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    message: str
    spreadsheet_id: Optional[str] = None


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    reply: Optional[str] = None


class EditNotification(BaseModel):
    """A user edit forwarded by the spreadsheet host."""

    sheet: str
    row: int = Field(ge=1)
    column: int = Field(ge=1)
    value: Union[StrictStr, StrictInt, StrictFloat, None] = None
    old_value: Union[StrictStr, StrictInt, StrictFloat, None] = None
    spreadsheet_id: Optional[str] = None


def _as_text(value: Union[str, int, float, None]) -> Optional[str]:
    """Render a cell value the way the host displays it (1200.0 -> "1200")."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class EditResponse(BaseModel):
    """Response model for the edit hook."""

    outcome: AutoEditOutcome


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest):
    """Send a prompt to the assistant; its edits are applied before the reply returns."""
    if not request.message:
        raise HTTPException(status_code=400, detail=EmptyPromptError().args[0])

    try:
        assistant = build_assistant(request.spreadsheet_id)
        reply = assistant.process_chat_message(request.message)
    except EmptyPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except AssistantError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ChatResponse(reply=reply)


@router.post("/edits", response_model=EditResponse)
def on_edit(notification: EditNotification):
    """Edit-notification hook: run an automatic follow-up pass for a user edit."""
    event = EditEvent(
        sheet=notification.sheet,
        row=notification.row,
        column=notification.column,
        value=_as_text(notification.value),
        old_value=_as_text(notification.old_value),
    )
    # Cheap check first so ignored edits never need credentials
    if not event.is_meaningful:
        return EditResponse(outcome=AutoEditOutcome.IGNORED)

    try:
        assistant = build_assistant(notification.spreadsheet_id)
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return EditResponse(outcome=assistant.handle_edit(event))


@router.get("/health")
def health_check():
    """Health check endpoint with diagnostics."""
    from ..config import settings

    # Gather non-secret diagnostics
    config = {
        "model_name": settings.model_name,
        "gemini_key_present": bool(settings.gemini_api_key),
        "google_credentials_configured": settings.google_credentials_path.exists(),
        "spreadsheet_configured": bool(settings.spreadsheet_id),
    }

    return {
        "status": "ok",
        "service": "sheetsage",
        "config": config,
    }
