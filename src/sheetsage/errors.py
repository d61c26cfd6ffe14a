"""Exceptions raised by SheetSage.

Every error carries a message that is safe to show to the user. Details that
should not reach the user (raw HTTP bodies, model output) are logged where the
error is raised instead.
"""

from typing import Optional


class AssistantError(Exception):
    """Base class for all SheetSage errors."""


class ConfigurationError(AssistantError):
    """A required setting (such as the API key) is missing."""


class EmptyPromptError(AssistantError):
    """The user submitted an empty prompt."""

    def __init__(self, message: str = "Prompt cannot be empty."):
        super().__init__(message)


class ModelHttpError(AssistantError):
    """The model endpoint answered with a non-200 status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"The AI model returned an error (HTTP {status_code}). See logs.")


class ModelShapeError(AssistantError):
    """The model endpoint answered 200 but the body was not what we expected."""

    def __init__(self, message: str = "The AI model returned a response in an unexpected format."):
        super().__init__(message)


class ModelTransportError(AssistantError):
    """The request never produced an HTTP response (connection failure, timeout)."""


class InvalidAiResponse(AssistantError):
    """The model's text payload is not a JSON object."""

    def __init__(self, message: str = "Received an invalid response from the AI."):
        super().__init__(message)


class DirectiveApplyError(AssistantError):
    """A single edit directive could not be applied. Never fatal to a batch."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        super().__init__(message)


class WorkbookError(AssistantError):
    """The host workbook rejected a read or write."""
