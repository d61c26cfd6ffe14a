"""Gemini LLM client."""

import logging
from typing import Optional

import httpx

from ..errors import ConfigurationError, ModelHttpError, ModelShapeError, ModelTransportError
from .base import GeminiConfig, LLMClient

logger = logging.getLogger(__name__)


class GeminiClient(LLMClient):
    """Gemini ``generateContent`` HTTP API client."""

    def __init__(self, config: GeminiConfig, transport: Optional[httpx.BaseTransport] = None):
        if not config.api_key:
            raise ConfigurationError("GEMINI_API_KEY is required to query the AI model.")
        self.config = config
        self._transport = transport

    def generate(self, request_body: dict) -> str:
        """POST the request and return ``candidates[0].content.parts[0].text``."""
        try:
            with httpx.Client(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = client.post(
                    self.config.endpoint,
                    params={"key": self.config.api_key},
                    json=request_body,
                )
        except httpx.HTTPError as e:
            logger.error(f"Request to {self.config.model_name} failed: {e}")
            raise ModelTransportError(f"Could not reach the AI model: {e}") from e

        # Error statuses are inspected here rather than raised by httpx
        if response.status_code != 200:
            logger.error(f"API Error Response ({response.status_code}): {response.text}")
            raise ModelHttpError(response.status_code)

        return self._extract_text(response)

    def _extract_text(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"API returned a non-JSON body: {response.text}")
            raise ModelShapeError() from e

        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            # No candidates usually means the prompt was blocked
            logger.error(f"API response is missing generated text: {response.text}")
            raise ModelShapeError() from e

        if not isinstance(text, str):
            logger.error(f"API response text is not a string: {text!r}")
            raise ModelShapeError()
        return text
