"""Configuration management for SheetSage."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .llm.base import GeminiConfig

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Gemini API configuration
    gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY")
    model_name: str = os.getenv("MODEL_NAME", "gemini-2.5-flash")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60.0"))

    # Google Sheets API credentials and the workbook to operate on
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))
    spreadsheet_id: Optional[str] = os.getenv("SPREADSHEET_ID")

    # Auto-edit flow
    lock_wait_ms: int = int(os.getenv("LOCK_WAIT_MS", "100"))  # Bounded wait for the advisory lock
    note_clear_delay_seconds: float = float(os.getenv("NOTE_CLEAR_DELAY_SECONDS", "2.0"))

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "info").lower()

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    def gemini_config(self) -> GeminiConfig:
        """Build the configuration handed to the Gemini client."""
        return GeminiConfig(
            api_key=self.gemini_api_key,
            model_name=self.model_name,
            base_url=self.gemini_base_url,
            timeout_seconds=self.request_timeout_seconds,
        )


settings = Settings()
