"""Tests for the HTTP routes."""

from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sheetsage.agent import SheetAssistant
from sheetsage.api import create_app
from sheetsage.api.routes import router
from sheetsage.errors import AssistantError, ConfigurationError, EmptyPromptError
from sheetsage.sheets.models import AutoEditOutcome, EditEvent


@pytest.fixture
def test_client():
    app = FastAPI()
    app.include_router(router, prefix="/api")
    return TestClient(app)


@pytest.fixture
def mock_assistant():
    assistant = Mock(spec=SheetAssistant)
    with patch("sheetsage.api.routes.build_assistant", return_value=assistant) as build:
        assistant.build = build
        yield assistant


class TestHealthEndpoint:
    """Test the /api/health endpoint."""

    def test_health_check_returns_ok_status(self, test_client):
        response = test_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "sheetsage"
        assert "model_name" in data["config"]
        assert isinstance(data["config"]["gemini_key_present"], bool)
        assert isinstance(data["config"]["google_credentials_configured"], bool)

    @patch("sheetsage.config.settings")
    def test_health_check_does_not_expose_key(self, mock_settings, test_client):
        mock_path = Mock()
        mock_path.exists = Mock(return_value=False)
        mock_settings.model_name = "gemini-2.5-flash"
        mock_settings.gemini_api_key = "AIza-secret-value"
        mock_settings.google_credentials_path = mock_path
        mock_settings.spreadsheet_id = None

        response = test_client.get("/api/health")

        assert response.status_code == 200
        config = response.json()["config"]
        assert config["gemini_key_present"] is True
        assert config["spreadsheet_configured"] is False
        assert "AIza-secret-value" not in response.text


class TestChatEndpoint:
    """Test the /api/chat endpoint."""

    def test_chat_returns_reply(self, test_client, mock_assistant):
        mock_assistant.process_chat_message.return_value = "Added sum."

        response = test_client.post(
            "/api/chat", json={"message": "Sum column B", "spreadsheet_id": "abc"}
        )

        assert response.status_code == 200
        assert response.json() == {"reply": "Added sum."}
        mock_assistant.build.assert_called_once_with("abc")
        mock_assistant.process_chat_message.assert_called_once_with("Sum column B")

    def test_empty_prompt_is_bad_request(self, test_client, mock_assistant):
        mock_assistant.process_chat_message.side_effect = EmptyPromptError()

        response = test_client.post("/api/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "Prompt cannot be empty."

    def test_empty_prompt_rejected_before_configuration(self, test_client, test_settings):
        test_settings.spreadsheet_id = None

        with patch("sheetsage.config.settings", test_settings):
            response = test_client.post("/api/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "Prompt cannot be empty."

    def test_assistant_error_is_bad_gateway(self, test_client, mock_assistant):
        mock_assistant.process_chat_message.side_effect = AssistantError(
            "An error occurred: Received an invalid response from the AI."
        )

        response = test_client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 502
        assert "invalid response" in response.json()["detail"]

    def test_missing_configuration(self, test_client):
        with patch(
            "sheetsage.api.routes.build_assistant",
            side_effect=ConfigurationError("No spreadsheet given and SPREADSHEET_ID is not set."),
        ):
            response = test_client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 500
        assert "SPREADSHEET_ID" in response.json()["detail"]


class TestEditsEndpoint:
    """Test the /api/edits hook."""

    def test_edit_runs_auto_pass(self, test_client, mock_assistant):
        mock_assistant.handle_edit.return_value = AutoEditOutcome.COMPLETED

        response = test_client.post(
            "/api/edits",
            json={"sheet": "Sheet1", "row": 2, "column": 2, "value": "1200", "old_value": "1000"},
        )

        assert response.status_code == 200
        assert response.json() == {"outcome": "completed"}
        mock_assistant.handle_edit.assert_called_once_with(
            EditEvent(sheet="Sheet1", row=2, column=2, value="1200", old_value="1000")
        )

    def test_unchanged_value_is_ignored_without_building_assistant(self, test_client, mock_assistant):
        response = test_client.post(
            "/api/edits",
            json={"sheet": "Sheet1", "row": 2, "column": 2, "value": "1000", "old_value": "1000"},
        )

        assert response.json() == {"outcome": "ignored"}
        mock_assistant.build.assert_not_called()
        mock_assistant.handle_edit.assert_not_called()

    def test_numeric_values_are_accepted(self, test_client, mock_assistant):
        mock_assistant.handle_edit.return_value = AutoEditOutcome.COMPLETED

        response = test_client.post(
            "/api/edits",
            json={"sheet": "Sheet1", "row": 2, "column": 2, "value": 1200, "old_value": 1000.0},
        )

        assert response.status_code == 200
        mock_assistant.handle_edit.assert_called_once_with(
            EditEvent(sheet="Sheet1", row=2, column=2, value="1200", old_value="1000")
        )

    def test_equal_numeric_values_are_ignored(self, test_client, mock_assistant):
        response = test_client.post(
            "/api/edits",
            json={"sheet": "Sheet1", "row": 2, "column": 2, "value": 1000, "old_value": 1000},
        )

        assert response.json() == {"outcome": "ignored"}
        mock_assistant.build.assert_not_called()

    def test_invalid_row_is_rejected(self, test_client, mock_assistant):
        response = test_client.post(
            "/api/edits", json={"sheet": "Sheet1", "row": 0, "column": 2, "value": "x"}
        )

        assert response.status_code == 422


def test_create_app_mounts_routes():
    client = TestClient(create_app())

    assert client.get("/api/health").status_code == 200


class TestBuildAssistant:
    """Test per-request assistant construction."""

    def test_requires_spreadsheet(self, test_settings):
        from sheetsage.api.routes import build_assistant

        test_settings.spreadsheet_id = None
        with patch("sheetsage.config.settings", test_settings):
            with pytest.raises(ConfigurationError):
                build_assistant()

    def test_shares_process_lock(self, test_settings):
        from sheetsage.api import routes

        with patch("sheetsage.config.settings", test_settings):
            first = routes.build_assistant()
            second = routes.build_assistant("other-sheet")

        assert first.lock is second.lock is routes._edit_lock
        assert first.workbook.spreadsheet_id == "test-sheet-123"
        assert second.workbook.spreadsheet_id == "other-sheet"
