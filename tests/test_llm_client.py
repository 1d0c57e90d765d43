"""Tests for the LLM client."""

import pytest
from unittest.mock import patch, MagicMock


class TestCallLLM:
    """Tests for the call_llm function."""

    @patch("aiagent.llm.client._get_client")
    def test_call_llm_success(self, mock_get_client):
        """call_llm should return response text on success."""
        from aiagent.llm.client import call_llm

        mock_client = MagicMock()
        mock_client.generate.return_value = MagicMock(response="Hello, world!")
        mock_get_client.return_value = mock_client

        result = call_llm("Say hello")

        assert result == "Hello, world!"
        mock_client.generate.assert_called_once()
        assert "system" not in mock_client.generate.call_args.kwargs

    @patch("aiagent.llm.client._get_client")
    def test_call_llm_passes_system_prompt(self, mock_get_client):
        """The system instruction goes in the request's system field."""
        from aiagent.llm.client import call_llm

        mock_client = MagicMock()
        mock_client.generate.return_value = MagicMock(response="ok")
        mock_get_client.return_value = mock_client

        call_llm("Do the thing", system="You are terse.")

        kwargs = mock_client.generate.call_args.kwargs
        assert kwargs["system"] == "You are terse."
        assert kwargs["prompt"] == "Do the thing"
        assert kwargs["model"] == "mistral"

    @patch("aiagent.llm.client._get_client")
    def test_call_llm_with_json_mode(self, mock_get_client):
        """call_llm with force_json should use json format."""
        from aiagent.llm.client import call_llm

        mock_client = MagicMock()
        mock_client.generate.return_value = MagicMock(response='{"key": "value"}')
        mock_get_client.return_value = mock_client

        result = call_llm("Return JSON", force_json=True)

        assert result == '{"key": "value"}'
        assert mock_client.generate.call_args.kwargs.get("format") == "json"

    @patch("aiagent.llm.client._get_client")
    def test_call_llm_connection_error(self, mock_get_client):
        """call_llm should raise LLMError on connection failure."""
        from aiagent.llm.client import call_llm, LLMError
        from ollama import RequestError

        mock_client = MagicMock()
        mock_client.generate.side_effect = RequestError("Connection refused")
        mock_get_client.return_value = mock_client

        with pytest.raises(LLMError) as exc_info:
            call_llm("Test prompt")

        assert "Cannot connect to Ollama" in str(exc_info.value)

    @patch("aiagent.llm.client._get_client")
    def test_call_llm_unexpected_error(self, mock_get_client):
        """Any other failure is still reported as LLMError."""
        from aiagent.llm.client import call_llm, LLMError

        mock_client = MagicMock()
        mock_client.generate.side_effect = RuntimeError("quota exceeded")
        mock_get_client.return_value = mock_client

        with pytest.raises(LLMError, match="quota exceeded"):
            call_llm("Test prompt")

    @patch("aiagent.llm.client._get_client")
    def test_call_llm_makes_one_request(self, mock_get_client):
        """Failures are not retried."""
        from aiagent.llm.client import call_llm, LLMError

        mock_client = MagicMock()
        mock_client.generate.side_effect = TimeoutError()
        mock_get_client.return_value = mock_client

        with pytest.raises(LLMError, match="timed out"):
            call_llm("Test prompt")

        assert mock_client.generate.call_count == 1


class TestCallLLMJSON:
    """Tests for the call_llm_json function."""

    @patch("aiagent.llm.client.call_llm")
    def test_call_llm_json_valid_response(self, mock_call_llm):
        from aiagent.llm.client import call_llm_json

        mock_call_llm.return_value = '{"action": "report", "args": {"topic": "bees"}}'

        result = call_llm_json("Route this", system="router")

        assert result["action"] == "report"
        assert mock_call_llm.call_args.kwargs["system"] == "router"
        assert mock_call_llm.call_args.kwargs["force_json"] is True

    @patch("aiagent.llm.client.call_llm")
    def test_call_llm_json_retries_on_failure(self, mock_call_llm):
        from aiagent.llm.client import call_llm_json

        mock_call_llm.side_effect = ["This is not JSON", '{"result": "success"}']

        result = call_llm_json("Return JSON please")

        assert result["result"] == "success"
        assert mock_call_llm.call_count == 2
        assert "REMINDER" in mock_call_llm.call_args.args[0]

    @patch("aiagent.llm.client.call_llm")
    def test_call_llm_json_rejects_non_objects(self, mock_call_llm):
        """A JSON array is not an acceptable answer."""
        from aiagent.llm.client import call_llm_json

        mock_call_llm.side_effect = ["[1, 2, 3]", '{"ok": true}']

        assert call_llm_json("Return JSON") == {"ok": True}

    @patch("aiagent.llm.client.call_llm")
    def test_call_llm_json_raises_after_max_retries(self, mock_call_llm):
        from aiagent.llm.client import call_llm_json, LLMResponseFormatError

        mock_call_llm.return_value = "Not valid JSON ever"

        with pytest.raises(LLMResponseFormatError) as exc_info:
            call_llm_json("Return JSON")

        assert "Failed to get valid JSON" in str(exc_info.value)
        assert mock_call_llm.call_count == 3

    @patch("aiagent.llm.client.call_llm")
    def test_call_llm_json_propagates_backend_errors(self, mock_call_llm):
        from aiagent.llm.client import call_llm_json, LLMError, LLMResponseFormatError

        mock_call_llm.side_effect = LLMError("Cannot connect")

        with pytest.raises(LLMError) as exc_info:
            call_llm_json("Return JSON")

        assert not isinstance(exc_info.value, LLMResponseFormatError)
        assert mock_call_llm.call_count == 1


class TestRepairJSON:
    """Tests for the repair_json function."""

    def test_repair_json_valid_json(self):
        from aiagent.llm.client import repair_json

        assert repair_json('{"key": "value"}') == {"key": "value"}

    def test_repair_json_with_markdown(self):
        from aiagent.llm.client import repair_json

        text = '```json\n{"key": "value"}\n```'
        assert repair_json(text) == {"key": "value"}

    def test_repair_json_with_preamble(self):
        from aiagent.llm.client import repair_json

        text = 'Here is the JSON: {"key": "value"} hope that helps'
        assert repair_json(text) == {"key": "value"}

    def test_repair_json_trailing_comma(self):
        from aiagent.llm.client import repair_json

        assert repair_json('{"action": "email", "args": {"subject": "Hi",},}') == {
            "action": "email",
            "args": {"subject": "Hi"},
        }

    def test_repair_json_single_quotes(self):
        from aiagent.llm.client import repair_json

        assert repair_json("{'action': 'summarize'}") == {"action": "summarize"}

    def test_repair_json_literal_newline_in_string(self):
        from aiagent.llm.client import repair_json

        result = repair_json('{"text": "line one\nline two"}')
        assert result == {"text": "line one\nline two"}

    def test_repair_json_no_json_found(self):
        from aiagent.llm.client import repair_json

        with pytest.raises(ValueError) as exc_info:
            repair_json("This has no JSON at all")

        assert "No JSON object found" in str(exc_info.value)


class TestHealth:
    """Tests for model listing and health checks."""

    @patch("aiagent.llm.client._get_client")
    def test_list_models(self, mock_get_client):
        from aiagent.llm.client import list_models

        mock_client = MagicMock()
        mock_client.list.return_value = MagicMock(
            models=[MagicMock(model="mistral:latest"), MagicMock(model="llama3:8b")]
        )
        mock_get_client.return_value = mock_client

        assert list_models() == ["mistral:latest", "llama3:8b"]

    @patch("aiagent.llm.client.list_models")
    def test_check_model_exists_ignores_tag(self, mock_list):
        from aiagent.llm.client import check_model_exists

        mock_list.return_value = ["mistral:latest"]

        assert check_model_exists("mistral") is True
        assert check_model_exists("llama3") is False

    @patch("aiagent.llm.client._get_client")
    def test_health_reports_connection_failure(self, mock_get_client):
        from aiagent.llm.client import check_ollama_health
        from ollama import RequestError

        mock_client = MagicMock()
        mock_client.list.side_effect = RequestError("refused")
        mock_get_client.return_value = mock_client

        healthy, error = check_ollama_health()

        assert healthy is False
        assert "Is Ollama running" in error
