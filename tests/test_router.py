"""Tests for request routing."""

import pytest
from unittest.mock import patch

from aiagent.llm.client import LLMError, LLMResponseFormatError
from aiagent.orchestrator.models import ActionKind, FailureKind, RouteDecision
from aiagent.orchestrator.router import Router


class TestRouterInit:

    def test_mode_defaults_to_settings(self, stub_registry):
        assert Router(registry=stub_registry).mode == "classify"

    def test_mode_from_environment(self, stub_registry, monkeypatch):
        monkeypatch.setenv("AIAGENT_ROUTING_MODE", "delegate")
        assert Router(registry=stub_registry).mode == "delegate"


class TestRoute:

    @patch("aiagent.tools.chat_tools.call_llm")
    def test_route_returns_reply_verbatim(self, mock_call_llm, stub_registry):
        mock_call_llm.return_value = "Here is your summary."

        assert Router(registry=stub_registry).route("summarize this") == "Here is your summary."
        mock_call_llm.assert_called_once()

    @patch("aiagent.tools.chat_tools.call_llm")
    def test_route_propagates_backend_error(self, mock_call_llm, stub_registry):
        mock_call_llm.side_effect = LLMError("down")

        with pytest.raises(LLMError):
            Router(registry=stub_registry).route("hi")


class TestClassify:

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_picks_action_with_args(self, mock_json, stub_registry):
        mock_json.return_value = {"action": "report", "args": {"topic": "bees"}}

        decision = Router(registry=stub_registry).classify("Write a report on bees")

        assert decision == RouteDecision(action=ActionKind.REPORT, args={"topic": "bees"})
        assert "Write a report on bees" in mock_json.call_args.args[0]

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_unknown_action_falls_back(self, mock_json, stub_registry):
        mock_json.return_value = {"action": "dance", "args": {}}

        decision = Router(registry=stub_registry).classify("do a dance")

        assert decision.action == ActionKind.GENERAL
        assert decision.args == {"message": "do a dance"}

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_malformed_args_fall_back(self, mock_json, stub_registry, caplog):
        mock_json.return_value = {"action": "report", "args": ["bees"]}

        with caplog.at_level("WARNING", logger="aiagent.orchestrator.router"):
            decision = Router(registry=stub_registry).classify("report on bees")

        assert decision.action == ActionKind.GENERAL
        assert "not a valid decision" in caplog.text
        assert "['bees']" in caplog.text

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_missing_args_fall_back(self, mock_json, stub_registry):
        mock_json.return_value = {"action": "email", "args": {"subject": "Hi"}}

        decision = Router(registry=stub_registry).classify("email Bob")

        assert decision.action == ActionKind.GENERAL

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_general_keeps_user_text(self, mock_json, stub_registry):
        mock_json.return_value = {"action": "general", "args": {"message": "paraphrased"}}

        decision = Router(registry=stub_registry).classify("how are you?")

        assert decision.args == {"message": "how are you?"}

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_unparseable_output_falls_back(self, mock_json, stub_registry):
        mock_json.side_effect = LLMResponseFormatError("no JSON")

        decision = Router(registry=stub_registry).classify("hello")

        assert decision.action == ActionKind.GENERAL

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_backend_error_propagates(self, mock_json, stub_registry):
        mock_json.side_effect = LLMError("Cannot connect")

        with pytest.raises(LLMError):
            Router(registry=stub_registry).classify("hello")


class TestRespond:

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_classify_mode_runs_chosen_action(self, mock_json, stub_registry):
        mock_json.return_value = {
            "action": "email",
            "args": {"subject": "Lunch", "recipient": "Ana", "content": "noon"},
        }

        result = Router(registry=stub_registry, mode="classify").respond("email Ana about lunch")

        assert result.ok
        assert result.action == ActionKind.EMAIL
        assert result.output == "To Ana: Lunch"

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_classify_mode_backend_failure(self, mock_json, stub_registry):
        mock_json.side_effect = LLMError("Cannot connect")

        result = Router(registry=stub_registry, mode="classify").respond("hi")

        assert not result.ok
        assert result.failure == FailureKind.BACKEND

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_delegate_mode_skips_classifier(self, mock_json, stub_registry):
        result = Router(registry=stub_registry, mode="delegate").respond("hi")

        assert result.ok
        assert result.action == ActionKind.GENERAL
        assert result.output == "echo: hi"
        mock_json.assert_not_called()

    @patch("aiagent.orchestrator.router.call_llm_json")
    def test_classifier_extra_args_do_not_break_dispatch(self, mock_json, stub_registry):
        mock_json.return_value = {
            "action": "report",
            "args": {"topic": "bees", "kind": "brief"},
        }

        result = Router(registry=stub_registry, mode="classify").respond("report on bees")

        assert result.ok
        assert result.action == ActionKind.REPORT
        assert result.output == "Report on bees"

    def test_dispatch(self, stub_registry):
        decision = RouteDecision(action=ActionKind.SCRAPE, args={"url": "https://example.com"})

        result = Router(registry=stub_registry).dispatch(decision)

        assert result.output == "page text"
