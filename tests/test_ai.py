"""Tests for the word suggester and provider selection."""

from typing import Optional

from lumi.ai.anthropic import AnthropicProvider
from lumi.ai.base import AIProvider
from lumi.ai.openai import OpenAIProvider
from lumi.ai.suggester import WordSuggester, parse_suggestion
from lumi.config import build_provider
from lumi.core.models import WordSuggestion


class FakeProvider(AIProvider):
    """Provider returning a canned reply, or raising."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None, available: bool = True):
        self.reply = reply
        self.error = error
        self.available = available
        self.calls = []

    def generate(self, prompt, system=None, max_tokens=500, json_mode=False):
        self.calls.append({"prompt": prompt, "system": system, "json_mode": json_mode})
        if self.error:
            raise self.error
        return self.reply

    def is_available(self):
        return self.available


class TestWordSuggester:

    def test_parses_json_reply(self):
        provider = FakeProvider('{"meaning": "有韌性的", "example": "She is resilient."}')
        suggestion = WordSuggester(provider).suggest("resilient")
        assert suggestion == WordSuggestion("有韌性的", "She is resilient.")
        call = provider.calls[0]
        assert call["json_mode"]
        assert '"resilient"' in call["prompt"]
        assert "Traditional Chinese" in call["prompt"]

    def test_meaning_language_is_configurable(self):
        provider = FakeProvider('{"meaning": "résilient", "example": "x"}')
        WordSuggester(provider, meaning_language="French").suggest("resilient")
        assert "French meaning" in provider.calls[0]["prompt"]

    def test_no_provider(self):
        assert WordSuggester(None).suggest("ubiquitous") is None

    def test_unavailable_provider_is_not_called(self):
        provider = FakeProvider(available=False)
        assert WordSuggester(provider).suggest("ubiquitous") is None
        assert provider.calls == []

    def test_provider_error_becomes_none(self):
        provider = FakeProvider(error=RuntimeError("rate limited"))
        assert WordSuggester(provider).suggest("ubiquitous") is None

    def test_blank_term(self):
        provider = FakeProvider('{"meaning": "m", "example": "e"}')
        assert WordSuggester(provider).suggest("  ") is None
        assert provider.calls == []


class TestParseSuggestion:

    def test_code_fence(self):
        reply = '```json\n{"meaning": "議程", "example": "Check the agenda."}\n```'
        assert parse_suggestion(reply) == WordSuggestion("議程", "Check the agenda.")

    def test_not_json(self):
        assert parse_suggestion("Sorry, I can't help with that.") is None

    def test_missing_key(self):
        assert parse_suggestion('{"meaning": "m"}') is None

    def test_wrong_types(self):
        assert parse_suggestion('{"meaning": 1, "example": "e"}') is None
        assert parse_suggestion('["m", "e"]') is None

    def test_empty(self):
        assert parse_suggestion("") is None
        assert parse_suggestion(None) is None

    def test_strips_whitespace(self):
        assert parse_suggestion('{"meaning": " m ", "example": " e "}') == WordSuggestion("m", "e")


class TestBuildProvider:

    def setup_method(self):
        self.config = {"ai": {}}

    def test_no_keys(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert build_provider(self.config) is None

    def test_prefers_anthropic_when_both_set(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
        monkeypatch.setenv("OPENAI_API_KEY", "o-key")
        assert isinstance(build_provider(self.config), AnthropicProvider)

    def test_default_provider_openai(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
        monkeypatch.setenv("OPENAI_API_KEY", "o-key")
        self.config["ai"] = {"default_provider": "openai", "openai": {"model": "gpt-4o"}}
        provider = build_provider(self.config)
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_config_key_overrides_env(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        self.config["ai"] = {"anthropic": {"api_key": "from-config"}}
        provider = build_provider(self.config)
        assert provider.api_key == "from-config"

    def test_placeholder_key_ignored(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        self.config["ai"] = {"anthropic": {"api_key": "your-anthropic-api-key-here"}}
        assert build_provider(self.config) is None

    def test_missing_ai_section(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.setenv("OPENAI_API_KEY", "o-key")
        assert isinstance(build_provider({}), OpenAIProvider)
