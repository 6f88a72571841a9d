"""Tests for generation backend wrappers.

Shared behaviour (error translation, text check) lives in BaseSynthesizer
and is tested once via a lightweight stub. Provider-specific tests cover only
what differs: the SDK client setup and _call_api.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from prdocs_core.errors import SynthesisError
from prdocs_core.models import Prompt
from prdocs_core.providers.anthropic import AnthropicSynthesizer
from prdocs_core.providers.base import BaseSynthesizer
from prdocs_core.providers.openai import OpenAISynthesizer

PROMPT = Prompt(system="system text", user="user text")


class _StubSynthesizer(BaseSynthesizer):
    def __init__(self, result=None, error=None):
        super().__init__(model="stub-model")
        self._result = result
        self._error = error
        self.calls = []

    def _call_api(self, system_prompt: str, user_prompt: str):
        self.calls.append((system_prompt, user_prompt))
        if self._error is not None:
            raise self._error
        return self._result


# ---------------------------------------------------------------------------
# Shared behaviour — tested once through the stub, not per provider
# ---------------------------------------------------------------------------


class TestBaseSynthesizer:
    def test_returns_text_untouched(self):
        assert _StubSynthesizer(result="  # Agents\n\n").synthesize(PROMPT) == "  # Agents\n\n"

    def test_passes_system_and_user_prompts(self):
        synth = _StubSynthesizer(result="x")
        synth.synthesize(PROMPT)
        assert synth.calls == [("system text", "user text")]

    def test_empty_text_is_not_an_error(self):
        assert _StubSynthesizer(result="").synthesize(PROMPT) == ""

    def test_api_error_becomes_synthesis_error(self):
        synth = _StubSynthesizer(error=RuntimeError("rate limited"))
        with pytest.raises(SynthesisError, match="rate limited"):
            synth.synthesize(PROMPT)

    def test_no_retry_on_failure(self):
        synth = _StubSynthesizer(error=RuntimeError("boom"))
        with pytest.raises(SynthesisError):
            synth.synthesize(PROMPT)
        assert len(synth.calls) == 1

    def test_non_text_response_rejected(self):
        with pytest.raises(SynthesisError, match="non-text"):
            _StubSynthesizer(result=None).synthesize(PROMPT)

    def test_temperature_is_fixed(self):
        assert BaseSynthesizer.TEMPERATURE == 0.7

    def test_max_tokens_override(self):
        class _Sized(_StubSynthesizer):
            def __init__(self):
                BaseSynthesizer.__init__(self, model="m", max_tokens=1024)

        assert _Sized().MAX_TOKENS == 1024
        assert BaseSynthesizer.MAX_TOKENS == 8192


# ---------------------------------------------------------------------------
# Provider-specific — only what differs between Anthropic and OpenAI
# ---------------------------------------------------------------------------


class TestAnthropicSynthesizer:
    def test_raises_import_error_without_sdk(self):
        with patch.dict("sys.modules", {"anthropic": None}):
            with pytest.raises(ImportError):
                AnthropicSynthesizer(api_key="key", model="claude-x")

    def test_default_model_is_claude(self):
        assert "claude" in AnthropicSynthesizer.DEFAULT_MODEL

    def test_call_uses_configured_model_and_temperature(self):
        from anthropic.types import TextBlock

        synth = AnthropicSynthesizer(api_key="key", model="claude-custom")
        synth.client = MagicMock()
        synth.client.messages.create.return_value = SimpleNamespace(
            content=[TextBlock(type="text", text="# Agents\n")]
        )

        assert synth.synthesize(PROMPT) == "# Agents\n"
        kwargs = synth.client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-custom"
        assert kwargs["temperature"] == 0.7
        assert kwargs["system"] == "system text"
        assert kwargs["messages"] == [{"role": "user", "content": "user text"}]

    def test_no_content_blocks_is_empty_text(self):
        synth = AnthropicSynthesizer(api_key="key", model="claude-custom")
        synth.client = MagicMock()
        synth.client.messages.create.return_value = SimpleNamespace(content=[])
        assert synth.synthesize(PROMPT) == ""


class TestOpenAISynthesizer:
    def test_raises_import_error_without_sdk(self):
        import prdocs_core.providers.openai as openai_mod

        real_openai = openai_mod._OpenAI
        openai_mod._OpenAI = None
        try:
            with pytest.raises(ImportError):
                OpenAISynthesizer(api_key="key", model="gpt-x")
        finally:
            openai_mod._OpenAI = real_openai

    def test_default_model_is_gpt(self):
        assert "gpt" in OpenAISynthesizer.DEFAULT_MODEL

    def test_call_uses_configured_model_and_temperature(self):
        synth = OpenAISynthesizer(api_key="key", model="gpt-custom")
        synth.client = MagicMock()
        message = SimpleNamespace(content="# Agents\n")
        synth.client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)]
        )

        assert synth.synthesize(PROMPT) == "# Agents\n"
        kwargs = synth.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-custom"
        assert kwargs["temperature"] == 0.7
        assert kwargs["messages"][0] == {"role": "system", "content": "system text"}

    def test_refusal_without_content_is_synthesis_error(self):
        synth = OpenAISynthesizer(api_key="key", model="gpt-custom")
        synth.client = MagicMock()
        message = SimpleNamespace(content=None)
        synth.client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)]
        )
        with pytest.raises(SynthesisError):
            synth.synthesize(PROMPT)
