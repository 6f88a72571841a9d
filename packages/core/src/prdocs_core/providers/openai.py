from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from prdocs_core.providers.base import BaseSynthesizer


class OpenAISynthesizer(BaseSynthesizer):
    DEFAULT_MODEL = "gpt-4o"

    def __init__(self, api_key: str, model: str, max_tokens: int | None = None):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. " "Install it with: pip install 'prdocs[openai]'"
            )
        super().__init__(model, max_tokens)
        self.client = _OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str | None:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        # content is None for refusals and tool calls; synthesize() rejects it.
        return response.choices[0].message.content
