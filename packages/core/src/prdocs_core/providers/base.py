"""Base synthesizer implementing the Template Method pattern.

All providers share the same invocation contract:
    synthesize() → _call_api()   ← only this differs per provider
                 → text check

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the completion text

No retry loop: one backend call per run, and any failure ends the run as a
SynthesisError.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from prdocs_core.errors import SynthesisError
from prdocs_core.models import Prompt

logger = logging.getLogger(__name__)

_TEMPERATURE = 0.7
_MAX_TOKENS = 8192


class BaseSynthesizer(ABC):
    TEMPERATURE: float = _TEMPERATURE
    MAX_TOKENS: int = _MAX_TOKENS
    # Suggested model for the init wizard; runs always use the configured model.
    DEFAULT_MODEL: str = ""

    def __init__(self, model: str, max_tokens: int | None = None):
        self.model = model
        if max_tokens is not None:
            self.MAX_TOKENS = max_tokens

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def synthesize(self, prompt: Prompt) -> str:
        """Invoke the backend once and return the raw completion text.

        The text is returned untouched, surrounding whitespace included.
        """
        logger.debug(
            "%s: calling %s (temperature=%s, max_tokens=%d)",
            self.__class__.__name__,
            self.model,
            self.TEMPERATURE,
            self.MAX_TOKENS,
        )
        try:
            text = self._call_api(prompt.system, prompt.user)
        except SynthesisError:
            raise
        except Exception as e:
            raise SynthesisError(f"{self.__class__.__name__} API call failed: {e}") from e

        if not isinstance(text, str):
            raise SynthesisError(
                f"{self.__class__.__name__} returned a non-text response ({type(text).__name__})"
            )
        return text

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str | None:
        """Make a single API call and return the raw text of the completion.

        Should raise on failure; synthesize() translates the error.
        """
