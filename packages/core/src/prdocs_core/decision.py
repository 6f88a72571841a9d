"""Decide whether a generated document should be written.

Trimming is only used to detect an empty answer. The unchanged check and the
written content both use the model output exactly as returned.
"""

from __future__ import annotations

from prdocs_core.models import SkipEmpty, SkipUnchanged, UpdateDecision, Write


def decide(proposed: str | None, existing_content: str) -> UpdateDecision:
    if not proposed or not proposed.strip():
        return SkipEmpty()
    if proposed == existing_content:
        return SkipUnchanged()
    return Write(proposed)
