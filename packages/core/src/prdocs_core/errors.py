"""Exception hierarchy for the documentation update pipeline.

Every failure the pipeline can report is a PrdocsError. The ``stage`` label
names the step that failed so the outcome line tells operators where the run
stopped, e.g. ``failed: write: permission denied`` means a document was
generated but never persisted.
"""

from __future__ import annotations


class PrdocsError(Exception):
    stage: str = "pipeline"

    def describe(self) -> str:
        return f"{self.stage}: {self}"


class ConfigurationError(PrdocsError):
    """A required run parameter is missing or malformed."""

    stage = "configuration"


class UpstreamFetchError(PrdocsError):
    """The pull request or one of its comment collections could not be fetched."""

    stage = "fetch"


class DocumentReadError(PrdocsError):
    """The document store failed for a reason other than a missing document."""

    stage = "read"


class SynthesisError(PrdocsError):
    """The generation backend failed or returned something other than text."""

    stage = "synthesis"


class DocumentWriteError(PrdocsError):
    """Content was generated but could not be written back to the store."""

    stage = "write"
