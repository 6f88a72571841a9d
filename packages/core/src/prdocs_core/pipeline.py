"""Documentation update orchestration.

One run: fetch review data → normalize comments → read the document →
build the prompt → one backend call → decide → at most one write.
Failures are returned as a RunOutcome rather than raised, so the caller
(the CLI) decides how to map them to an exit status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from rich.console import Console

from prdocs_core.comments import normalize_comments
from prdocs_core.config import RunConfig
from prdocs_core.decision import decide
from prdocs_core.errors import (
    ConfigurationError,
    DocumentReadError,
    DocumentWriteError,
    PrdocsError,
    UpstreamFetchError,
)
from prdocs_core.gh.pull_request import fetch_review_data, get_repo
from prdocs_core.models import DocumentState, ReviewData, SkipEmpty, SkipUnchanged, UpdateDecision
from prdocs_core.prompt import build_prompt
from prdocs_core.providers.base import BaseSynthesizer

console = Console()
logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    WROTE = "wrote"
    SKIPPED_EMPTY = "skipped-empty"
    SKIPPED_UNCHANGED = "skipped-unchanged"
    NOTHING_TO_PROCESS = "nothing-to-process"
    SHADOW = "shadow"
    FAILED = "failed"


@dataclass(frozen=True)
class RunOutcome:
    """The single result of a run, reported by the CLI as one line."""

    status: OutcomeStatus
    document: str
    decision: UpdateDecision | None = None
    error: PrdocsError | None = None

    @property
    def exit_code(self) -> int:
        return 1 if self.status is OutcomeStatus.FAILED else 0

    def describe(self) -> str:
        if self.status is OutcomeStatus.WROTE:
            return f"wrote {self.document}"
        if self.status is OutcomeStatus.SKIPPED_EMPTY:
            return f"skipped {self.document}: empty"
        if self.status is OutcomeStatus.SKIPPED_UNCHANGED:
            return f"skipped {self.document}: unchanged"
        if self.status is OutcomeStatus.NOTHING_TO_PROCESS:
            return f"skipped {self.document}: no comments to process"
        if self.status is OutcomeStatus.SHADOW:
            return f"shadow: would write {self.document}"
        return f"failed: {self.error.describe() if self.error else 'unknown error'}"


def get_synthesizer(config: RunConfig) -> BaseSynthesizer:
    # Provider modules import their SDK lazily, so only the configured one is required.
    try:
        if config.provider == "anthropic":
            from prdocs_core.providers.anthropic import AnthropicSynthesizer

            return AnthropicSynthesizer(api_key=config.api_key, model=config.model, max_tokens=config.max_tokens)
        if config.provider == "openai":
            from prdocs_core.providers.openai import OpenAISynthesizer

            return OpenAISynthesizer(api_key=config.api_key, model=config.model, max_tokens=config.max_tokens)
    except ImportError as e:
        raise ConfigurationError(str(e)) from e
    raise ConfigurationError(f"Unknown provider: {config.provider!r}. Choose 'anthropic' or 'openai'.")


def _fetch(config: RunConfig, repo_obj) -> ReviewData:
    try:
        repo = repo_obj if repo_obj is not None else get_repo(config.repo, token=config.github_token)
        return fetch_review_data(repo, config.pr_number)
    except PrdocsError:
        raise
    except Exception as e:
        # Network failures surface as requests/urllib3 errors, not GithubException.
        raise UpstreamFetchError(f"Could not fetch PR #{config.pr_number} from {config.repo}: {e}") from e


def _read_document(store, document: str) -> str:
    try:
        content = store.read(document)
    except Exception as e:
        raise DocumentReadError(f"Could not read {document}: {e}") from e
    if content is None:
        console.print(f"[dim]{document} does not exist yet[/dim]")
        return ""
    return content


def _write_document(store, document: str, content: str) -> None:
    try:
        store.write(document, content)
    except Exception as e:
        raise DocumentWriteError(f"Generated content for {document} could not be written: {e}") from e


def print_shadow_document(document: str, content: str) -> None:
    """Print the proposed document to the terminal without writing it."""
    console.print(f"\n[bold]Shadow run — proposed {document} (not written)[/bold]\n")
    console.print(content, markup=False, highlight=False)


def run_update(
    config: RunConfig,
    store,
    synthesizer: BaseSynthesizer | None = None,
    repo_obj=None,
    shadow: bool = False,
) -> RunOutcome:
    """Run the documentation update pipeline once and return its outcome.

    ``store`` must provide ``read(document) -> str | None`` (None when the
    document does not exist) and ``write(document, content)``.
    """
    document = config.document
    console.print(f"Processing PR #{config.pr_number} in {config.repo}")
    console.print(f"Updating documentation file: {document}")

    try:
        if synthesizer is None:
            synthesizer = get_synthesizer(config)

        data = _fetch(config, repo_obj)

        comments = normalize_comments(data.thread_reviews, data.inline_comments)
        console.print(f"Found {len(comments)} comments total")
        if not comments:
            console.print("[yellow]No comments to process[/yellow]")
            return RunOutcome(OutcomeStatus.NOTHING_TO_PROCESS, document)

        state = DocumentState(existing_content=_read_document(store, document))
        prompt = build_prompt(data.pull, comments, document, state.existing_content)
        logger.debug("Rendered prompt: %d system chars, %d user chars", len(prompt.system), len(prompt.user))

        console.print("Calling LLM to generate documentation...")
        state = DocumentState(state.existing_content, synthesizer.synthesize(prompt))

        decision = decide(state.proposed_content, state.existing_content)
        if isinstance(decision, SkipEmpty):
            console.print(f"[yellow]No relevant changes for {document} - skipping update[/yellow]")
            return RunOutcome(OutcomeStatus.SKIPPED_EMPTY, document, decision)
        if isinstance(decision, SkipUnchanged):
            console.print(f"[yellow]Content unchanged for {document} - skipping update[/yellow]")
            return RunOutcome(OutcomeStatus.SKIPPED_UNCHANGED, document, decision)

        if shadow:
            print_shadow_document(document, decision.content)
            return RunOutcome(OutcomeStatus.SHADOW, document, decision)

        _write_document(store, document, decision.content)
        console.print(f"[green]✓ Updated {document}[/green]")
        return RunOutcome(OutcomeStatus.WROTE, document, decision)
    except PrdocsError as e:
        logger.debug("Run failed at stage %s", e.stage, exc_info=True)
        return RunOutcome(OutcomeStatus.FAILED, document, error=e)
