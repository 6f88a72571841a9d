"""update command — regenerate one documentation file from PR review comments."""

from __future__ import annotations

import click
from rich.console import Console

from prdocs_core.config import PROVIDERS, build_run_config, load_config
from prdocs_core.errors import ConfigurationError
from prdocs_core.pipeline import OutcomeStatus, RunOutcome, run_update

console = Console()

_OUTCOME_STYLE = {
    OutcomeStatus.WROTE: "green",
    OutcomeStatus.SHADOW: "cyan",
    OutcomeStatus.FAILED: "red",
}


def _build_store(config: dict):
    """Instantiate the configured document store from .prdocs.yml settings.

    Store selection:
      store: gist → GistDocumentStore (requires gist_id and github_token)
      store: file → FileDocumentStore rooted at store_root (default ".")

    This factory lives in the CLI so neither prdocs_core nor prdocs_store
    know about the config format.
    """
    store_type = config.get("store") or "file"

    if store_type == "gist":
        from prdocs_store.gist import GistDocumentStore

        gist_id = config.get("gist_id")
        if not gist_id:
            raise ConfigurationError("The gist store requires gist_id in .prdocs.yml.")
        return GistDocumentStore(gist_id=str(gist_id), token=config["github_token"])

    if store_type == "file":
        from prdocs_store.file import FileDocumentStore

        return FileDocumentStore(root=config.get("store_root") or ".")

    raise ConfigurationError(f"Unknown store: {store_type!r}. Choose 'file' or 'gist'.")


def _report(ctx: click.Context, outcome: RunOutcome) -> None:
    style = _OUTCOME_STYLE.get(outcome.status, "yellow")
    console.print(f"[{style}]{outcome.describe()}[/{style}]", highlight=False, soft_wrap=True)
    ctx.exit(outcome.exit_code)


@click.command("update")
@click.option("--repo", envvar="REPOSITORY", default=None, help="GitHub repository in owner/name format.")
@click.option(
    "--pr",
    "pr_number",
    envvar="PR_NUMBER",
    default=None,
    help="Pull request number whose review comments are used.",
)
@click.option(
    "--doc",
    "document",
    envvar="DOC_FILE",
    default=None,
    help="Documentation file to create or update. Overrides config file (default AGENTS.md).",
)
@click.option("--model", envvar="LLM_MODEL", default=None, help="Model identifier. Overrides config file.")
@click.option(
    "--provider",
    type=click.Choice(PROVIDERS),
    default=None,
    help="Generation backend. Overrides config file.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the proposed document without writing it.",
)
@click.pass_context
def update_cmd(
    ctx: click.Context,
    repo: str | None,
    pr_number: str | None,
    document: str | None,
    model: str | None,
    provider: str | None,
    shadow: bool,
):
    """Update a documentation file from a pull request's review comments.

    Collects every review and inline comment on the pull request, asks the
    model for an updated version of the document, and writes it only when
    the answer is non-empty and differs from the current content.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub personal access token (or use gh CLI)
      ANTHROPIC_API_KEY    Required when using --provider anthropic
      OPENAI_API_KEY       Required when using --provider openai
    """
    config_path = (ctx.obj or {}).get("config_path", ".prdocs.yml")

    try:
        config = load_config(
            config_path,
            cli_overrides={
                "repo": repo,
                "pr_number": pr_number,
                "document": document,
                "model": model,
                "provider": provider,
            },
        )
        run_config = build_run_config(config)
        store = _build_store(config)
    except ConfigurationError as e:
        _report(ctx, RunOutcome(OutcomeStatus.FAILED, document or "", error=e))
        return

    ctx.call_on_close(store.close)
    _report(ctx, run_update(run_config, store, shadow=shadow))
