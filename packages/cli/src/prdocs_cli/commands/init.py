"""init command — interactive setup wizard.

Writes .prdocs.yml and optionally a GitHub Actions workflow that runs
`prdocs update` every time a review is submitted, committing the document
back to the pull request branch when it changed.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

import click
import yaml
from rich.console import Console

from prdocs_core.config import PROVIDERS

console = Console()
logger = logging.getLogger(__name__)

_WORKFLOW_TEMPLATE = """\
name: Update {document} from review comments

on:
  pull_request_review:
    types: [submitted]

jobs:
  update-docs:
    runs-on: ubuntu-latest
    permissions:
      contents: write
      pull-requests: read

    steps:
      - uses: actions/checkout@v4
        with:
          ref: ${{{{ github.event.pull_request.head.ref }}}}

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install prdocs
        run: pip install "prdocs[{provider}]=={version}"

      - name: Update {document}
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
          {api_key_env}: ${{{{ secrets.{api_key_env} }}}}
          REPOSITORY: ${{{{ github.repository }}}}
          PR_NUMBER: ${{{{ github.event.pull_request.number }}}}
        run: prdocs update

      - name: Commit changes
        run: |
          if [ -n "$(git status --porcelain -- '{document}')" ]; then
            git config user.name "github-actions[bot]"
            git config user.email "github-actions[bot]@users.noreply.github.com"
            git add -- '{document}'
            git commit -m "docs: update {document} from PR review comments"
            git push
          fi
"""


@click.command("init")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Auto-detected from git remote.")
@click.pass_context
def init_cmd(ctx: click.Context, repo: str | None):
    """Set up prdocs for a repository.

    Creates .prdocs.yml, optionally creates a GitHub Gist to hold the
    document, and generates a GitHub Actions workflow.
    """
    config_path = Path((ctx.obj or {}).get("config_path", ".prdocs.yml"))
    console.print("\n[bold cyan]prdocs init[/bold cyan] — setup wizard\n")

    if repo is None:
        repo = _detect_repo_from_git()
        if repo:
            console.print(f"[dim]Detected repository: {repo}[/dim]")
        else:
            repo = click.prompt("GitHub repository (owner/name)")

    provider = click.prompt("AI provider", type=click.Choice(PROVIDERS), default="anthropic")
    api_key_env = "ANTHROPIC_API_KEY" if provider == "anthropic" else "OPENAI_API_KEY"
    model = click.prompt("Model identifier", default=_default_model(provider))
    document = click.prompt("Documentation file to maintain", default="AGENTS.md")

    console.print("\nDocument store:")
    console.print("  [bold]file[/bold]  — the file in the repository checkout (default)")
    console.print("  [bold]gist[/bold]  — a file inside a private GitHub Gist")
    store_type = click.prompt("Store backend", type=click.Choice(["file", "gist"]), default="file")

    config: dict = {"provider": provider, "model": model, "document": document, "store": store_type}

    if store_type == "gist":
        gist_id = _create_document_gist(repo, document)
        if gist_id:
            console.print(f"[green]Created Gist: {gist_id}[/green]")
            config["gist_id"] = gist_id
        else:
            config["store"] = "file"
            console.print("[yellow]Gist creation failed — using the file store. Add gist_id manually later.[/yellow]")

    _write_config(config_path, config)
    console.print(f"[green]Created {config_path}[/green]")

    if config["store"] == "file" and click.confirm(
        "\nGenerate .github/workflows/prdocs.yml for GitHub Actions?", default=True
    ):
        _write_workflow(provider, api_key_env, document)
        console.print("[green]Created .github/workflows/prdocs.yml[/green]")
        console.print(
            f"\n[yellow]Remember to add [bold]{api_key_env}[/bold] to your "
            "GitHub repository secrets (Settings → Secrets → Actions).[/yellow]"
        )

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print(f"Update the document with: [bold]prdocs update --repo {repo} --pr <number>[/bold]")


def _default_model(provider: str) -> str:
    if provider == "openai":
        from prdocs_core.providers.openai import OpenAISynthesizer

        return OpenAISynthesizer.DEFAULT_MODEL
    from prdocs_core.providers.anthropic import AnthropicSynthesizer

    return AnthropicSynthesizer.DEFAULT_MODEL


def _detect_repo_from_git() -> str | None:
    """Try to detect the GitHub repo slug from the git remote URL."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        # https://github.com/owner/repo.git  →  owner/repo
        # git@github.com:owner/repo.git      →  owner/repo
        if "github.com" not in url:
            return None
        slug = url.split("github.com")[-1].lstrip("/:").removesuffix(".git")
        return slug if "/" in slug else None
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None


def _create_document_gist(repo: str, document: str) -> str | None:
    """Create a private Gist seeded with the document and return its ID."""
    filename = Path(document).name
    with tempfile.TemporaryDirectory() as tmp_dir:
        # gh names Gist files after their path, so the seed file carries the document's name.
        seed = Path(tmp_dir) / filename
        seed.write_text(f"# {filename}\n")
        try:
            result = subprocess.run(
                ["gh", "gist", "create", "--desc", f"prdocs {filename} for {repo}", str(seed)],
                capture_output=True,
                text=True,
                timeout=15,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None

    if result.returncode == 0:
        gist_url = result.stdout.strip()
        return gist_url.rstrip("/").split("/")[-1]
    logger.warning("gh gist create failed: %s", result.stderr.strip())
    return None


def _write_config(path: Path, config: dict) -> None:
    """Write or update .prdocs.yml, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    """Read the current prdocs version from the installed package metadata."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("prdocs")
    except PackageNotFoundError:
        return "0.1.0"


def _write_workflow(provider: str, api_key_env: str, document: str) -> None:
    workflow_dir = Path(".github/workflows")
    workflow_dir.mkdir(parents=True, exist_ok=True)
    (workflow_dir / "prdocs.yml").write_text(
        _WORKFLOW_TEMPLATE.format(
            provider=provider,
            api_key_env=api_key_env,
            document=document,
            version=_get_version(),
        )
    )
