from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from prdocs_core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "provider": "anthropic",
    "model": None,  # required; set in .prdocs.yml, --model or LLM_MODEL
    "document": "AGENTS.md",
    "max_tokens": 8192,
    "store": "file",  # "file" | "gist"
    "store_root": ".",
    "gist_id": None,
}

PROVIDERS = ("anthropic", "openai")
_API_KEY_FIELDS = {"anthropic": "anthropic_api_key", "openai": "openai_api_key"}
_API_KEY_ENV = {"anthropic": "ANTHROPIC_API_KEY", "openai": "OPENAI_API_KEY"}
_REPO_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


@dataclass(frozen=True)
class RunConfig:
    """Validated parameters for a single run, built once at the process boundary."""

    repo: str
    pr_number: int
    document: str
    model: str
    provider: str
    max_tokens: int
    github_token: str = field(repr=False)
    api_key: str = field(repr=False)


def load_config(config_path: str = ".prdocs.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prdocs.yml in the current directory
      3. CLI argument overrides (including their environment variables)
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {config_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping, got {type(file_config).__name__}")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables; GitHub falls back to the gh CLI session
    config["github_token"] = os.environ.get("GITHUB_TOKEN") or gh_cli_token()
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    return config


def gh_cli_token() -> str | None:
    """Return the token stored by `gh auth login`, or None if gh is unavailable."""
    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5)
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI token lookup failed: %s", e)
        return None
    token = result.stdout.strip() if result.returncode == 0 else ""
    return token or None


def parse_pr_number(value) -> int:
    try:
        number = int(str(value).strip(), 10)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Pull request number must be an integer, got {value!r}")
    if number <= 0:
        raise ConfigurationError(f"Pull request number must be positive, got {number}")
    return number


def build_run_config(config: dict) -> RunConfig:
    """Validate a merged config dict and freeze it into a RunConfig.

    Raises ConfigurationError naming the first missing or malformed option.
    """
    repo = config.get("repo")
    if not repo:
        raise ConfigurationError("Repository is required (--repo or REPOSITORY).")
    if not isinstance(repo, str) or not _REPO_RE.match(repo):
        raise ConfigurationError(f"Repository must be in owner/name format, got {repo!r}")

    if config.get("pr_number") in (None, ""):
        raise ConfigurationError("Pull request number is required (--pr or PR_NUMBER).")
    pr_number = parse_pr_number(config["pr_number"])

    document = config.get("document")
    if not document:
        raise ConfigurationError("Document is required (--doc, DOC_FILE or 'document' in .prdocs.yml).")

    model = config.get("model")
    if not model:
        raise ConfigurationError("Model identifier is required (--model, LLM_MODEL or 'model' in .prdocs.yml).")

    provider = config.get("provider")
    if provider not in PROVIDERS:
        raise ConfigurationError(f"Unknown provider: {provider!r}. Choose 'anthropic' or 'openai'.")

    github_token = config.get("github_token")
    if not github_token:
        raise ConfigurationError("No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.")

    api_key = config.get(_API_KEY_FIELDS[provider])
    if not api_key:
        raise ConfigurationError(f"{_API_KEY_ENV[provider]} environment variable is not set.")

    try:
        max_tokens = int(config.get("max_tokens") or DEFAULT_CONFIG["max_tokens"])
    except (TypeError, ValueError):
        raise ConfigurationError(f"max_tokens must be an integer, got {config.get('max_tokens')!r}")

    return RunConfig(
        repo=repo,
        pr_number=pr_number,
        document=str(document),
        model=str(model),
        provider=provider,
        max_tokens=max_tokens,
        github_token=github_token,
        api_key=api_key,
    )
