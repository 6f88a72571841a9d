"""Read-only review data source backed by the GitHub REST API (PyGithub).

PyGithub objects are flattened into plain dicts here so the rest of the
pipeline never touches the SDK; the normalizer only sees the fields it maps.
"""

from __future__ import annotations

import logging
from datetime import datetime

from github import Github, GithubException

from prdocs_core.errors import UpstreamFetchError
from prdocs_core.models import PullRequestContext, ReviewData

logger = logging.getLogger(__name__)

_GHOST = "ghost"


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def _login(user) -> str:
    # GitHub returns no user for accounts that have since been deleted.
    return user.login if user is not None else _GHOST


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def pull_context(pr) -> PullRequestContext:
    return PullRequestContext(title=pr.title or "", description=pr.body, author=_login(pr.user))


def get_thread_reviews(pr) -> list[dict]:
    """Return review submissions in the order GitHub lists them."""
    return [
        {
            "author": _login(review.user),
            "state": review.state,
            "body": review.body,
            "submitted_at": _iso(review.submitted_at),
        }
        for review in pr.get_reviews()
    ]


def get_inline_comments(pr) -> list[dict]:
    """Return line-level review comments in the order GitHub lists them."""
    comments = []
    for c in pr.get_review_comments():
        # c.line is None for comments whose line no longer exists in the current diff
        # (e.g. after a force-push). Fall back to original_line in that case.
        line = c.line if c.line is not None else getattr(c, "original_line", None)
        comments.append(
            {
                "author": _login(c.user),
                "path": c.path,
                "line": line,
                "body": c.body,
                "created_at": _iso(c.created_at),
            }
        )
    return comments


def fetch_review_data(repo, pr_number: int) -> ReviewData:
    """Fetch PR metadata and both comment collections.

    Any failure is fatal to the run; partial results are never returned.
    """
    try:
        pr = get_pull(repo, pr_number)
    except GithubException as e:
        raise UpstreamFetchError(f"PR #{pr_number} could not be fetched: {e}") from e

    try:
        inline = get_inline_comments(pr)
        reviews = get_thread_reviews(pr)
    except GithubException as e:
        raise UpstreamFetchError(f"Review comments for PR #{pr_number} could not be fetched: {e}") from e

    logger.debug("PR #%d: %d review(s), %d inline comment(s)", pr_number, len(reviews), len(inline))
    return ReviewData(pull=pull_context(pr), thread_reviews=reviews, inline_comments=inline)
