"""Per-run value objects shared by every pipeline stage.

None of these outlive a single run. Comments are normalized once, eagerly,
so downstream code never has to branch on the shape of the upstream record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class CommentKind(str, Enum):
    THREAD = "thread"
    INLINE = "inline"


@dataclass(frozen=True)
class Comment:
    """One piece of review feedback.

    ``review_state`` is only ever set for thread comments; ``file_path`` and
    ``line_number`` only for inline comments.
    """

    kind: CommentKind
    author: str
    body: str
    timestamp: str | None = None
    review_state: str | None = None
    file_path: str | None = None
    line_number: int | None = None


@dataclass(frozen=True)
class PullRequestContext:
    title: str
    description: str | None
    author: str


@dataclass(frozen=True)
class ReviewData:
    """Everything the review source returns for one pull request."""

    pull: PullRequestContext
    thread_reviews: list[dict] = field(default_factory=list)
    inline_comments: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentState:
    existing_content: str = ""
    proposed_content: str = ""


@dataclass(frozen=True)
class Write:
    content: str


@dataclass(frozen=True)
class SkipEmpty:
    pass


@dataclass(frozen=True)
class SkipUnchanged:
    pass


UpdateDecision = Union[Write, SkipEmpty, SkipUnchanged]


@dataclass(frozen=True)
class Prompt:
    system: str
    user: str
