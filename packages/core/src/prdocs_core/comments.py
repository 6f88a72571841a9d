"""Merge thread-level reviews and inline comments into one ordered list.

Order is part of the contract: every qualifying thread review in upstream
order, then every inline comment in upstream order. Nothing is re-sorted by
timestamp, so identical upstream data always renders an identical prompt.
"""

from __future__ import annotations

from prdocs_core.models import Comment, CommentKind


def normalize_comments(thread_reviews: list[dict], inline_comments: list[dict]) -> list[Comment]:
    comments = [_from_thread_review(r) for r in thread_reviews if r.get("body")]
    comments.extend(_from_inline_comment(c) for c in inline_comments)
    return comments


def _from_thread_review(review: dict) -> Comment:
    return Comment(
        kind=CommentKind.THREAD,
        author=review.get("author") or "",
        body=review["body"],
        timestamp=review.get("submitted_at"),
        # APPROVED / CHANGES_REQUESTED / COMMENTED; absent on some pending reviews
        review_state=review.get("state") or None,
    )


def _from_inline_comment(comment: dict) -> Comment:
    return Comment(
        kind=CommentKind.INLINE,
        author=comment.get("author") or "",
        body=comment.get("body") or "",
        timestamp=comment.get("created_at"),
        file_path=comment.get("path"),
        line_number=comment.get("line"),
    )
