"""Render the system instruction and user prompt for a documentation update.

Pure functions of their inputs: the same pull request, comments and current
document always render byte-identical prompts. Comments are rendered in full
and in the order given; nothing is summarized or truncated here.
"""

from __future__ import annotations

from prdocs_core.models import Comment, CommentKind, Prompt, PullRequestContext

NO_DESCRIPTION = "No description provided"
EMPTY_DOCUMENT = "(Empty - needs to be created)"


def build_system_prompt(document: str) -> str:
    return f"""You are a documentation assistant. Your job is to update or create the {document} documentation file based on PR review comments.

{document} should contain information about AI agents, automated processes, agent-related patterns, or agent implementation details discussed in the PR reviews.

IMPORTANT:
- When updating the documentation, preserve all existing functionality, requirements, and instructions.
- Only add or clarify based on the review comments - never remove or reduce existing content unless explicitly requested in the comments.
- If the review comments don't contain relevant information for this documentation file, return an empty response (no text at all).
- Return the full updated content of the {document} file as plain text (not JSON)."""  # noqa: E501


def render_comment(index: int, comment: Comment) -> str:
    """Render one comment block; ``index`` is 1-based."""
    lines = [
        f"Comment {index}:",
        f"  Type: {comment.kind.value}",
        f"  Author: {comment.author}",
    ]
    if comment.kind is CommentKind.THREAD and comment.review_state:
        lines.append(f"  State: {comment.review_state}")
    if comment.kind is CommentKind.INLINE and comment.file_path:
        if comment.line_number is not None:
            lines.append(f"  File: {comment.file_path} (Line {comment.line_number})")
        else:
            lines.append(f"  File: {comment.file_path}")
    lines.append(f"  Body: {comment.body}")
    return "\n".join(lines)


def build_pr_context(pull: PullRequestContext, comments: list[Comment]) -> str:
    rendered = "\n\n".join(render_comment(i, c) for i, c in enumerate(comments, 1))
    return (
        f"PR Title: {pull.title}\n"
        f"PR Description: {pull.description or NO_DESCRIPTION}\n"
        f"PR Author: {pull.author}\n"
        "\n"
        f"Review Comments ({len(comments)} total):\n"
        "\n"
        f"{rendered}\n"
    )


def build_user_prompt(
    pull: PullRequestContext,
    comments: list[Comment],
    document: str,
    existing_content: str,
) -> str:
    return f"""Please update the {document} documentation based on these PR review comments:

{build_pr_context(pull, comments)}
Existing documentation:

Current {document}:
{existing_content or EMPTY_DOCUMENT}

Generate the full updated content for {document} that incorporates insights from the review comments. If the review comments don't contain information relevant to {document}, return empty text."""  # noqa: E501


def build_prompt(
    pull: PullRequestContext,
    comments: list[Comment],
    document: str,
    existing_content: str,
) -> Prompt:
    return Prompt(
        system=build_system_prompt(document),
        user=build_user_prompt(pull, comments, document, existing_content),
    )
