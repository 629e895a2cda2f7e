"""Tag vocabulary used to label matched pull requests and issues.

Each tag declares which auxiliary data an evaluator has to load before a
rule using it can be judged. The registry is static and read-only; role
tags from :func:`role_last` are built on demand and never registered.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from triageparty.exceptions import TagNotFoundError


@dataclass(frozen=True)
class Tag:
    """A classification label."""

    id: str
    description: str
    needs_comments: bool = False
    needs_reviews: bool = False
    needs_timeline: bool = False

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "description": self.description}


@dataclass(frozen=True)
class DataRequirements:
    """Auxiliary data an evaluator must fetch for a set of tags."""

    comments: bool = False
    reviews: bool = False
    timeline: bool = False


# ── simple ────────────────────────────────────────────────────────────────

ASSIGNED = Tag("assigned", "Someone is assigned")
CLOSED = Tag("closed", "This item has been closed")
OPEN_MILESTONE = Tag("open-milestone", "The issue is associated to an open milestone")
SIMILAR = Tag("similar", "Title appears similar to another PR or issue")
MERGED = Tag("merged", "PR was merged")
DRAFT = Tag("draft", "Draft PR")

# ── comment-based ─────────────────────────────────────────────────────────

COMMENTED = Tag("commented", "A project member has commented on this", needs_comments=True)
SEND = Tag(
    "send", "A project member commented more recently than the author", needs_comments=True
)
RECV = Tag(
    "recv", "The author commented more recently than a project member", needs_comments=True
)
RECV_Q = Tag(
    "recv-q",
    "The author has asked a question since the last project member commented",
    needs_comments=True,
)
AUTHOR_LAST = Tag("author-last", "The last commenter was the original author", needs_comments=True)
ASSIGNEE_UPDATED = Tag(
    "assignee-updated", "Issue has been updated by its assignee", needs_comments=True
)

# ── review-based ──────────────────────────────────────────────────────────

APPROVED = Tag("approved", "Last review was an approval", needs_reviews=True)
REVIEWED_WITH_COMMENT = Tag("reviewed-with-comment", "Last review was a comment", needs_reviews=True)
CHANGES_REQUESTED = Tag(
    "changes-requested", "Last review was a request for changes", needs_reviews=True
)
NEW_COMMITS = Tag("new-commits", "PR has commits since the last review", needs_reviews=True)
PUSHED_AFTER_APPROVAL = Tag(
    "pushed-after-approval", "PR was pushed to after approval", needs_reviews=True
)
UNREVIEWED = Tag("unreviewed", "PR has never been reviewed", needs_reviews=True)

# ── timeline-based (cross-referenced PRs) ─────────────────────────────────

XREF_APPROVED = Tag("pr-approved", "Last review was an approval", needs_timeline=True)
XREF_REVIEWED_WITH_COMMENT = Tag(
    "pr-reviewed-with-comment", "Last review was a comment", needs_timeline=True
)
XREF_CHANGES_REQUESTED = Tag(
    "pr-changes-requested", "Last review was a request for changes", needs_timeline=True
)
XREF_NEW_COMMITS = Tag(
    "pr-new-commits", "PR has commits since the last review", needs_timeline=True
)
XREF_PUSHED_AFTER_APPROVAL = Tag(
    "pr-pushed-after-approval", "PR was pushed to after approval", needs_timeline=True
)
XREF_UNREVIEWED = Tag("pr-unreviewed", "PR has never been reviewed", needs_timeline=True)

# ── special ───────────────────────────────────────────────────────────────

NONE = Tag(
    "none",
    "No tag matched",
    needs_comments=True,
    needs_reviews=True,
    needs_timeline=True,
)

# Every tag above must be listed here.
ALL_TAGS: tuple[Tag, ...] = (
    ASSIGNED,
    CLOSED,
    OPEN_MILESTONE,
    SIMILAR,
    MERGED,
    DRAFT,
    COMMENTED,
    SEND,
    RECV,
    RECV_Q,
    AUTHOR_LAST,
    ASSIGNEE_UPDATED,
    APPROVED,
    REVIEWED_WITH_COMMENT,
    CHANGES_REQUESTED,
    NEW_COMMITS,
    PUSHED_AFTER_APPROVAL,
    UNREVIEWED,
    XREF_APPROVED,
    XREF_REVIEWED_WITH_COMMENT,
    XREF_CHANGES_REQUESTED,
    XREF_NEW_COMMITS,
    XREF_PUSHED_AFTER_APPROVAL,
    XREF_UNREVIEWED,
    NONE,
)

_BY_ID: dict[str, Tag] = {t.id: t for t in ALL_TAGS}


def role_last(role: str) -> Tag:
    """Return the ``<role>-last`` tag for a project role (e.g. ``maintainer``).

    The tag carries no data flags and is not part of :data:`ALL_TAGS`; merge
    it into a sequence and call :func:`dedup` if uniqueness matters.
    """
    return Tag(f"{role}-last", f"The last commenter was a project {role}")


def dedup(tags: Iterable[Tag]) -> list[Tag]:
    """Keep the first tag for each id, preserving order."""
    deduped: list[Tag] = []
    seen: set[str] = set()
    for t in tags:
        if t.id in seen:
            continue
        deduped.append(t)
        seen.add(t.id)
    return deduped


def get_tag(tag_id: str) -> Tag:
    """Look up a registered tag by id.

    Raises :class:`TagNotFoundError` for ids outside the static registry,
    including role tags.
    """
    try:
        return _BY_ID[tag_id]
    except KeyError:
        raise TagNotFoundError(tag_id) from None


def data_requirements(tags: Iterable[Tag]) -> DataRequirements:
    """Combine the data flags of *tags*."""
    comments = reviews = timeline = False
    for t in tags:
        comments = comments or t.needs_comments
        reviews = reviews or t.needs_reviews
        timeline = timeline or t.needs_timeline
    return DataRequirements(comments=comments, reviews=reviews, timeline=timeline)
