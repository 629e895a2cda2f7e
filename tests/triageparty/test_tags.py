"""Tests for the tag registry."""

from __future__ import annotations

import pytest

from triageparty import tags
from triageparty.exceptions import NotFoundError, TagNotFoundError
from triageparty.tags import (
    ALL_TAGS,
    APPROVED,
    AUTHOR_LAST,
    CLOSED,
    COMMENTED,
    NONE,
    XREF_UNREVIEWED,
    DataRequirements,
    Tag,
    data_requirements,
    dedup,
    get_tag,
    role_last,
)


class TestDedup:
    def test_keeps_first_occurrence_in_order(self):
        assert dedup([APPROVED, CLOSED, APPROVED]) == [APPROVED, CLOSED]

    def test_idempotent(self):
        once = dedup([CLOSED, APPROVED, CLOSED, COMMENTED, APPROVED])
        assert dedup(once) == once
        assert once == [CLOSED, APPROVED, COMMENTED]

    def test_does_not_mutate_input(self):
        original = [APPROVED, APPROVED]
        result = dedup(original)
        assert original == [APPROVED, APPROVED]
        assert result is not original

    def test_empty(self):
        assert dedup([]) == []

    def test_dedups_by_id_not_by_value(self):
        """Two tags with the same id but different fields collapse to the first."""
        other = Tag("approved", "something else entirely")
        assert dedup([other, APPROVED]) == [other]

    def test_role_tag_merged_with_registry_tags(self):
        merged = [role_last("member"), AUTHOR_LAST, role_last("member")]
        result = dedup(merged)
        assert [t.id for t in result] == ["member-last", "author-last"]

    def test_accepts_iterables(self):
        assert dedup(iter([CLOSED, CLOSED])) == [CLOSED]


class TestRegistry:
    def test_ids_are_unique(self):
        ids = [t.id for t in ALL_TAGS]
        assert len(ids) == len(set(ids))

    def test_all_tags_is_exhaustive(self):
        """Every Tag constant declared in the module must be listed in ALL_TAGS."""
        declared = [
            value
            for name, value in vars(tags).items()
            if name.isupper() and isinstance(value, Tag)
        ]
        assert declared
        for t in declared:
            assert t in ALL_TAGS, f"{t.id} missing from ALL_TAGS"
        assert len(declared) == len(ALL_TAGS)

    def test_none_needs_everything(self):
        assert NONE.needs_comments and NONE.needs_reviews and NONE.needs_timeline

    def test_get_tag(self):
        assert get_tag("approved") is APPROVED
        assert get_tag("pr-unreviewed") is XREF_UNREVIEWED

    def test_get_tag_unknown(self):
        with pytest.raises(TagNotFoundError, match="bogus") as exc_info:
            get_tag("bogus")
        assert exc_info.value.tag_id == "bogus"
        assert isinstance(exc_info.value, NotFoundError)

    def test_role_tags_are_not_registered(self):
        with pytest.raises(TagNotFoundError):
            get_tag(role_last("maintainer").id)

    def test_to_dict(self):
        assert CLOSED.to_dict() == {"id": "closed", "description": "This item has been closed"}

    def test_tags_are_immutable(self):
        with pytest.raises(AttributeError):
            APPROVED.id = "changed"  # type: ignore[misc]


class TestRoleLast:
    def test_maintainer(self):
        t = role_last("maintainer")
        assert t.id == "maintainer-last"
        assert "maintainer" in t.description

    def test_no_data_flags(self):
        t = role_last("owner")
        assert not (t.needs_comments or t.needs_reviews or t.needs_timeline)
        assert t not in ALL_TAGS


class TestDataRequirements:
    def test_empty(self):
        assert data_requirements([]) == DataRequirements()

    def test_simple_tags_need_nothing(self):
        assert data_requirements([CLOSED, role_last("member")]) == DataRequirements()

    def test_combines_flags(self):
        req = data_requirements([COMMENTED, APPROVED])
        assert req == DataRequirements(comments=True, reviews=True, timeline=False)

    def test_timeline(self):
        assert data_requirements([XREF_UNREVIEWED]).timeline is True
