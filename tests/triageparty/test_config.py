"""Tests for collection and rule configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from triageparty.config import Collection, Rule, env_int, parse_collections, parse_rules
from triageparty.exceptions import ConfigurationError


class TestCollection:
    def test_yaml_keys(self):
        c = Collection.model_validate(
            {
                "id": "daily",
                "name": "Daily Triage",
                "rules": ["issue-needs-priority", "pr-unreviewed"],
                "dedup": True,
                "used_for_statistics": True,
            }
        )
        assert c.rule_ids == ["issue-needs-priority", "pr-unreviewed"]
        assert c.dedup is True
        assert c.hidden is False
        assert c.used_for_statistics is True
        assert c.description == ""

    def test_field_names_accepted(self):
        c = Collection(id="x", name="X", rule_ids=["a"])
        assert c.rule_ids == ["a"]

    def test_frozen(self):
        c = Collection(id="x", name="X")
        with pytest.raises(ValidationError):
            c.name = "Y"

    def test_requires_id_and_name(self):
        with pytest.raises(ValidationError):
            Collection.model_validate({"rules": []})


class TestRule:
    def test_defaults(self):
        r = Rule(id="a", name="A")
        assert r.type == "issue"
        assert r.repos == []
        assert r.filters == []

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Rule(id="a", name="A", type="discussion")


class TestParseCollections:
    def test_keeps_order(self):
        cols = parse_collections(
            [{"id": "b", "name": "B", "rules": ["x"]}, {"id": "a", "name": "A"}]
        )
        assert [c.id for c in cols] == ["b", "a"]

    def test_invalid_entry_names_collection(self):
        with pytest.raises(ConfigurationError, match="broken"):
            parse_collections([{"id": "broken", "rules": "not-a-list"}])

    def test_invalid_entry_without_id(self):
        with pytest.raises(ConfigurationError, match="#0"):
            parse_collections([{"name": "anonymous"}])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ConfigurationError, match="duplicate"):
            parse_collections([{"id": "a", "name": "A"}, {"id": "a", "name": "A2"}])


class TestParseRules:
    def test_id_from_key(self):
        rules = parse_rules(
            {
                "pr-unreviewed": {
                    "name": "Unreviewed PRs",
                    "type": "pull_request",
                    "repos": ["https://github.com/o/p"],
                    "filters": [{"tag": "unreviewed"}],
                }
            }
        )
        rule = rules["pr-unreviewed"]
        assert rule.id == "pr-unreviewed"
        assert rule.type == "pull_request"
        assert rule.filters == [{"tag": "unreviewed"}]

    def test_invalid_rule(self):
        with pytest.raises(ConfigurationError, match="bad"):
            parse_rules({"bad": {"type": "pull_request"}})

    def test_non_mapping_body(self):
        with pytest.raises(ConfigurationError, match="empty"):
            parse_rules({"empty": None})


class TestEnvInt:
    def test_default(self, monkeypatch):
        monkeypatch.delenv("TRIAGEPARTY_TEST_VALUE", raising=False)
        assert env_int("TRIAGEPARTY_TEST_VALUE", 4) == 4

    def test_override(self, monkeypatch):
        monkeypatch.setenv("TRIAGEPARTY_TEST_VALUE", "9")
        assert env_int("TRIAGEPARTY_TEST_VALUE", 4) == 9

    @pytest.mark.parametrize("raw", ["abc", "0", "-2"])
    def test_invalid(self, monkeypatch, raw):
        monkeypatch.setenv("TRIAGEPARTY_TEST_VALUE", raw)
        with pytest.raises(ConfigurationError):
            env_int("TRIAGEPARTY_TEST_VALUE", 4)
