"""Collaborator interfaces consumed by the collection engine."""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable

from triageparty.config import Rule
from triageparty.engines.collection.models import RuleResult


@runtime_checkable
class RuleEvaluator(Protocol):
    """Matches one rule against the issue tracker.

    *seen* maps item URL to the rule that first matched it during the
    current collection run. Implementations read it to avoid reporting an
    item twice and write to it for every item they return.
    """

    async def execute_rule(self, rule: Rule, seen: dict[str, Rule]) -> RuleResult: ...


@runtime_checkable
class SearchCache(Protocol):
    """Per-repository search cache that can drop stale entries."""

    async def flush_search_cache(self, org: str, project: str, min_age: timedelta) -> None: ...
