"""Data models for the collection engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from triageparty.config import Rule
from triageparty.tags import Tag


@dataclass
class Item:
    """A pull request or issue matched by a rule.

    ``url`` is the identity used to track items across rules of one run.
    """

    url: str
    number: int | None = None
    title: str = ""
    author: str | None = None
    created_at: datetime | None = None
    tags: list[Tag] = field(default_factory=list)


@dataclass
class RuleResult:
    """Evaluator output for one rule; day totals are fractional days."""

    rule: Rule
    items: list[Item] = field(default_factory=list)
    total_age_days: float = 0.0
    total_current_hold_days: float = 0.0
    total_accumulated_hold_days: float = 0.0


@dataclass
class CollectionResult:
    """Aggregated statistics for one collection run."""

    time: datetime | None = None
    rule_results: list[RuleResult] = field(default_factory=list)

    total: int = 0
    total_pull_requests: int = 0
    total_issues: int = 0

    avg_age: timedelta = timedelta(0)
    avg_current_hold: timedelta = timedelta(0)
    avg_accumulated_hold: timedelta = timedelta(0)

    total_age_days: float = 0.0
    total_current_hold_days: float = 0.0
    total_accumulated_hold_days: float = 0.0
