"""Collection statistics — pure aggregation over rule results."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

import structlog

from triageparty.engines.collection.models import CollectionResult, RuleResult

log = structlog.get_logger("triageparty.engine")


def summarize_collection_result(results: Iterable[RuleResult]) -> CollectionResult:
    """Fold rule results into collection totals and averages.

    Items count as pull requests or issues according to the rule's declared
    ``type``; individual items are not inspected. Averages stay zero when no
    item matched.
    """
    r = CollectionResult()

    for rr in results:
        count = len(rr.items)
        r.total += count
        if rr.rule.type == "pull_request":
            r.total_pull_requests += count
        else:
            r.total_issues += count

        r.rule_results.append(rr)

        r.total_age_days += rr.total_age_days
        r.total_current_hold_days += rr.total_current_hold_days
        r.total_accumulated_hold_days += rr.total_accumulated_hold_days

    log.info(
        "collection.summarized",
        rules=len(r.rule_results),
        total=r.total,
        total_age_days=round(r.total_age_days, 1),
    )

    if r.total == 0:
        log.warning("collection.summary_empty")
        return r

    r.avg_age = avg_day_duration(r.total_age_days, r.total)
    r.avg_current_hold = avg_day_duration(r.total_current_hold_days, r.total)
    r.avg_accumulated_hold = avg_day_duration(r.total_accumulated_hold_days, r.total)
    return r


def avg_day_duration(total_days: float, count: int) -> timedelta:
    """Average of *total_days* over *count*, truncated to whole hours."""
    return timedelta(hours=int(total_days / count * 24))
