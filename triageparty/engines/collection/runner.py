"""CollectionRunner — executes collections and flushes their search caches."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone

import structlog

from triageparty.config import Collection, Rule, env_int
from triageparty.core.github import parse_repo
from triageparty.engines.collection.models import CollectionResult, RuleResult
from triageparty.engines.collection.ports import RuleEvaluator, SearchCache
from triageparty.engines.collection.summary import summarize_collection_result
from triageparty.exceptions import (
    CollectionNotFoundError,
    RuleEvaluationError,
    RuleNotFoundError,
    TriageError,
)

log = structlog.get_logger("triageparty.engine")

_DEFAULT_FLUSH_CONCURRENCY = 4
_DEFAULT_COLLECTION_CONCURRENCY = 2


class CollectionRunner:
    """Orchestration layer: configured collections → evaluator → statistics.

    Holds the resolved configuration in memory. Every call to
    :meth:`execute_collection` works on its own ``seen`` map, so separate
    collections may run concurrently.
    """

    def __init__(
        self,
        collections: Iterable[Collection],
        rules: Mapping[str, Rule],
        evaluator: RuleEvaluator,
        cache: SearchCache,
    ) -> None:
        self._collections = list(collections)
        self._rules = dict(rules)
        self._evaluator = evaluator
        self._cache = cache

    # ── lookups ────────────────────────────────────────────────────────────

    def list_collections(self) -> list[Collection]:
        return list(self._collections)

    def lookup_collection(self, collection_id: str) -> Collection:
        """Return the collection with this exact id.

        Raises :class:`CollectionNotFoundError` if it is not configured.
        """
        for c in self._collections:
            if c.id == collection_id:
                return c
        raise CollectionNotFoundError(collection_id)

    def lookup_rule(self, rule_id: str, collection_id: str | None = None) -> Rule:
        """Return the rule with this id.

        *collection_id* only enriches the :class:`RuleNotFoundError` message.
        """
        try:
            return self._rules[rule_id]
        except KeyError:
            raise RuleNotFoundError(rule_id, collection_id) from None

    # ── execution ──────────────────────────────────────────────────────────

    async def execute_collection(self, collection: Collection) -> CollectionResult:
        """Evaluate every rule of *collection* once and summarize the results.

        1. Skip repeated rule ids (logged, not fatal)
        2. Resolve each rule; an unknown id aborts the run
        3. Evaluate rules in order, sharing one ``seen`` map
        4. Fold the results and stamp the completion time

        Any evaluator failure aborts the run with :class:`RuleEvaluationError`;
        no partial result is returned.
        """
        log.info("collection.executing", collection=collection.id, rules=collection.rule_ids)
        start = time.monotonic()

        results: list[RuleResult] = []
        seen: dict[str, Rule] = {}
        processed: set[str] = set()

        for rule_id in collection.rule_ids:
            if rule_id in processed:
                log.warning(
                    "collection.duplicate_rule", collection=collection.id, rule=rule_id
                )
                continue
            processed.add(rule_id)

            rule = self.lookup_rule(rule_id, collection.id)

            try:
                rr = await self._evaluator.execute_rule(rule, seen)
            except Exception as exc:
                raise RuleEvaluationError(rule.name, collection.id, str(exc)) from exc

            results.append(rr)

        r = summarize_collection_result(results)
        r.time = datetime.now(timezone.utc)
        log.info(
            "collection.executed",
            collection=collection.id,
            total=r.total,
            duration_seconds=round(time.monotonic() - start, 3),
        )
        return r

    async def execute_all(self, *, include_hidden: bool = True) -> dict[str, CollectionResult]:
        """Execute all collections with bounded concurrency.

        A collection that fails with a :class:`TriageError` is logged and left
        out of the returned mapping; the others still complete. Any other
        exception is re-raised once every collection task has finished.
        """
        collections = [c for c in self._collections if include_hidden or not c.hidden]
        if not collections:
            return {}

        sem = asyncio.Semaphore(
            env_int("TRIAGEPARTY_COLLECTION_CONCURRENCY", _DEFAULT_COLLECTION_CONCURRENCY)
        )

        async def _run_one(c: Collection) -> CollectionResult | None:
            async with sem:
                try:
                    return await self.execute_collection(c)
                except TriageError as exc:
                    log.error("collection.failed", collection=c.id, error=str(exc))
                    return None

        outcomes = await asyncio.gather(
            *(_run_one(c) for c in collections), return_exceptions=True
        )

        results: dict[str, CollectionResult] = {}
        for c, outcome in zip(collections, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                log.error("collection.crashed", collection=c.id, error=repr(outcome))
                raise outcome
            if outcome is not None:
                results[c.id] = outcome
        return results

    # ── cache ──────────────────────────────────────────────────────────────

    async def flush_search_cache(self, collection_id: str, min_age: timedelta) -> list[str]:
        """Flush cached searches older than *min_age* for every repository in a collection.

        Each repository is flushed once no matter how many rules reference
        it. Unknown rules and malformed repository references abort before
        anything is flushed; a failed flush is logged and the remaining
        repositories are still processed.

        Returns the ``org/project`` names that flushed successfully.
        """
        collection = self.lookup_collection(collection_id)

        refs: list[str] = []
        for rule_id in collection.rule_ids:
            rule = self.lookup_rule(rule_id, collection.id)
            for ref in rule.repos:
                if ref not in refs:
                    refs.append(ref)

        targets: list[tuple[str, str]] = []
        for ref in refs:
            pair = parse_repo(ref)
            if pair not in targets:
                targets.append(pair)

        sem = asyncio.Semaphore(
            env_int("TRIAGEPARTY_FLUSH_CONCURRENCY", _DEFAULT_FLUSH_CONCURRENCY)
        )

        async def _flush_one(org: str, project: str) -> bool:
            async with sem:
                log.info("cache.flushing", repo=f"{org}/{project}", min_age=str(min_age))
                try:
                    await self._cache.flush_search_cache(org, project, min_age)
                except Exception as exc:
                    log.warning("cache.flush_failed", repo=f"{org}/{project}", error=str(exc))
                    return False
                return True

        flushed = await asyncio.gather(*(_flush_one(org, project) for org, project in targets))
        return [
            f"{org}/{project}" for (org, project), ok in zip(targets, flushed, strict=True) if ok
        ]
