"""Collection engine — rule execution, cross-rule dedup, and statistics."""

from triageparty.engines.collection.models import CollectionResult, Item, RuleResult
from triageparty.engines.collection.ports import RuleEvaluator, SearchCache
from triageparty.engines.collection.runner import CollectionRunner
from triageparty.engines.collection.summary import avg_day_duration, summarize_collection_result

__all__ = [
    "CollectionResult",
    "CollectionRunner",
    "Item",
    "RuleEvaluator",
    "RuleResult",
    "SearchCache",
    "avg_day_duration",
    "summarize_collection_result",
]
