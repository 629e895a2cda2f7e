"""Configuration models for collections and rules.

Files are read elsewhere; these models validate the already-loaded
mappings and accept the YAML key names (``rules``, ``used_for_statistics``).
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from triageparty.exceptions import ConfigurationError

ItemKind = Literal["pull_request", "issue"]


class Rule(BaseModel):
    """A rule definition as handed to the rule evaluator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    resolution: str = ""
    type: ItemKind = "issue"
    filters: list[dict[str, Any]] = Field(default_factory=list)
    repos: list[str] = Field(default_factory=list)


class Collection(BaseModel):
    """A named, ordered grouping of rules."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    rule_ids: list[str] = Field(default_factory=list, alias="rules")
    dedup: bool = False
    hidden: bool = False
    used_for_statistics: bool = False


def parse_collections(raw: Iterable[Mapping[str, Any]]) -> list[Collection]:
    """Validate a list of collection mappings, keeping their order.

    Raises :class:`ConfigurationError` on an invalid entry or a repeated id.
    """
    collections: list[Collection] = []
    ids: set[str] = set()
    for idx, entry in enumerate(raw):
        try:
            collection = Collection.model_validate(entry)
        except PydanticValidationError as exc:
            label = entry.get("id", f"#{idx}") if isinstance(entry, Mapping) else f"#{idx}"
            raise ConfigurationError(f"collection {label}: {exc}") from exc
        if collection.id in ids:
            raise ConfigurationError(f"duplicate collection id: {collection.id!r}")
        ids.add(collection.id)
        collections.append(collection)
    return collections


def parse_rules(raw: Mapping[str, Mapping[str, Any]]) -> dict[str, Rule]:
    """Validate rule bodies keyed by rule id (the YAML ``rules:`` layout)."""
    rules: dict[str, Rule] = {}
    for rule_id, body in raw.items():
        if not isinstance(body, Mapping):
            raise ConfigurationError(f"rule {rule_id!r}: expected a mapping")
        try:
            rules[rule_id] = Rule.model_validate({**body, "id": rule_id})
        except PydanticValidationError as exc:
            raise ConfigurationError(f"rule {rule_id!r}: {exc}") from exc
    return rules


def env_int(key: str, default: int) -> int:
    """Read a positive integer setting from the environment."""
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{key} must be >= 1, got {value}")
    return value
