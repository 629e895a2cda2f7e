"""Custom exceptions for triageparty."""


class TriageError(Exception):
    """Base exception for all triageparty errors."""


class ConfigurationError(TriageError):
    """Collection, rule, or repository configuration is invalid."""


class NotFoundError(ConfigurationError):
    """A referenced identity does not exist."""


class CollectionNotFoundError(NotFoundError):
    """Raised when a collection id is not configured."""

    def __init__(self, collection_id: str):
        self.collection_id = collection_id
        super().__init__(f"collection {collection_id!r} not found")


class RuleNotFoundError(NotFoundError):
    """Raised when a rule id is not configured.

    ``collection_id`` is set when the lookup happened on behalf of a
    collection, so the message names both sides of the broken reference.
    """

    def __init__(self, rule_id: str, collection_id: str | None = None):
        self.rule_id = rule_id
        self.collection_id = collection_id
        if collection_id is None:
            msg = f"rule {rule_id!r} not found"
        else:
            msg = f"collection {collection_id!r}: rule {rule_id!r} not found"
        super().__init__(msg)


class TagNotFoundError(NotFoundError):
    """Raised when a tag id is not part of the static registry."""

    def __init__(self, tag_id: str):
        self.tag_id = tag_id
        super().__init__(f"tag {tag_id!r} not found")


class InvalidRepoError(ConfigurationError):
    """Raised when a repository reference cannot be split into org/project."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"cannot parse repository reference: {ref!r}")


class RuleEvaluationError(TriageError):
    """The rule evaluator failed; wraps the original exception as ``__cause__``."""

    def __init__(self, rule_name: str, collection_id: str, reason: str):
        self.rule_name = rule_name
        self.collection_id = collection_id
        super().__init__(f"rule {rule_name!r}: {reason}")
