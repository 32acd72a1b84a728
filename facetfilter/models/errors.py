"""
Engine error types.

Both core errors are caller bugs: a record without a value for a declared
dimension, or a toggle naming a value the index never saw. Neither is
retried and neither leaves partial state behind.
"""

from collections.abc import Hashable

from facetfilter.models.failure import FailureKind, KnownError


class MalformedItemError(KnownError):
    """Raised when a catalog item is missing a value for a declared dimension."""

    def __init__(self, position: int, dimension: str) -> None:
        self.position = position
        self.dimension = dimension
        super().__init__(
            kind=FailureKind.MALFORMED_ITEM,
            message=f"Catalog item {position} has no value for dimension '{dimension}'",
            suggestion="Every item must supply one value per declared dimension.",
            status_code=422,
        )


class UnknownValueError(KnownError):
    """Raised when a (dimension, value) pair was never indexed."""

    def __init__(self, dimension: str, value: Hashable) -> None:
        self.dimension = dimension
        self.value = value
        super().__init__(
            kind=FailureKind.UNKNOWN_VALUE,
            message=f"Value {value!r} is not in the catalog for dimension '{dimension}'",
            status_code=404,
        )


class SessionNotFoundError(KnownError):
    """Raised when a filter session id is unknown or has been evicted."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Filter session '{session_id}' not found",
            suggestion="Create a new session with POST /sessions.",
            status_code=404,
        )


class CatalogFormatError(KnownError):
    """Raised when a catalog document cannot be turned into item records."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            status_code=422,
        )
