from facetfilter.models.errors import (
    CatalogFormatError,
    MalformedItemError,
    SessionNotFoundError,
    UnknownValueError,
)
from facetfilter.models.facet import (
    DEFAULT_DIMENSIONS,
    FacetButton,
    ShoeDimension,
    ValueState,
)
from facetfilter.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
)

__all__ = [
    "ApiResponse",
    "CatalogFormatError",
    "DEFAULT_DIMENSIONS",
    "FacetButton",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "MalformedItemError",
    "OutcomeType",
    "SessionNotFoundError",
    "ShoeDimension",
    "UnknownValueError",
    "ValueState",
]
