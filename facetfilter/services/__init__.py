"""
facetfilter services.

Catalog loading and per-session filter state.
"""

from facetfilter.services.catalog import (
    catalog_available,
    get_value_index,
    reload_catalog,
)
from facetfilter.services.session_store import (
    DEFAULT_MAX_SESSIONS,
    FilterSessionStore,
)

__all__ = [
    "DEFAULT_MAX_SESSIONS",
    "FilterSessionStore",
    "catalog_available",
    "get_value_index",
    "reload_catalog",
]
