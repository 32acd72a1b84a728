"""
Catalog service.

Loads the configured catalog once and caches its Value Index. The index is
read-only and shared by every filter session.
"""

import logging
from collections.abc import Hashable
from functools import lru_cache

from facetfilter.config import settings
from facetfilter.filtering.value_index import ValueIndex, build_value_index
from facetfilter.models.errors import CatalogFormatError
from facetfilter.models.failure import KnownError
from facetfilter.parsers.catalog import load_catalog

logger = logging.getLogger(__name__)


def _check_wire_values(index: ValueIndex) -> None:
    """
    Reject dimensions where two values share a string form (e.g. 9 and "9").

    Values travel as text over the API, so each must be addressable by its str().

    Raises:
        CatalogFormatError: If two values in a dimension collide
    """
    for dimension in index.dimensions:
        seen: dict[str, Hashable] = {}
        for value in index.values(dimension):
            text = str(value)
            if text in seen:
                raise CatalogFormatError(
                    f"Dimension '{dimension}' has values {seen[text]!r} and {value!r} "
                    f"that cannot be told apart as text",
                )
            seen[text] = value


@lru_cache(maxsize=1)
def get_value_index() -> ValueIndex:
    """
    Build the Value Index for the configured catalog.

    Cached after first load. Call reload_catalog() after the catalog
    file changes.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        CatalogFormatError: If the catalog cannot be parsed, or two values
            in a dimension share a string form
        MalformedItemError: If an item lacks a configured dimension
    """
    items = load_catalog(
        settings.catalog_path,
        collection_key=settings.catalog_key,
        field_map=settings.field_map,
    )
    index = build_value_index(items, settings.dimensions)
    _check_wire_values(index)

    logger.info(
        "catalog_loaded",
        extra={"path": str(settings.catalog_path), "items": index.item_count},
    )
    return index


def reload_catalog() -> ValueIndex:
    """Drop the cached index and rebuild it from the catalog file."""
    get_value_index.cache_clear()
    return get_value_index()


def catalog_available() -> bool:
    """Check if the catalog file exists and builds into an index."""
    try:
        get_value_index()
        return True
    except (FileNotFoundError, KnownError):
        logger.warning("catalog_unavailable", extra={"path": str(settings.catalog_path)})
        return False
