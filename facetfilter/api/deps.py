"""Shared FastAPI dependencies."""

import logging

from fastapi import HTTPException, status

from facetfilter.config import settings
from facetfilter.models.failure import KnownError
from facetfilter.services.catalog import get_value_index
from facetfilter.services.session_store import FilterSessionStore

logger = logging.getLogger(__name__)

# Store over the current catalog index; replaced when the index is reloaded
_store: FilterSessionStore | None = None


def reset_session_store() -> None:
    """Drop the process-wide store and every session in it."""
    global _store
    _store = None


def _current_store() -> FilterSessionStore:
    global _store
    index = get_value_index()
    if _store is None or _store.index is not index:
        # Sessions over a previous index cannot be carried over
        _store = FilterSessionStore(index, max_sessions=settings.max_sessions)
        logger.info("session_store_created", extra={"items": index.item_count})
    return _store


def get_session_store() -> FilterSessionStore:
    """Process-wide session store over the configured catalog."""
    try:
        return _current_store()
    except (FileNotFoundError, KnownError) as e:
        logger.exception("Catalog could not be loaded from %s", settings.catalog_path)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog not available. Please try again later.",
        ) from e
