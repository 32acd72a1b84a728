import pytest

from facetfilter.api.deps import reset_session_store
from facetfilter.config import DATA_DIR
from facetfilter.filtering.value_index import ValueIndex, build_value_index
from facetfilter.models.facet import DEFAULT_DIMENSIONS
from facetfilter.parsers.catalog import load_catalog
from facetfilter.services.catalog import get_value_index

SHOE_FIELD_MAP = {"color": "colors", "size": "sizes", "width": "widths"}


@pytest.fixture(autouse=True)
def clear_catalog_cache():
    """Clear the cached catalog index and session store between tests.

    Tests that point settings at a temporary catalog must not leak that
    index, or a store built over it, into later tests.
    """
    get_value_index.cache_clear()
    reset_session_store()
    yield
    get_value_index.cache_clear()
    reset_session_store()


@pytest.fixture
def small_catalog() -> list[dict[str, str]]:
    """Three-item catalog used throughout the state machine tests."""
    return [
        {"colors": "red", "sizes": "9", "widths": "narrow"},
        {"colors": "red", "sizes": "10", "widths": "standard"},
        {"colors": "blue", "sizes": "9", "widths": "standard"},
    ]


@pytest.fixture
def small_index(small_catalog: list[dict[str, str]]) -> ValueIndex:
    return build_value_index(small_catalog, DEFAULT_DIMENSIONS)


@pytest.fixture
def shoe_index() -> ValueIndex:
    """Index over the bundled shoe catalog."""
    items = load_catalog(DATA_DIR / "shoes.json", field_map=SHOE_FIELD_MAP)
    return build_value_index(items, DEFAULT_DIMENSIONS)
