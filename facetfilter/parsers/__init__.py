from facetfilter.parsers.catalog import (
    load_catalog,
    parse_catalog_csv,
    parse_catalog_json,
)

__all__ = [
    "load_catalog",
    "parse_catalog_csv",
    "parse_catalog_json",
]
