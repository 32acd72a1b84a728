"""
Parsers for catalog documents.

Supports:
- JSON: {"shoes": [{"color": "red", "size": 9, "width": "narrow"}, ...]}
  or a bare list of records
- CSV: header row of field names, one item per line

Record fields are renamed to dimension names through a field map
(e.g. "color" -> "colors"). Fields absent from the map keep their name.
Validation of dimension coverage is left to the index builder.
"""

import csv
import json
from io import StringIO
from pathlib import Path
from typing import Any

from facetfilter.models.errors import CatalogFormatError

DEFAULT_COLLECTION_KEY = "shoes"


def _rename(record: dict[str, Any], field_map: dict[str, str] | None) -> dict[str, Any]:
    if not field_map:
        return dict(record)
    return {field_map.get(key, key): value for key, value in record.items()}


def parse_catalog_json(
    text: str,
    collection_key: str = DEFAULT_COLLECTION_KEY,
    field_map: dict[str, str] | None = None,
) -> list[dict[str, Any]]:
    """
    Parse a JSON catalog document into flat item records.

    Raises:
        CatalogFormatError: If the document is not valid JSON, the item
            collection is missing, a record is not an object, or a field
            holds a list or object instead of a single value
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogFormatError("Catalog is not valid JSON", detail=str(e)) from e

    if isinstance(document, dict):
        if collection_key not in document:
            raise CatalogFormatError(f"Catalog has no '{collection_key}' collection")
        records = document[collection_key]
    else:
        records = document

    if not isinstance(records, list):
        raise CatalogFormatError("Catalog items must be a list")

    items: list[dict[str, Any]] = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise CatalogFormatError(f"Catalog item {position} is not an object")
        for key, value in record.items():
            if isinstance(value, (list, dict)):
                raise CatalogFormatError(
                    f"Catalog item {position} field '{key}' must be a single value",
                    detail=f"got {type(value).__name__}",
                )
        items.append(_rename(record, field_map))

    return items


def parse_catalog_csv(
    text: str,
    field_map: dict[str, str] | None = None,
) -> list[dict[str, Any]]:
    """
    Parse a CSV catalog into flat item records.

    Cells are stripped. Empty cells are dropped from the record so the
    index builder reports the item as malformed.
    """
    reader = csv.DictReader(StringIO(text.strip()))
    if not reader.fieldnames:
        raise CatalogFormatError("Catalog CSV has no header row")

    items: list[dict[str, Any]] = []
    for row in reader:
        record = {
            key.strip(): cell.strip()
            for key, cell in row.items()
            if key is not None and cell is not None and cell.strip()
        }
        if record:
            items.append(_rename(record, field_map))

    return items


def load_catalog(
    path: Path,
    collection_key: str = DEFAULT_COLLECTION_KEY,
    field_map: dict[str, str] | None = None,
) -> list[dict[str, Any]]:
    """
    Load a catalog file, choosing the parser by suffix.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogFormatError: If the file is not UTF-8, the suffix is
            unsupported, or parsing fails
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found at {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CatalogFormatError("Catalog is not UTF-8 text", detail=str(e)) from e
    suffix = path.suffix.lower()

    if suffix == ".json":
        return parse_catalog_json(text, collection_key=collection_key, field_map=field_map)
    if suffix == ".csv":
        return parse_catalog_csv(text, field_map=field_map)

    raise CatalogFormatError(f"Unsupported catalog format '{suffix}'")
