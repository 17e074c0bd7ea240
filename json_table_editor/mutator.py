# json_table_editor/mutator.py
import logging
import math
import re
from typing import Any, Dict, Sequence

from json_table_editor.document import is_object, resolve_path
from json_table_editor.errors import MappingError, ValidationError
from json_table_editor.projector import KEY_COLUMN, ByIndex, ByKey, RowLocation

logger = logging.getLogger(__name__)

# JSON number grammar, with an optional leading sign and no leading zero rule
NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
INTEGER_RE = re.compile(r"^[+-]?\d+$")


def coerce(raw: Any) -> Any:
    """
    Best-effort typing of an edited cell value.

    Booleans and None pass through. Everything else is trimmed; "true"/"false"
    become booleans, numeric text becomes int or float, the rest stays a string.
    """
    if isinstance(raw, bool) or raw is None:
        return raw
    text = str(raw).strip()
    if text == "true":
        return True
    if text == "false":
        return False
    if text and NUMBER_RE.match(text):
        if INTEGER_RE.match(text):
            return int(text)
        number = float(text)
        if math.isfinite(number):
            return number
    return text


def locate_row(document: Any, location: RowLocation) -> Dict[str, Any]:
    """Return the stored object a row was projected from."""
    parent = resolve_path(document, location.path)
    if isinstance(location, ByIndex):
        if not isinstance(parent, list):
            raise MappingError(f"Expected an array at {list(location.path)}")
        if not 0 <= location.index < len(parent):
            raise MappingError(f"Row index {location.index} out of range at {list(location.path)}")
        target = parent[location.index]
    elif isinstance(location, ByKey):
        if not isinstance(parent, dict):
            raise MappingError(f"Expected an object at {list(location.path)}")
        if location.key not in parent:
            raise MappingError(f"Key {location.key!r} not found at {list(location.path)}")
        target = parent[location.key]
    else:
        raise MappingError(f"Unknown row location {location!r}")

    if not is_object(target):
        raise MappingError(f"Row at {location} is no longer an object")
    return target


def apply_cell_edit(
    document: Any,
    mapping: Sequence[RowLocation],
    row_index: int,
    column: str,
    raw_value: Any,
) -> Any:
    """Write one edited cell back into the document. Returns the stored value."""
    if document is None:
        raise MappingError("No document is loaded")
    if not 0 <= row_index < len(mapping):
        raise MappingError(f"Row {row_index} does not exist ({len(mapping)} rows)")

    location = mapping[row_index]
    if isinstance(location, ByKey) and column == KEY_COLUMN:
        raise MappingError(f"Column {KEY_COLUMN!r} is the entry name and cannot be edited")

    target = locate_row(document, location)
    value = coerce(raw_value)
    target[column] = value
    logger.debug("Cell %s[%r] set to %r", location, column, value)
    return value


def apply_row_replace(document: Any, location: RowLocation, replacement: Any) -> None:
    """
    Overwrite a whole row with `replacement`.

    For object sections the "__key" field of the replacement is metadata and is
    dropped; the entry keeps its property name. A real "__key" field already
    stored in the entry is kept.
    """
    if not is_object(replacement):
        raise ValidationError("A row must be a JSON object")

    current = locate_row(document, location)
    parent = resolve_path(document, location.path)
    if isinstance(location, ByIndex):
        parent[location.index] = replacement
    else:
        value = {k: v for k, v in replacement.items() if k != KEY_COLUMN}
        if KEY_COLUMN in current:
            value[KEY_COLUMN] = current[KEY_COLUMN]
        parent[location.key] = value
    logger.debug("Row %s replaced", location)
