# json_table_editor/document.py
"""
Helpers shared by the detector, projector and mutator:
- classify() turns a JSON value into a Shape, the single place where the
  array/object/scalar sniffing happens.
- parse_document() / serialize_document() are the text codec of the editor.
- resolve_path() walks a path of keys and indices from the document root.
"""
import json
from enum import Enum
from typing import Any, Sequence, Union

from json_table_editor.errors import MappingError, ParseError

PathStep = Union[str, int]


class Shape(Enum):
    TABULAR_ARRAY = "tabular_array"  # non-empty list, first element is an object
    ARRAY = "array"
    OBJECT_OF_OBJECTS = "object_of_objects"  # object with at least one object value
    OBJECT = "object"
    SCALAR = "scalar"


def is_object(value: Any) -> bool:
    # JSON objects only; arrays never count as objects here
    return isinstance(value, dict)


def classify(value: Any) -> Shape:
    if isinstance(value, list):
        if value and is_object(value[0]):
            return Shape.TABULAR_ARRAY
        return Shape.ARRAY
    if isinstance(value, dict):
        if any(is_object(v) for v in value.values()):
            return Shape.OBJECT_OF_OBJECTS
        return Shape.OBJECT
    return Shape.SCALAR


def parse_document(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e


def serialize_document(document: Any) -> str:
    """Pretty-printed form used by the editor, downloads and the server file."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def resolve_path(document: Any, path: Sequence[PathStep]) -> Any:
    node = document
    for depth, step in enumerate(path):
        where = list(path[: depth + 1])
        if isinstance(node, dict):
            if step not in node:
                raise MappingError(f"Key {step!r} not found at {where}")
            node = node[step]
        elif isinstance(node, list):
            if not isinstance(step, int) or isinstance(step, bool) or not 0 <= step < len(node):
                raise MappingError(f"Index {step!r} out of range at {where}")
            node = node[step]
        else:
            raise MappingError(f"Cannot descend into a scalar at {where}")
    return node
