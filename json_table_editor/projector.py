# json_table_editor/projector.py
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

import pandas as pd

from json_table_editor.document import PathStep, Shape, is_object
from json_table_editor.sections import Section

KEY_COLUMN = "__key"


@dataclass(frozen=True)
class ByIndex:
    """Row stored as element `index` of the array found at `path`."""
    path: Tuple[PathStep, ...]
    index: int


@dataclass(frozen=True)
class ByKey:
    """Row stored as property `key` of the object found at `path`."""
    path: Tuple[PathStep, ...]
    key: str


RowLocation = Union[ByIndex, ByKey]


@dataclass
class Projection:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    mapping: List[RowLocation] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def nested_columns(self) -> List[str]:
        """Columns holding at least one array or object value."""
        return [
            c for c in self.columns
            if any(isinstance(row.get(c), (dict, list)) for row in self.rows)
        ]

    def to_frame(self) -> pd.DataFrame:
        data = {}
        for c in self.columns:
            values = [row.get(c) for row in self.rows]
            if all(isinstance(v, bool) for v in values):
                data[c] = pd.Series(values, dtype=bool)
            else:
                # object dtype so ints next to missing cells are not upcast to float
                data[c] = pd.Series([display_value(v) for v in values], dtype=object)
        return pd.DataFrame(data, columns=self.columns)


def display_value(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return value


def project(section: Section) -> Projection:
    """
    Flatten a section into rows plus the reverse mapping to their source.

    Array sections keep the element objects themselves as rows. Object sections
    get a synthesized row per object value, with the property name under
    "__key". When the value already has its own "__key" field, the synthetic
    one wins in the row; the stored field is left alone.
    """
    projection = Projection()
    seen = {}

    def add(row, location):
        projection.rows.append(row)
        projection.mapping.append(location)
        for column in row:
            if column not in seen:
                seen[column] = True
                projection.columns.append(column)

    backing = section.backing
    if section.shape is Shape.TABULAR_ARRAY:
        for i, element in enumerate(backing):
            # non-object elements produce no row, the mapping keeps the true index
            if is_object(element):
                add(element, ByIndex(section.path, i))
    elif section.shape is Shape.OBJECT_OF_OBJECTS:
        for key, value in backing.items():
            if is_object(value):
                row = {KEY_COLUMN: key}
                row.update((k, v) for k, v in value.items() if k != KEY_COLUMN)
                add(row, ByKey(section.path, key))

    return projection
