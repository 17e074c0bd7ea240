# json_table_editor/sections.py
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from json_table_editor.document import PathStep, Shape, classify
from json_table_editor.errors import MappingError

ROOT_SECTION_ID = "__root__"
ROOT_SECTION_LABEL = "Root array"

TABLE_SHAPES = (Shape.TABULAR_ARRAY, Shape.OBJECT_OF_OBJECTS)


@dataclass
class Section:
    id: str
    label: str
    path: Tuple[PathStep, ...]
    shape: Shape
    # live reference into the document, never a copy
    backing: Any = field(repr=False, compare=False)


def detect_sections(document: Any) -> List[Section]:
    """
    Return the parts of the document that can be shown as a table, in key order.

    A root array of objects is a single "__root__" section. For a root object,
    each top-level value that is an array of objects or an object holding
    object values becomes its own section. Anything else yields nothing.
    """
    shape = classify(document)
    if shape is Shape.TABULAR_ARRAY:
        return [Section(ROOT_SECTION_ID, ROOT_SECTION_LABEL, (), shape, document)]
    if shape not in (Shape.OBJECT, Shape.OBJECT_OF_OBJECTS):
        return []

    sections = []
    for key, value in document.items():
        value_shape = classify(value)
        if value_shape in TABLE_SHAPES:
            sections.append(Section(key, key, (key,), value_shape, value))
    return sections


def find_section(sections: Sequence[Section], section_id: str) -> Section:
    for section in sections:
        if section.id == section_id:
            return section
    raise MappingError(f"Section {section_id!r} does not exist in the document")
