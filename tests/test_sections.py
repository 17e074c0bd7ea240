"""Tests for section detection."""

import pytest

from json_table_editor.document import Shape
from json_table_editor.errors import MappingError
from json_table_editor.sections import ROOT_SECTION_ID, detect_sections, find_section


def test_array_section(items_doc):
    sections = detect_sections(items_doc)
    assert [s.id for s in sections] == ["items"]
    assert sections[0].path == ("items",)
    assert sections[0].backing is items_doc["items"]
    assert sections[0].shape is Shape.TABULAR_ARRAY


def test_object_of_objects_section(meshes_doc):
    sections = detect_sections(meshes_doc)
    assert [s.id for s in sections] == ["Meshes"]
    assert sections[0].label == "Meshes"
    assert sections[0].backing is meshes_doc["Meshes"]


def test_root_array():
    doc = [{"a": 1}, {"a": 2}]
    sections = detect_sections(doc)
    assert len(sections) == 1
    assert sections[0].id == ROOT_SECTION_ID
    assert sections[0].path == ()
    assert sections[0].backing is doc


def test_key_order_is_kept():
    doc = {
        "z": [{"a": 1}],
        "name": "doc",
        "a": {"k": {"v": 1}},
        "empty": [],
        "numbers": [1, 2],
        "flat": {"x": 1},
        "m": [{"b": 2}],
    }
    assert [s.id for s in detect_sections(doc)] == ["z", "a", "m"]


@pytest.mark.parametrize("doc", [None, 1, "text", True, [1, 2, 3], [], {}, [[{"a": 1}]]])
def test_no_sections(doc):
    assert detect_sections(doc) == []


def test_detection_is_idempotent(items_doc):
    first = detect_sections(items_doc)
    second = detect_sections(items_doc)
    assert [(s.id, s.label, s.path) for s in first] == [(s.id, s.label, s.path) for s in second]


def test_find_section(meshes_doc):
    sections = detect_sections(meshes_doc)
    assert find_section(sections, "Meshes") is sections[0]
    with pytest.raises(MappingError):
        find_section(sections, "nope")
