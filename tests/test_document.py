"""Tests for shape classification, the JSON codec and path walking."""

import pytest

from json_table_editor.document import (
    Shape,
    classify,
    parse_document,
    resolve_path,
    serialize_document,
)
from json_table_editor.errors import MappingError, ParseError


class TestClassify:
    @pytest.mark.parametrize(
        "value, shape",
        [
            ([{"a": 1}], Shape.TABULAR_ARRAY),
            ([{"a": 1}, 2], Shape.TABULAR_ARRAY),
            ([1, {"a": 1}], Shape.ARRAY),
            ([], Shape.ARRAY),
            ([[1]], Shape.ARRAY),
            ({"x": {"a": 1}}, Shape.OBJECT_OF_OBJECTS),
            ({"x": 1, "y": {}}, Shape.OBJECT_OF_OBJECTS),
            ({"x": [1]}, Shape.OBJECT),
            ({}, Shape.OBJECT),
            (None, Shape.SCALAR),
            ("text", Shape.SCALAR),
            (3.5, Shape.SCALAR),
            (True, Shape.SCALAR),
        ],
    )
    def test_shapes(self, value, shape):
        assert classify(value) is shape


class TestCodec:
    def test_round_trip(self):
        doc = {"a": [1, 2.5, None, True, "é"], "b": {"c": {"d": []}}}
        assert parse_document(serialize_document(doc)) == doc

    def test_serialize_is_pretty(self):
        assert serialize_document({"a": 1}) == '{\n  "a": 1\n}'

    def test_serialize_keeps_unicode(self):
        assert "é" in serialize_document({"name": "é"})

    def test_invalid_text(self):
        with pytest.raises(ParseError):
            parse_document("{invalid")


class TestResolvePath:
    def test_walks_keys_and_indices(self):
        doc = {"a": [{"b": 1}, {"b": 2}]}
        assert resolve_path(doc, ("a", 1)) == {"b": 2}

    def test_empty_path_is_root(self):
        doc = [1]
        assert resolve_path(doc, ()) is doc

    def test_missing_key(self):
        with pytest.raises(MappingError):
            resolve_path({"a": {}}, ("b",))

    def test_index_out_of_range(self):
        with pytest.raises(MappingError):
            resolve_path({"a": [1]}, ("a", 3))

    def test_scalar_in_the_way(self):
        with pytest.raises(MappingError):
            resolve_path({"a": 1}, ("a", "b"))
