"""Shared fixtures; the project root is on sys.path through pytest's `pythonpath` setting."""

import pytest


@pytest.fixture
def items_doc():
    return {"items": [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]}


@pytest.fixture
def meshes_doc():
    return {"Meshes": {"m1": {"visible": True}, "m2": {"visible": False}}}
