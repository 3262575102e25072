import pytest

from tripleslash.parsers.base import SourceModel


def test_cannot_instantiate_source_model():
    with pytest.raises(TypeError) as exc_info:
        SourceModel()

    assert "abstract" in str(exc_info.value).lower()


def test_subclass_must_implement_resolve():
    class IncompleteModel(SourceModel):
        def innermost_type_at(self, location):
            return None

        def top_level_types(self):
            return []

        def members(self, type_decl):
            return []

        def nested_types(self, type_decl):
            return []

    with pytest.raises(TypeError) as exc_info:
        IncompleteModel()

    assert "resolve" in str(exc_info.value)
