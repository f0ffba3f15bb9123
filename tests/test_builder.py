"""
Tests for the Builder construct.
"""

import copy
import pickle

import pytest

from objectbuilder.core import (
    Builder,
    assemble,
    create,
    is_builder,
    needs_assembling,
    required,
)
from objectbuilder.exceptions import MissingRequiredFieldError, NotABuilderError


class DummyClass:
    """Class assembled by passing the builder to its constructor."""

    def __init__(self, source: Builder["DummyClass"]):
        self.name = required(source, "name")
        self.value = required(source, "value")


class NestedClass:
    """Class holding another DummyClass."""

    def __init__(self, source: Builder["NestedClass"]):
        self.name = required(source, "name")
        self.dummy = required(source, "dummy")


class TestCreate:
    """Tests for creating builders."""

    def test_create_empty_builder(self):
        """Test that an empty builder can always be created."""
        builder = create(DummyClass)
        assert builder.name is None
        assert builder.value is None
        assert builder.fields() == {}

    def test_create_with_defaults(self):
        """Test creating a builder seeded with default values."""
        builder = create(DummyClass, {"name": "Hello", "value": 20})
        assert builder.name == "Hello"
        assert builder["value"] == 20

    def test_keyword_fields_override_defaults(self):
        """Test that keyword fields take precedence over defaults."""
        builder = create(DummyClass, {"name": "Hello", "value": 20}, value=30)
        assert builder.value == 30

    def test_create_from_another_builder(self):
        """Test seeding a builder with the fields of another builder."""
        source = create(DummyClass, {"name": "Hello", "value": 20})
        builder = create(DummyClass, source)
        assert builder.fields() == {"name": "Hello", "value": 20}

    def test_defaults_are_copied(self):
        """Test that mutating the builder leaves the defaults untouched."""
        defaults = {"name": "Hello"}
        builder = create(DummyClass, defaults)
        builder.name = "Changed"
        assert defaults == {"name": "Hello"}


class TestFieldAccess:
    """Tests for reading and writing builder fields."""

    def test_attribute_and_item_access(self):
        """Test that attribute and item access share the same fields."""
        builder = create()
        builder.name = "Hello"
        builder["value"] = 20
        assert builder["name"] == "Hello"
        assert builder.value == 20

    def test_delete_field(self):
        """Test clearing fields."""
        builder = create(name="Hello", value=20)
        del builder.name
        del builder["value"]
        assert builder.name is None
        assert builder.value is None

    def test_contains_treats_none_as_absent(self):
        """Test that a field set to None is not contained."""
        builder = create(name="Hello", value=None)
        assert "name" in builder
        assert "value" not in builder
        assert "other" not in builder

    def test_get_with_default(self):
        """Test get() falls back to its default for absent fields."""
        builder = create(name="Hello", value=None)
        assert builder.get("name") == "Hello"
        assert builder.get("value", 5) == 5
        assert builder.get("missing") is None

    def test_update_is_shallow(self):
        """Test that update replaces whole top-level fields."""
        builder = create(info={"author": "a", "year": 2018})
        builder.update({"info": {"author": "b"}}, name="x")
        assert builder.info == {"author": "b"}
        assert builder.name == "x"

    def test_method_names_readable_as_items(self):
        """Test that fields named like methods are still stored."""
        builder = create()
        builder.update = "value"
        assert builder["update"] == "value"
        assert callable(builder.update)

    def test_copy(self):
        """Test that copies share the assembly function but not fields."""
        builder = create(DummyClass, {"name": "Hello", "value": 20})
        copied = builder.copy()
        copied.name = "Other"

        assert builder.name == "Hello"
        assert isinstance(assemble(copied), DummyClass)
        assert assemble(copied).name == "Other"

    def test_copy_module_shallow_copy(self):
        """Test copy.copy shares nested values but not the field mapping."""
        info = {"author": "a"}
        builder = create(DummyClass, {"name": "Hello", "value": 20, "info": info})

        copied = copy.copy(builder)
        copied.name = "Other"

        assert builder.name == "Hello"
        assert copied.info is info
        assert copied.target == "DummyClass"

    def test_deepcopy(self):
        """Test copy.deepcopy copies nested values and nested builders."""
        nested = create(defaults={"author": "a"})
        builder = create(defaults={"info": {"tags": ["x"]}, "nested": nested})

        copied = copy.deepcopy(builder)
        copied.info["tags"].append("y")
        copied.nested.author = "b"

        assert builder.info == {"tags": ["x"]}
        assert nested.author == "a"
        assert is_builder(copied.nested)
        assert assemble(copied) == {"info": {"tags": ["x", "y"]}, "nested": {"author": "b"}}

    def test_pickle_round_trip(self):
        """Test that a builder survives pickling."""
        builder = create(defaults={"a": 1, "nested": create(defaults={"b": 2})})

        restored = pickle.loads(pickle.dumps(builder))

        assert is_builder(restored)
        assert assemble(restored) == {"a": 1, "nested": {"b": 2}}

    def test_assembly_function_cannot_be_replaced(self):
        """Test that the assembly function is fixed."""
        builder = create(DummyClass)
        with pytest.raises(AttributeError):
            builder._assemble_fn = lambda source: None

    def test_repr(self):
        """Test the builder representation."""
        builder = create(DummyClass, {"name": "Hello"})
        assert repr(builder) == "Builder(DummyClass, name='Hello')"
        assert repr(create()) == "Builder(dict)"


class TestIsBuilder:
    """Tests for builder discrimination."""

    def test_true_for_class_builder(self):
        """Test that a class-type builder is recognized."""
        assert is_builder(create(DummyClass))

    def test_true_for_plain_builder(self):
        """Test that a builder without an assembly function is recognized."""
        assert is_builder(create())

    def test_false_for_plain_objects(self):
        """Test that plain data is never a builder, even with the same fields."""
        builder = create(DummyClass, {"name": "Hello", "value": 20})
        assert not is_builder({"name": "Hello", "value": 20})
        assert not is_builder(builder.fields())
        assert not is_builder(DummyClass(builder))

    def test_false_for_none(self):
        """Test that None is not a builder."""
        assert not is_builder(None)

    def test_needs_assembling_alias(self):
        """Test the needs_assembling alias of is_builder."""
        assert needs_assembling(create())
        assert not needs_assembling(None)


class TestAssemble:
    """Tests for assembling builders."""

    def test_assemble_class_builder(self):
        """Test assembling a valid class-type builder."""
        builder = create(DummyClass, {"name": "Hello", "value": 20})
        result = assemble(builder)
        assert isinstance(result, DummyClass)
        assert result.name == "Hello"
        assert result.value == 20

    def test_assemble_method(self):
        """Test the Builder.assemble shortcut."""
        builder = create(DummyClass, {"name": "Hello", "value": 20})
        assert builder.assemble().value == 20

    def test_assemble_plain_builder_round_trips(self):
        """Test that a builder without an assembly function yields its fields."""
        defaults = {"name": "Hello", "value": 20}
        assert assemble(create(defaults=defaults)) == defaults

    def test_assemble_plain_builder_resolves_nested(self):
        """Test that nested builders inside a plain builder are assembled."""
        builder = create(defaults={"name": "x", "info": create(defaults={"author": "a"})})
        assert assemble(builder) == {"name": "x", "info": {"author": "a"}}

    def test_assemble_is_repeatable(self):
        """Test that assembling twice gives equal results and leaves the builder alone."""
        builder = create(defaults={"name": "x", "info": create(defaults={"author": "a"})})
        first = assemble(builder)
        second = assemble(builder)
        assert first == second
        assert is_builder(builder.info)

    def test_assemble_invalid_class_builder(self):
        """Test that a builder missing required fields fails to assemble."""
        builder = create(DummyClass)
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            assemble(builder)
        assert exc_info.value.field_name == "name"

    def test_assemble_non_builder(self):
        """Test that assembling plain data is rejected."""
        with pytest.raises(NotABuilderError):
            assemble({"name": "Hello"})

    def test_assemble_nested_class_builder(self):
        """Test a class-type builder nested within a class."""
        builder = create(
            NestedClass,
            {"name": "Hello", "dummy": create(DummyClass, {"name": "Hi", "value": 20})},
        )
        result = assemble(builder)
        assert isinstance(result, NestedClass)
        assert isinstance(result.dummy, DummyClass)
        assert result.dummy.name == "Hi"

    def test_assemble_nested_plain_value(self):
        """Test a plain value nested within a class is used as-is."""
        dummy = {"name": "Hi", "value": 20}
        result = assemble(create(NestedClass, {"name": "Hello", "dummy": dummy}))
        assert result.dummy is dummy

    def test_nested_error_propagates(self):
        """Test that a nested builder's missing field surfaces from the outer assembly."""
        builder = create(
            NestedClass,
            {"name": "Hello", "dummy": create(DummyClass, {"name": "Hi"})},
        )
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            assemble(builder)
        assert exc_info.value.field_name == "value"
        assert exc_info.value.target == "DummyClass"

    def test_assembly_errors_are_not_wrapped(self):
        """Test that errors from the assembly function propagate unchanged."""

        def broken(source):
            raise KeyError("boom")

        with pytest.raises(KeyError):
            assemble(create(broken))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
