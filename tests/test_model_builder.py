"""
Tests for builders derived from pydantic models.
"""

from typing import Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from objectbuilder.core import ModelAssembler, assemble, is_builder, model_builder
from objectbuilder.exceptions import MissingRequiredFieldError


class Info(BaseModel):
    author: str
    year: int


class Record(BaseModel):
    name: str
    info: Info
    tags: list[str] = Field(default_factory=list)
    note: Optional[str] = None


class AliasedRecord(BaseModel):
    repository_url: str = Field(..., alias="repositoryUrl")


class TestModelBuilder:
    """Tests for model_builder()."""

    def test_creates_builder(self):
        """Test that model_builder returns a builder targeting the model."""
        builder = model_builder(Record)
        assert is_builder(builder)
        assert builder.target == "Record"
        assert isinstance(builder._assemble_fn, ModelAssembler)

    def test_assembles_model(self):
        """Test assembling a complete model with a nested model builder."""
        builder = model_builder(Record, name="x")
        builder.info = model_builder(Info, {"author": "a", "year": 2018})

        record = assemble(builder)

        assert isinstance(record, Record)
        assert record.info == Info(author="a", year=2018)

    def test_optional_fields_use_model_defaults(self):
        """Test that absent optional fields get the model's defaults."""
        builder = model_builder(Record, name="x", info={"author": "a", "year": 2018})
        record = assemble(builder)
        assert record.tags == []
        assert record.note is None

    def test_missing_required_field(self):
        """Test that a missing required field is reported by name."""
        builder = model_builder(Record, info={"author": "a", "year": 2018})
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            assemble(builder)
        assert exc_info.value.field_name == "name"
        assert exc_info.value.target == "Record"

    def test_nested_missing_field(self):
        """Test that the nested model's missing field propagates."""
        builder = model_builder(Record, name="x", info=model_builder(Info, author="a"))
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            assemble(builder)
        assert exc_info.value.field_name == "year"

    def test_invalid_value_raises_validation_error(self):
        """Test that pydantic validation errors propagate unchanged."""
        builder = model_builder(Info, author="a", year="not a year")
        with pytest.raises(ValidationError):
            assemble(builder)

    def test_defaults_from_model_instance(self):
        """Test seeding a builder from an existing model instance."""
        builder = model_builder(Info, Info(author="a", year=2018))
        builder.year = 2019
        assert assemble(builder) == Info(author="a", year=2019)

    def test_aliased_fields(self):
        """Test that aliased fields are read by field name."""
        builder = model_builder(AliasedRecord, repository_url="https://example.com")
        assert assemble(builder).repository_url == "https://example.com"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
