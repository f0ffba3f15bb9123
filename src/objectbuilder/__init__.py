"""
Object Builder - staged construction of validated, immutable objects.

This package provides builders that collect a value's fields piece by piece,
from defaults, overrides and nested builders, and assemble them into the
finished object while enforcing which fields are required.
"""

__version__ = "0.1.0"

from objectbuilder.core import (
    Builder,
    ModelAssembler,
    ValidateAs,
    assemble,
    create,
    is_builder,
    model_builder,
    needs_assembling,
    optional,
    required,
    required_on_condition,
)
from objectbuilder.exceptions import BuilderError, MissingRequiredFieldError, NotABuilderError
from objectbuilder.models import Package, PackageDetails, assemble_package_details
from objectbuilder.parsers import PackageParser, apply_overrides

__all__ = [
    # Builder construct
    "Builder",
    "create",
    "is_builder",
    "needs_assembling",
    "assemble",
    # Field resolution
    "required",
    "optional",
    "required_on_condition",
    "ValidateAs",
    # pydantic models
    "ModelAssembler",
    "model_builder",
    # Errors
    "BuilderError",
    "MissingRequiredFieldError",
    "NotABuilderError",
    # Package descriptor
    "Package",
    "PackageDetails",
    "assemble_package_details",
    "PackageParser",
    "apply_overrides",
]
