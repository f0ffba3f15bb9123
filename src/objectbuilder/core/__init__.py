"""
Staged construction of validated objects.

- builder.py: the Builder construct and assembly
- resolve.py: field resolution helpers used inside assembly functions
- model.py: builders derived from pydantic models
"""

from objectbuilder.core.builder import (
    AssembleFn,
    Builder,
    assemble,
    assemble_fields,
    create,
    is_builder,
    needs_assembling,
)
from objectbuilder.core.model import ModelAssembler, model_builder
from objectbuilder.core.resolve import (
    ValidateAs,
    optional,
    required,
    required_on_condition,
    resolve_value,
)

__all__ = [
    # Builder construct
    "AssembleFn",
    "Builder",
    "create",
    "is_builder",
    "needs_assembling",
    "assemble",
    "assemble_fields",
    # Field resolution
    "required",
    "optional",
    "required_on_condition",
    "resolve_value",
    "ValidateAs",
    # pydantic models
    "ModelAssembler",
    "model_builder",
]
