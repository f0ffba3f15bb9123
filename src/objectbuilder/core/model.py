"""
Builders for pydantic models.

Derives the assembly function from the model's declared fields, so a model
does not need a hand-written assembly function to be built in stages.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from objectbuilder.core.builder import Builder
from objectbuilder.core.resolve import optional, required

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ModelAssembler:
    """
    Assembly function for a pydantic model class.

    Fields without a default are resolved as required. Fields with a default
    are resolved as optional and left out when absent, so the model applies
    its own default. Field values are validated by pydantic on construction;
    its ValidationError propagates unchanged.
    """

    def __init__(self, model_cls: type[M]):
        self.model_cls = model_cls
        self.__name__ = model_cls.__name__

    def __call__(self, source: Builder[M]) -> M:
        values: dict[str, Any] = {}

        for name, field in self.model_cls.model_fields.items():
            if field.is_required():
                values[field.alias or name] = required(source, name)
            else:
                value = optional(source, name)
                if value is not None:
                    values[field.alias or name] = value

        logger.debug(f"Constructing {self.__name__} from {sorted(values)}")
        return self.model_cls(**values)

    def __repr__(self) -> str:
        return f"ModelAssembler({self.__name__})"


def model_builder(
    model_cls: type[M],
    defaults: Optional[Mapping[str, Any] | BaseModel] = None,
    **fields: Any,
) -> Builder[M]:
    """
    Create a Builder for a pydantic model class.

    Args:
        model_cls: The model class to assemble into
        defaults: Initial field values, as a mapping or as a model instance
            (only its explicitly set fields are used)
        **fields: Additional field values, overriding ``defaults``

    Returns:
        A Builder that assembles into ``model_cls``
    """
    if isinstance(defaults, BaseModel):
        defaults = {name: getattr(defaults, name) for name in defaults.model_fields_set}
    return Builder(ModelAssembler(model_cls), defaults, **fields)
