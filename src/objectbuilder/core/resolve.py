"""
Field resolution and presence validation for assembly functions.

These helpers are called from inside an assembly function to pull each
field out of a builder. They resolve nested builders on demand and enforce
whether the field has to be present.

The assembly function decides the order in which fields are resolved.
Resolution stops at the first missing required field; violations are not
collected.
"""

import logging
from typing import Any, Callable

from objectbuilder.core.builder import Builder, resolve_value
from objectbuilder.exceptions import MissingRequiredFieldError

logger = logging.getLogger(__name__)


def required(builder: Builder[Any], key: str) -> Any:
    """
    Get the resolved value of a field, expecting it to have a value.

    A field holding None is treated the same as one that was never set.

    Args:
        builder: Builder to read the field from
        key: Name of the field

    Returns:
        Resolved value of the field

    Raises:
        MissingRequiredFieldError: If the field is absent
    """
    if builder[key] is None:
        raise MissingRequiredFieldError(key, builder.target)
    return resolve_value(builder, key)


def optional(builder: Builder[Any], key: str, default: Any = None) -> Any:
    """
    Get the resolved value of a field, or ``default`` if it is absent.

    Nested builders are still assembled, so their own required fields are
    enforced.
    """
    if builder[key] is None:
        return default
    return resolve_value(builder, key)


def required_on_condition(
    builder: Builder[Any],
    key: str,
    is_required: Callable[[], bool],
) -> Any:
    """
    Get the resolved value of a field, requiring it only if ``is_required()`` is true.

    ``is_required`` is called once per call, with no arguments. It should only
    look at values already resolved earlier in the same assembly function,
    typically through a closure.

    Args:
        builder: Builder to read the field from
        key: Name of the field
        is_required: Returns whether the field must have a value

    Returns:
        Resolved value of the field, possibly None when not required

    Raises:
        MissingRequiredFieldError: If the field is absent and required
    """
    if is_required():
        return required(builder, key)
    return optional(builder, key)


class ValidateAs:
    """
    The resolution helpers grouped under one name.

    Example:
        def assemble_info(source):
            return Info(
                author=ValidateAs.required(source, "author"),
                year=ValidateAs.optional(source, "year", 1970),
            )
    """

    required = staticmethod(required)
    optional = staticmethod(optional)
    required_on_condition = staticmethod(required_on_condition)
