"""
Exceptions raised while assembling builders.
"""

from typing import Any, Optional


class BuilderError(Exception):
    """Base class for errors raised by objectbuilder."""


class MissingRequiredFieldError(BuilderError, ValueError):
    """
    A field marked as required had no value when it was resolved.

    Attributes:
        field_name: Name of the missing field
        target: Name of the type being assembled, if known
    """

    def __init__(self, field_name: str, target: Optional[str] = None):
        self.field_name = field_name
        self.target = target

        message = f"Property '{field_name}' is undefined, but marked as required"
        if target:
            message += f" on {target}"
        super().__init__(message)


class NotABuilderError(BuilderError, TypeError):
    """A value that is not a Builder was passed where one is expected."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Expected a Builder instance, got {type(value).__name__}")
