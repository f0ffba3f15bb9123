"""
Base model for assembled values.

Assembled values are immutable once constructed.
"""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """
    Base model for values produced by assembling a builder.

    Provides:
    - Immutability (frozen instances)
    - Population by field name or camelCase alias
    - JSON serialization helpers
    """

    model_config = ConfigDict(
        # Assembled values never change
        frozen=True,
        # Allow arbitrary types for flexibility
        arbitrary_types_allowed=True,
        # Populate by field name or alias
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Convert to JSON string."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
