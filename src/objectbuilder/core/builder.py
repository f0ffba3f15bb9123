"""
Builder construct for staged object construction.

A Builder holds a partially-populated value of some target type together
with the function that turns it into the finished value. Fields can be set
piece by piece, from defaults, attribute assignment or item assignment, and
the finished object is only produced (and validated) when the builder is
assembled.

Usage:
    class Thing(BaseModel):
        name: str
        value: int

        @classmethod
        def assemble(cls, source: Builder["Thing"]) -> "Thing":
            return cls(
                name=required(source, "name"),
                value=required(source, "value"),
            )

    builder = create(Thing.assemble)
    builder.name = "Hello"
    builder.value = 20

    thing = assemble(builder)
"""

import copy
import logging
from collections.abc import Iterator, Mapping
from typing import Any, Callable, Generic, Optional, TypeVar

from objectbuilder.exceptions import NotABuilderError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Turns a populated builder into its finished value
AssembleFn = Callable[["Builder[Any]"], Any]

_INTERNAL_SLOTS = ("_assemble_fn", "_fields")


class Builder(Generic[T]):
    """
    Mutable, partially-populated staging value for a target type.

    Each field may be absent, hold a plain value, or hold another Builder
    which is assembled when the field is resolved. Fields that were never
    set read as None.

    Fields are accessible as attributes or items:
        builder.name = "x"
        builder["name"] == "x"

    Fields whose names collide with Builder methods (``get``, ``update``...)
    can only be read through item access.

    The assembly function is fixed at construction and cannot be replaced.
    """

    __slots__ = _INTERNAL_SLOTS

    def __init__(
        self,
        assemble_fn: Optional[AssembleFn] = None,
        defaults: Optional[Mapping[str, Any]] = None,
        **fields: Any,
    ):
        object.__setattr__(self, "_assemble_fn", assemble_fn or assemble_fields)
        object.__setattr__(self, "_fields", {})

        if defaults is not None:
            self.update(defaults)
        self.update(fields)

    # --- Field access ---

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name in _INTERNAL_SLOTS or (name.startswith("__") and name.endswith("__")):
            raise AttributeError(name)
        return self._fields.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _INTERNAL_SLOTS:
            raise AttributeError("The assembly function of a Builder cannot be replaced")
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        self._fields[name] = value

    def __delattr__(self, name: str) -> None:
        self._fields.pop(name, None)

    def __getitem__(self, key: str) -> Any:
        return self._fields.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        self._fields.pop(key, None)

    def __contains__(self, key: object) -> bool:
        """True if the field holds a value (None counts as absent)."""
        return self._fields.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fields))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._fields.items())
        if fields:
            return f"Builder({self.target}, {fields})"
        return f"Builder({self.target})"

    def get(self, key: str, default: Any = None) -> Any:
        """Get the raw stored value of a field without resolving it."""
        value = self._fields.get(key)
        return default if value is None else value

    def fields(self) -> dict[str, Any]:
        """Shallow copy of the stored fields."""
        return dict(self._fields)

    def update(self, mapping: Optional[Mapping[str, Any]] = None, **fields: Any) -> "Builder[T]":
        """
        Shallow-merge fields into the builder.

        Top-level fields replace whatever was stored before; nested values
        are not merged.

        Returns:
            The builder itself, for chaining
        """
        if mapping is not None:
            if is_builder(mapping):
                mapping = mapping.fields()
            self._fields.update(mapping)
        self._fields.update(fields)
        return self

    def copy(self) -> "Builder[T]":
        """New builder with the same assembly function and a shallow copy of the fields."""
        return Builder(self._assemble_fn, self._fields)

    # copy and pickle restore state through setattr, which only stores fields

    def __copy__(self) -> "Builder[T]":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Builder[T]":
        """Deep copy of the fields; the assembly function is shared."""
        result: Builder[T] = Builder(self._assemble_fn)
        memo[id(self)] = result
        result.update(copy.deepcopy(self._fields, memo))
        return result

    def __reduce__(self) -> tuple[Any, ...]:
        return (Builder, (self._assemble_fn, self._fields))

    @property
    def target(self) -> str:
        """Display name of what this builder assembles into."""
        return _target_name(self._assemble_fn)

    def assemble(self) -> T:
        """Assemble this builder. See :func:`assemble`."""
        return assemble(self)


def create(
    assemble_fn: Optional[AssembleFn] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    **fields: Any,
) -> Builder[Any]:
    """
    Create a Builder.

    No validation happens here; empty and partially-filled builders can
    always be created.

    Args:
        assemble_fn: Function (or class) taking the builder and returning the
            finished value. Must not mutate the builder. Defaults to
            :func:`assemble_fields`, which produces a plain dict.
        defaults: Initial field values. Values may be plain values or
            nested builders.
        **fields: Additional field values, overriding ``defaults``

    Returns:
        A new Builder
    """
    return Builder(assemble_fn, defaults, **fields)


def is_builder(value: Any) -> bool:
    """
    Test whether a value is a Builder that needs assembling.

    Plain dicts, models and other objects are never builders, even when
    they carry the same fields.
    """
    if value is None:
        return False
    return isinstance(value, Builder)


# Alternate name for is_builder
needs_assembling = is_builder


def assemble(builder: Builder[T]) -> T:
    """
    Assemble a Builder into its finished value.

    Calls the builder's assembly function with the builder. Errors raised by
    the assembly function, including those from nested builders, propagate
    unchanged.

    Raises:
        NotABuilderError: If ``builder`` is not a Builder
    """
    if not is_builder(builder):
        raise NotABuilderError(builder)

    logger.debug(f"Assembling {builder.target}")
    return builder._assemble_fn(builder)


def resolve_value(builder: Builder[Any], key: str) -> Any:
    """
    Resolve the value of a field.

    Nested builders are assembled (depth-first); plain values are returned
    unchanged. Absent fields resolve to None.
    """
    value = builder[key]

    if is_builder(value):
        logger.debug(f"Resolving nested {value.target} for field '{key}'")
        return assemble(value)
    return value


def assemble_fields(builder: Builder[Any]) -> dict[str, Any]:
    """
    Default assembly function: a dict of every stored field, resolved.

    Fields holding None are kept as None; nothing is required.
    """
    return {key: resolve_value(builder, key) for key in builder}


def _target_name(assemble_fn: AssembleFn) -> str:
    """Best-effort display name for an assembly function."""
    if assemble_fn is assemble_fields:
        return "dict"

    # Bound classmethods like Package.assemble
    owner = getattr(assemble_fn, "__self__", None)
    if isinstance(owner, type):
        return owner.__name__

    return getattr(assemble_fn, "__name__", type(assemble_fn).__name__)
