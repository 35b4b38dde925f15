"""Field type registry for FormForge.

Maps a field's `type` tag to the strategy that handles it:
- structural check during validation
- value coercion during processing
- view decoration during serialization

Tags with no registered strategy get the plain FieldType, which does nothing.
"""

from collections.abc import Callable
from typing import Any

from formforge.types import FieldSpec


class FieldType:
    """Base strategy for a field type. Every hook is a no-op.

    Subclasses override only what their type needs.
    """

    def check(self, spec: FieldSpec, value: Any) -> None:
        """Structural check for a present (truthy) value. Raise ValidationError to reject."""

    def coerce(self, spec: FieldSpec, value: Any) -> Any:
        """Coerce a processed value to the type's canonical form."""
        return value

    def decorate(self, spec: FieldSpec, view: dict[str, Any]) -> None:
        """Add type-specific display state to a serialized field view."""


_PLAIN = FieldType()


class FieldTypeRegistry:
    """Registry for field type strategies.

    Example:
        @field_type("rating")
        class RatingFieldType(FieldType):
            def coerce(self, spec, value):
                return int(value or 0)

        strategy = FieldTypeRegistry.get("rating")
    """

    _types: dict[str, FieldType] = {}

    @classmethod
    def register(cls, name: str, strategy: FieldType) -> None:
        """Register a strategy for a type tag.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: The type tag (e.g., "checkbox")
            strategy: FieldType instance handling the tag
        """
        if name in cls._types:
            return
        cls._types[name] = strategy

    @classmethod
    def get(cls, name: str) -> FieldType:
        """Get the strategy for a type tag, or the plain FieldType if none is registered."""
        return cls._types.get(name, _PLAIN)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a type tag has a registered strategy."""
        return name in cls._types

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered type tags."""
        return sorted(cls._types.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._types.clear()


def field_type(name: str) -> Callable[[type[FieldType]], type[FieldType]]:
    """Class decorator that registers a FieldType subclass under a tag.

    Usage:
        @field_type("rating")
        class RatingFieldType(FieldType):
            ...
    """

    def decorator(cls: type[FieldType]) -> type[FieldType]:
        FieldTypeRegistry.register(name, cls())
        return cls

    return decorator
