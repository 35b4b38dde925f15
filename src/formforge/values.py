"""Helpers for config values that may be given as plain values or callables."""

from typing import Any


def resolve(source: Any, *args: Any) -> Any:
    """Return source, or the result of calling it with args if it is callable."""
    if callable(source):
        return source(*args)
    return source


def is_empty(value: Any) -> bool:
    """Check if a payload value counts as absent.

    Any falsy value is absent, including 0, False and "". Requirement checks
    and default substitution both rely on this.
    """
    return not value
