"""Named function registry for FormForge.

Declarative form files cannot hold code. Validators, transforms,
predicates, option sources and description builders are registered here
by name and referenced from YAML either as `{function: <name>}` or, for
`validate` and `process`, as a bare name.
"""

from collections.abc import Callable
from typing import Any

from formforge.types import ConfigurationError


class FunctionRegistry:
    """Functions that form definitions may reference by name.

    Example:
        @form_function("signup.checkEmail")
        async def check_email(value, payload):
            ...

        # `validate: signup.checkEmail` in YAML resolves to check_email
        fn = FunctionRegistry.resolve("signup.checkEmail", allow_name=True)
    """

    _functions: dict[str, Callable[..., Any]] = {}

    @classmethod
    def register(cls, name: str, fn: Callable[..., Any]) -> None:
        """Register a function by name. The first registration of a name is kept."""
        if name in cls._functions:
            return
        cls._functions[name] = fn

    @classmethod
    def get(cls, name: str, referrer: str | None = None) -> Callable[..., Any]:
        """Look up a function by name.

        Args:
            name: Registered function name
            referrer: Where the name was used (e.g., "field 'email' of form 'signup'"),
                included in the error message

        Raises:
            ConfigurationError: If the function is not registered
        """
        if name not in cls._functions:
            where = f" (referenced by {referrer})" if referrer else ""
            raise ConfigurationError(f"Function '{name}' is not registered{where}")
        return cls._functions[name]

    @classmethod
    def resolve(cls, value: Any, referrer: str | None = None, allow_name: bool = False) -> Any:
        """Turn a config value into a callable if it is a function reference.

        `{function: name}` mappings always resolve; bare strings resolve only
        when allow_name is set. Anything else is returned unchanged.
        """
        if isinstance(value, dict) and "function" in value:
            return cls.get(value["function"], referrer)
        if allow_name and isinstance(value, str):
            return cls.get(value, referrer)
        return value

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._functions.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._functions.clear()


def form_function(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator that registers a function for use in form definitions.

    Usage:
        @form_function("signup.normalizeEmail")
        def normalize_email(value):
            return (value or "").strip().lower()
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        FunctionRegistry.register(name, fn)
        return fn

    return decorator
