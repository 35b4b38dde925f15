"""Core types for FormForge form definitions.

This module defines the passive data model shared by every stage:
- FieldSpec: one field's behavior and display rules
- FieldGroup: a named, ordered group of fields
- FormOptions: the full form configuration (groups plus global rules)
- Error kinds raised by construction and validation
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

Payload = Mapping[str, Any]

# Field validator signature: (value, payload) -> None | Awaitable[None]
FieldValidateFn = Callable[[Any, Payload], Awaitable[None] | None]

# Form validator signature: (payload) -> None | Awaitable[None]
FormValidateFn = Callable[[Payload], Awaitable[None] | None]

# Option source: static list of {key, label} mappings or a zero-arg callable
OptionSource = Sequence[Mapping[str, Any]] | Callable[[], Sequence[Mapping[str, Any]]]


# =============================================================================
# Errors
# =============================================================================


class FormError(Exception):
    """Base class for all FormForge errors."""


class ConfigurationError(FormError):
    """Raised when a form definition is malformed.

    Attributes:
        issues: Optional list of individual problems (e.g., schema findings)
    """

    def __init__(self, message: str, issues: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.issues = issues or []


class ValidationError(FormError):
    """A field or form rule violation, suitable for direct display.

    Attributes:
        message: Human-readable message
        field: Name of the field this error relates to, or None for form-level errors
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "field": self.field}


# =============================================================================
# Key handling
# =============================================================================

# camelCase config keys accepted in addition to their snake_case names
_CAMEL_KEYS = {
    "descriptionHtml": "description_html",
    "helpHtml": "help_html",
}


def normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {_CAMEL_KEYS.get(key, key): value for key, value in data.items()}


# =============================================================================
# Field model
# =============================================================================


@dataclass(frozen=True)
class FieldSpec:
    """Declarative descriptor of one form field.

    Any of `required`, `options`, `description` and `description_html` may be
    a plain value or a callable; callables are evaluated lazily at the point
    of use (see formforge.values.resolve).

    Attributes:
        name: Key in payloads and output mappings
        label: Display label (falls back to name)
        type: Field type tag ("text", "checkbox", "select", or caller-defined)
        required: Boolean, or predicate over the full payload
        validate: Custom check, called with (value, payload); raises to reject
        process: Transform applied to the resolved value during processing
        default: Fallback when the payload value is falsy; None means no default
        options: Select options ({key, label} mappings) or a callable producing them
        description: Help text, or a callable over the final value mapping
        description_html: HTML help text, or a callable over the final value mapping
        visible: Only an explicit False hides the field
        id: Explicit render identifier
        attributes: Extra display hints passed through to the view model
    """

    name: str
    label: str | None = None
    type: str = "text"
    required: bool | Callable[[Payload], Any] = False
    validate: FieldValidateFn | None = None
    process: Callable[[Any], Any] | None = None
    default: Any = None
    options: OptionSource | None = None
    description: str | Callable[[Payload], str] | None = None
    description_html: str | Callable[[Payload], str] | None = None
    visible: bool | None = None
    id: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def display_label(self) -> str:
        return self.label or self.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldSpec":
        """Create FieldSpec from a config dict. Unknown keys become attributes."""
        values = normalize_keys(data)
        if "name" not in values:
            raise ConfigurationError(f"Field is missing a name: {dict(data)!r}")

        known = {name for name in cls.__dataclass_fields__ if name != "attributes"}
        kwargs = {key: value for key, value in values.items() if key in known}
        attributes = dict(values.get("attributes") or {})
        attributes.update(
            {key: value for key, value in values.items() if key not in known and key != "attributes"}
        )
        return cls(attributes=attributes, **kwargs)


@dataclass(frozen=True)
class FieldGroup:
    """A named, ordered group of fields.

    Attributes:
        name: Group name; serialization defaults it to "group-{index}"
        fields: Fields in display order
        attributes: Extra group metadata (legend, css class, ...)
    """

    name: str | None = None
    fields: tuple[FieldSpec, ...] = ()
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldGroup":
        """Create FieldGroup from a config dict.

        Accepts "fields" or the older "inputs" key for the field list.
        """
        raw_fields = data.get("fields")
        if raw_fields is None:
            raw_fields = data.get("inputs", [])
        fields = tuple(
            f if isinstance(f, FieldSpec) else FieldSpec.from_dict(f) for f in raw_fields
        )
        attributes = {
            key: value for key, value in data.items() if key not in ("name", "fields", "inputs")
        }
        return cls(name=data.get("name"), fields=fields, attributes=attributes)


@dataclass(frozen=True)
class FormOptions:
    """Full form configuration.

    Attributes:
        id: Form element id
        action: Submission target
        groups: Field groups in display order
        help: Help text shown with the form
        help_html: HTML help text
        instructions: Instructions shown above the fields
        method: HTTP method for submission
        process: Form-level transform over the processed value mapping
        submit: Submit button label
        validate: Form-level validator over the full payload
        attributes: Extra rendering metadata passed through to the view model
    """

    id: str = "form"
    action: str = ""
    groups: tuple[FieldGroup, ...] = ()
    help: str = ""
    help_html: str = ""
    instructions: str = ""
    method: str = "post"
    process: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    submit: str = "Submit"
    validate: FormValidateFn | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FormOptions":
        """Create FormOptions from a config dict, applying documented defaults."""
        values = normalize_keys(data or {})
        groups = tuple(
            g if isinstance(g, FieldGroup) else FieldGroup.from_dict(g)
            for g in values.get("groups") or []
        )

        known = {name for name in cls.__dataclass_fields__ if name not in ("groups", "attributes")}
        kwargs = {key: value for key, value in values.items() if key in known}
        attributes = {
            key: value for key, value in values.items()
            if key not in known and key not in ("groups", "attributes")
        }
        attributes.update(values.get("attributes") or {})
        return cls(groups=groups, attributes=attributes, **kwargs)
