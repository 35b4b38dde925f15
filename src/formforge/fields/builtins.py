"""Built-in field types: text, checkbox, select."""

from collections.abc import Mapping
from typing import Any

from formforge.fields.registry import FieldType, FieldTypeRegistry
from formforge.types import FieldSpec, ValidationError
from formforge.values import resolve


class TextFieldType(FieldType):
    """Free text. No structural check or coercion."""


class CheckboxFieldType(FieldType):
    """Boolean field. Processed values are strict booleans."""

    def coerce(self, spec: FieldSpec, value: Any) -> bool:
        return bool(value)

    def decorate(self, spec: FieldSpec, view: dict[str, Any]) -> None:
        view["checked"] = bool(view.get("value"))


class SelectFieldType(FieldType):
    """Single choice from a list of {key, label} options.

    Entries that are not mappings have no key; they never match a value and
    are left out of the view.
    """

    @staticmethod
    def option_entries(spec: FieldSpec) -> list[Mapping[str, Any]]:
        return [option for option in resolve(spec.options) or [] if isinstance(option, Mapping)]

    def check(self, spec: FieldSpec, value: Any) -> None:
        if not any(option.get("key") == value for option in self.option_entries(spec)):
            raise ValidationError(
                f'Unknown option selected for "{spec.display_label}"',
                field=spec.name,
            )

    def decorate(self, spec: FieldSpec, view: dict[str, Any]) -> None:
        value = view.get("value")
        # Option mappings may belong to the shared definition; copy before flagging
        view["options"] = [
            {**option, "selected": option.get("key") == value}
            for option in self.option_entries(spec)
        ]


def register_builtin_types() -> None:
    """Register the built-in field types. Safe to call repeatedly."""
    FieldTypeRegistry.register("text", TextFieldType())
    FieldTypeRegistry.register("checkbox", CheckboxFieldType())
    FieldTypeRegistry.register("select", SelectFieldType())
