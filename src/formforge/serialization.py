"""Serialization of a form into a render-ready view model.

The view model is plain dicts with camelCase keys; templates depend on:
- top level: form metadata, `groups`, `hasRequiredFields`
- group: `name`, `fields` (also available as `inputs`)
- field: `name`, `label`, `type`, `id`, `value`, `visible`, `description`,
  `descriptionHtml`, plus `checked` (checkbox) or per-option `selected` (select)

Every call builds fresh dicts; the form definition is never mutated.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from formforge.fields.registry import FieldTypeRegistry
from formforge.types import FieldGroup, FieldSpec, FormOptions
from formforge.values import resolve


class SerializationView:
    """Builds view models from a form's options."""

    def __init__(self, options: FormOptions, fields: Sequence[FieldSpec]):
        self.options = options
        self.fields = fields

    def serialize(
        self,
        extend: Mapping[str, Any] | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Produce the view model.

        Args:
            extend: Extra top-level entries for the template (override form metadata)
            values: Field values to display (raw payload or processed output)

        Returns:
            View model dict
        """
        values = values or {}

        serialized = self.metadata()
        serialized.update(extend or {})
        serialized["groups"] = [
            self.serialize_group(group, index, values)
            for index, group in enumerate(self.options.groups)
        ]
        # Predicate-form `required` is deliberately not evaluated here
        serialized["hasRequiredFields"] = any(spec.required is True for spec in self.fields)
        return serialized

    def metadata(self) -> dict[str, Any]:
        """Form-level entries of the view model (everything but the groups)."""
        options = self.options
        metadata = dict(options.attributes)
        metadata.update({
            "id": options.id,
            "action": options.action,
            "help": options.help,
            "helpHtml": options.help_html,
            "instructions": options.instructions,
            "method": options.method,
            "process": options.process,
            "submit": options.submit,
            "validate": options.validate,
        })
        return metadata

    def serialize_group(
        self, group: FieldGroup, index: int, values: Mapping[str, Any]
    ) -> dict[str, Any]:
        view = dict(group.attributes)
        view["name"] = group.name or f"group-{index}"
        view["fields"] = [
            self.serialize_field(spec, view["name"], values) for spec in group.fields
        ]
        view["inputs"] = view["fields"]
        return view

    def serialize_field(
        self, spec: FieldSpec, group_name: str, values: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Build one field's view: resolved value, type decoration, id, visibility, descriptions."""
        view = dict(spec.attributes)
        view.update({
            "name": spec.name,
            "label": spec.display_label,
            "type": spec.type,
            "required": spec.required,
            "validate": spec.validate,
            "process": spec.process,
            "default": spec.default,
            "options": spec.options,
        })

        value = values.get(spec.name)
        if value is None:
            value = spec.default
        view["value"] = value

        FieldTypeRegistry.get(spec.type).decorate(spec, view)

        view["id"] = spec.id or f"form-{group_name}-{spec.name}"
        view["visible"] = spec.visible is not False
        view["description"] = resolve(spec.description, values)
        view["descriptionHtml"] = resolve(spec.description_html, values)
        return view
