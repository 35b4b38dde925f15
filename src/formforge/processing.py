"""Processing pipeline: turns a raw payload into the canonical output mapping.

Steps per field, in flattened field order:
1. Take the payload value
2. Substitute the field default if the value is empty
3. Apply the field's own transform
4. Apply the field type's coercion (checkbox -> bool)

The form-level transform then runs over the whole mapping.
"""

from collections.abc import Callable, Sequence
from typing import Any

from formforge.fields.registry import FieldTypeRegistry
from formforge.types import FieldSpec, Payload
from formforge.values import is_empty


class ProcessingPipeline:
    """Applies defaults, transforms and coercions to a payload.

    Processing performs no validation and does not mutate the payload.
    """

    def __init__(
        self,
        fields: Sequence[FieldSpec],
        process: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
    ):
        self.fields = fields
        self.process_fn = process

    def process(self, payload: Payload | None) -> dict[str, Any]:
        """Process a payload into an output value mapping.

        Args:
            payload: Raw field values keyed by field name (missing keys allowed)

        Returns:
            Output mapping in field order; the form-level transform's result if one is set
        """
        payload = payload or {}
        values: dict[str, Any] = {}

        for spec in self.fields:
            values[spec.name] = self.process_field(spec, payload.get(spec.name))

        if self.process_fn:
            values = self.process_fn(values)

        return values

    def process_field(self, spec: FieldSpec, value: Any) -> Any:
        """Resolve, transform and coerce a single field value."""
        if is_empty(value) and spec.default is not None:
            value = spec.default

        if spec.process:
            value = spec.process(value)

        return FieldTypeRegistry.get(spec.type).coerce(spec, value)
