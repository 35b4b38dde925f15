"""Form definition: the entry point tying validation, processing and serialization together.

Usage:
    form = Form({
        "groups": [{
            "fields": [
                {"name": "name", "required": True},
                {"name": "role", "type": "select", "required": True,
                 "options": [{"key": "admin"}, {"key": "user"}]},
            ],
        }],
    })

    values = await form.validate(payload)
    view = form.serialize(values=values)
"""

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any

from formforge.processing import ProcessingPipeline
from formforge.serialization import SerializationView
from formforge.types import (
    ConfigurationError,
    FieldGroup,
    FieldSpec,
    FormOptions,
    Payload,
    ValidationError,
)
from formforge.validation import ValidationEngine

logger = logging.getLogger(__name__)


class Form:
    """An immutable form definition, reusable across many calls.

    Fields from all groups are flattened (group order, then in-group order)
    into `fields`, which validation and processing iterate. Field names are
    not deduplicated; later fields win in output mappings.
    """

    ValidationError = ValidationError

    def __init__(self, options: FormOptions | Mapping[str, Any] | None = None):
        if not isinstance(options, FormOptions):
            options = FormOptions.from_dict(options)

        for key in ("process", "validate"):
            value = getattr(options, key)
            if value and not callable(value):
                raise ConfigurationError(f'Invalid option ("{key}"): Function expected')

        self.options = options
        self.fields = self.prepare_fields(options.groups)

        self.pipeline = ProcessingPipeline(self.fields, options.process)
        self.engine = ValidationEngine(self.fields, self.pipeline, options.validate)
        self.view = SerializationView(options, self.fields)

    @staticmethod
    def prepare_fields(groups: tuple[FieldGroup, ...]) -> tuple[FieldSpec, ...]:
        """Flatten groups into a single ordered field list."""
        fields = tuple(spec for group in groups for spec in group.fields)

        duplicates = [name for name, count in Counter(f.name for f in fields).items() if count > 1]
        if duplicates:
            logger.debug("Duplicate field names (later fields win): %s", ", ".join(duplicates))
        logger.debug("Prepared %d field(s) from %d group(s)", len(fields), len(groups))
        return fields

    async def validate(self, payload: Payload | None) -> dict[str, Any]:
        """Validate a payload, then return its processed values."""
        return await self.engine.validate(payload)

    def process(self, payload: Payload | None) -> dict[str, Any]:
        """Process a payload into its output value mapping without validating."""
        return self.pipeline.process(payload)

    def serialize(
        self,
        extend: Mapping[str, Any] | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build the render-ready view model."""
        return self.view.serialize(extend=extend, values=values)
