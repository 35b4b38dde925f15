"""Validation engine for FormForge.

Runs per-field checks, then the form-level validator, then processing.

Field checks are dispatched in field order without waiting on each other:
- synchronous parts (requirement, type check, sync validators) run inline
- awaitable validator results are scheduled as independent tasks

The first failure wins. Tasks still outstanding at that point are not
cancelled; their outcomes are retrieved and dropped when they settle.
"""

import asyncio
import functools
import inspect
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

from formforge.fields.registry import FieldTypeRegistry
from formforge.processing import ProcessingPipeline
from formforge.types import FieldSpec, FormValidateFn, Payload, ValidationError
from formforge.values import is_empty, resolve

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Validates payloads against a form's fields and form-level rule.

    Example:
        engine = ValidationEngine(fields, ProcessingPipeline(fields))
        values = await engine.validate({"name": "Ann"})
    """

    def __init__(
        self,
        fields: Sequence[FieldSpec],
        pipeline: ProcessingPipeline,
        validate: FormValidateFn | None = None,
    ):
        self.fields = fields
        self.pipeline = pipeline
        self.validate_fn = validate
        # Dispatched checks until they settle, including ones outliving a failed validate()
        self.pending: set[asyncio.Future] = set()

    async def validate(self, payload: Payload | None) -> dict[str, Any]:
        """Validate a payload and return its processed values.

        Args:
            payload: Raw field values keyed by field name

        Returns:
            The processed output mapping

        Raises:
            ValidationError: A field or form rule was violated
            Exception: Any other error raised by a custom validator, unchanged
        """
        payload = payload or {}
        logger.debug("Validating %d field(s)", len(self.fields))

        await self._validate_fields(payload)

        if self.validate_fn:
            outcome = self.validate_fn(payload)
            if inspect.isawaitable(outcome):
                await outcome

        return self.pipeline.process(payload)

    def check_field(self, spec: FieldSpec, payload: Payload) -> Awaitable[Any] | None:
        """Run one field's checks.

        Synchronous failures raise immediately. If the field's validator
        returns an awaitable, it is returned for the caller to schedule.
        """
        value = payload.get(spec.name)

        if is_empty(value):
            if resolve(spec.required, payload) is True:
                raise ValidationError(f'"{spec.display_label}" is required', field=spec.name)
        else:
            FieldTypeRegistry.get(spec.type).check(spec, value)

        if spec.validate:
            outcome = spec.validate(value, payload)
            if inspect.isawaitable(outcome):
                return outcome

        return None

    async def _validate_fields(self, payload: Payload) -> None:
        """Dispatch every field check and raise the first failure."""
        first_error: Exception | None = None
        tasks: list[asyncio.Future] = []

        for spec in self.fields:
            try:
                outcome = self.check_field(spec, payload)
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.debug("Field '%s' check failed: %s", spec.name, e)
                continue

            if outcome is not None:
                task = asyncio.ensure_future(outcome)
                self.pending.add(task)
                task.add_done_callback(functools.partial(self._settle, spec.name))
                tasks.append(task)

        if first_error is not None:
            raise first_error

        if not tasks:
            return

        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)

        for task in tasks:
            if task.done() and task.exception() is not None:
                raise task.exception()

    def _settle(self, field_name: str, task: asyncio.Future) -> None:
        """Release a finished check and retrieve its exception."""
        self.pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.debug("Field '%s' check failed: %s", field_name, error)
