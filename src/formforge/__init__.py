"""FormForge: declarative form validation, processing and serialization.

A form definition is built once and reused:
- validate(payload): per-field and form-level checks, then processing (async)
- process(payload): defaults, transforms and coercions into clean values
- serialize(extend=..., values=...): render-ready view model for templates

Usage:
    from formforge import Form, ValidationError

    form = Form({"groups": [{"fields": [{"name": "email", "required": True}]}]})
    try:
        values = await form.validate(payload)
    except ValidationError as e:
        view = form.serialize(values=payload, extend={"error": e.message})
"""

from formforge.fields import (
    FieldType,
    FieldTypeRegistry,
    field_type,
    register_builtin_types,
)
from formforge.form import Form
from formforge.functions import FunctionRegistry, form_function
from formforge.loader import FormLoader
from formforge.partials import register_partials
from formforge.processing import ProcessingPipeline
from formforge.serialization import SerializationView
from formforge.types import (
    ConfigurationError,
    FieldGroup,
    FieldSpec,
    FormError,
    FormOptions,
    ValidationError,
)
from formforge.validation import ValidationEngine

register_builtin_types()

__all__ = [
    # Types
    "ConfigurationError",
    "FieldGroup",
    "FieldSpec",
    "FormError",
    "FormOptions",
    "ValidationError",
    # Pipeline
    "Form",
    "ProcessingPipeline",
    "SerializationView",
    "ValidationEngine",
    # Registries
    "FieldType",
    "FieldTypeRegistry",
    "FunctionRegistry",
    "field_type",
    "form_function",
    "register_builtin_types",
    # Loading and templates
    "FormLoader",
    "register_partials",
]
