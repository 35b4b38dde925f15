"""Field type strategies.

Usage:
    from formforge.fields import FieldType, field_type

    @field_type("rating")
    class RatingFieldType(FieldType):
        def coerce(self, spec, value):
            return int(value or 0)
"""

from formforge.fields.builtins import (
    CheckboxFieldType,
    SelectFieldType,
    TextFieldType,
    register_builtin_types,
)
from formforge.fields.registry import FieldType, FieldTypeRegistry, field_type

__all__ = [
    "CheckboxFieldType",
    "FieldType",
    "FieldTypeRegistry",
    "SelectFieldType",
    "TextFieldType",
    "field_type",
    "register_builtin_types",
]
