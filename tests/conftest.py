"""Shared fixtures for FormForge tests."""

import pytest

from formforge.fields import FieldTypeRegistry, register_builtin_types
from formforge.functions import FunctionRegistry


@pytest.fixture(autouse=True)
def setup_registries():
    """Reset registries around each test, keeping the built-in field types."""
    FieldTypeRegistry.clear()
    FunctionRegistry.clear()
    register_builtin_types()
    yield
    FieldTypeRegistry.clear()
    FunctionRegistry.clear()
    register_builtin_types()


@pytest.fixture
def signup_config():
    """Form config with a required text field and a required select."""
    return {
        "id": "signup",
        "groups": [
            {
                "name": "account",
                "fields": [
                    {"name": "name", "required": True},
                    {
                        "name": "role",
                        "type": "select",
                        "required": True,
                        "options": [{"key": "admin"}, {"key": "user"}],
                    },
                ],
            }
        ],
    }
