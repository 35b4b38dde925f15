"""Load form definitions from YAML files.

A form file has a single `form:` root key. Values that must be code are
written as references to registered functions:

    form:
      id: signup
      validate: signup.checkPasswords        # bare name
      groups:
        - name: account
          fields:
            - name: role
              type: select
              required: {function: signup.roleRequired}
              options: {function: roles.list}

Files are checked against schemas/form.schema.json before loading.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from formforge.form import Form
from formforge.functions import FunctionRegistry
from formforge.types import ConfigurationError, normalize_keys

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "form.schema.json"

# Keys whose values may be {function: name} references
_FIELD_FUNCTION_KEYS = ("required", "validate", "process", "options", "description", "description_html")
_FORM_FUNCTION_KEYS = ("validate", "process")

# Keys that also accept a bare function name
_NAMED_FUNCTION_KEYS = ("validate", "process")


@dataclass
class SchemaIssue:
    """A single schema finding for a form YAML file."""

    file: Path
    message: str
    path: str = ""

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"{self.file}{loc}: {self.message}"


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(parts) -> str:
    path = "/".join(f"[{p}]" if isinstance(p, int) else str(p) for p in parts)
    return path.replace("/[", "[")


def check_document(doc: Any, file: Path) -> list[SchemaIssue]:
    """Check a parsed form document against the form schema."""
    if doc is None:
        return [SchemaIssue(file=file, message="File is empty or contains only whitespace")]

    validator = Draft202012Validator(_load_schema())
    issues = [
        SchemaIssue(file=file, message=error.message, path=_json_path(error.absolute_path))
        for error in validator.iter_errors(doc)
    ]
    return sorted(issues, key=lambda issue: issue.path)


def resolve_functions(
    data: dict[str, Any], keys: tuple[str, ...], referrer: str
) -> dict[str, Any]:
    """Replace function references under the given keys with registered callables.

    Keys are normalized first, so `descriptionHtml` and `description_html`
    resolve the same way.
    """
    resolved = normalize_keys(data)
    for key in keys:
        if key in resolved:
            resolved[key] = FunctionRegistry.resolve(
                resolved[key],
                referrer=f"{referrer} ({key})",
                allow_name=key in _NAMED_FUNCTION_KEYS,
            )
    return resolved


def build_form(data: dict[str, Any]) -> Form:
    """Build a Form from the body of a `form:` document, resolving function references."""
    form_id = data.get("id", "form")
    config = resolve_functions(data, _FORM_FUNCTION_KEYS, f"form '{form_id}'")
    groups = []
    for group in data.get("groups") or []:
        group = dict(group)
        key = "fields" if "fields" in group else "inputs"
        group[key] = [
            resolve_functions(
                field, _FIELD_FUNCTION_KEYS, f"field '{field.get('name')}' of form '{form_id}'"
            )
            for field in group.get(key) or []
        ]
        groups.append(group)
    config["groups"] = groups
    return Form(config)


class FormLoader:
    """Loads form definitions from a directory of *.yaml files.

    Forms are keyed by their `id` (defaulting to the file stem).
    """

    def __init__(self, forms_path: Path):
        self.forms_path = forms_path
        self.forms: dict[str, Form] = {}

    def load_all(self) -> None:
        """Load every form file in the directory."""
        if not self.forms_path.exists():
            return

        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            form = self.load_file(yaml_file)
            self.forms[form.options.id] = form

        logger.info("Loaded %d form(s) from %s", len(self.forms), self.forms_path)

    @staticmethod
    def load_file(yaml_file: Path) -> Form:
        """Load and check a single form file.

        Raises:
            ConfigurationError: If the file fails the schema check or references
                an unregistered function
        """
        try:
            with open(yaml_file) as f:
                doc = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{yaml_file}: YAML parse error: {exc}") from exc

        issues = check_document(doc, yaml_file)
        if issues:
            raise ConfigurationError(
                f"{yaml_file}: {len(issues)} schema error(s)",
                issues=[str(issue) for issue in issues],
            )

        data = dict(doc["form"])
        data.setdefault("id", yaml_file.stem)
        return build_form(data)

    def get_form(self, form_id: str) -> Form | None:
        """Get a loaded form by id."""
        return self.forms.get(form_id)

    def list_forms(self) -> list[str]:
        """List loaded form ids."""
        return sorted(self.forms.keys())
