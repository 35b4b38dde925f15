"""FormForge CLI entry point."""

import asyncio
import importlib
import json
import logging
from pathlib import Path

import click
import yaml

from formforge.loader import FormLoader
from formforge.types import ConfigurationError, ValidationError


def _load_data(path: Path | None) -> dict:
    """Read a JSON or YAML payload file."""
    if path is None:
        return {}
    with open(path) as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f) or {}


def _load_form(form_path: Path):
    try:
        return FormLoader.load_file(form_path)
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        for issue in e.issues:
            click.echo(f"  {issue}", err=True)
        raise SystemExit(1)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--functions",
    "modules",
    multiple=True,
    help="Module to import before loading forms (registers named functions).",
)
def cli(verbose: bool, modules: tuple[str, ...]):
    """FormForge: declarative form validation CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    for module in modules:
        importlib.import_module(module)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def check(files: tuple[Path, ...]):
    """Check form YAML files against the schema and load them."""
    failed = 0
    for path in files:
        try:
            form = FormLoader.load_file(path)
        except ConfigurationError as e:
            failed += 1
            click.echo(click.style(f"✗ {e}", fg="red"))
            for issue in e.issues:
                click.echo(f"    {issue}")
            continue
        click.echo(f"  ✓ {path} ({form.options.id}, {len(form.fields)} fields)")

    if failed:
        click.echo(click.style(f"\n{failed} form(s) failed", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style("\nAll forms are valid.", fg="green", bold=True))


@cli.command()
@click.argument("form_path", type=click.Path(exists=True, path_type=Path))
@click.argument("data_path", type=click.Path(exists=True, path_type=Path))
def validate(form_path: Path, data_path: Path):
    """Validate a payload file and print the processed values."""
    form = _load_form(form_path)
    try:
        values = asyncio.run(form.validate(_load_data(data_path)))
    except ValidationError as e:
        click.echo(click.style(f"Invalid: {e.message}", fg="red"), err=True)
        raise SystemExit(1)
    _echo_json(values)


@cli.command()
@click.argument("form_path", type=click.Path(exists=True, path_type=Path))
@click.argument("data_path", type=click.Path(exists=True, path_type=Path))
def process(form_path: Path, data_path: Path):
    """Process a payload file without validating it."""
    form = _load_form(form_path)
    _echo_json(form.process(_load_data(data_path)))


@cli.command()
@click.argument("form_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--values",
    "values_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="JSON or YAML file with values to display.",
)
def serialize(form_path: Path, values_path: Path | None):
    """Print the view model for a form."""
    form = _load_form(form_path)
    view = form.serialize(values=_load_data(values_path))
    # Callables are not part of the printable view
    _echo_json(_drop_callables(view))


def _drop_callables(obj):
    if isinstance(obj, dict):
        return {k: _drop_callables(v) for k, v in obj.items() if not callable(v)}
    if isinstance(obj, list):
        return [_drop_callables(item) for item in obj]
    return obj
