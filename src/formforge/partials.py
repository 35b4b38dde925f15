"""Template fragment registration.

FormForge does not render markup. This hands reusable field and group
fragments to whatever template engine the application uses.

Usage:
    env = jinja2.Environment(loader=jinja2.DictLoader(sources))
    register_partials(lambda name, source: sources.__setitem__(name, source))
"""

import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

TEMPLATES_PATH = Path(__file__).parent / "templates"


def register_partials(
    register: Callable[[str, str], object],
    directory: Path | None = None,
    extension: str = ".html",
) -> list[str]:
    """Pass every template fragment under a directory to a registration callable.

    Args:
        register: Called with (name, source) for each fragment
        directory: Fragment root; defaults to the bundled templates
        extension: Only files with this suffix are registered

    Returns:
        Registered names: relative paths without extension, "/"-separated
    """
    root = directory or TEMPLATES_PATH
    names = []

    for path in sorted(root.rglob(f"*{extension}")):
        name = path.relative_to(root).with_suffix("").as_posix()
        register(name, path.read_text(encoding="utf-8"))
        names.append(name)

    logger.info("Registered %d partial(s) from %s", len(names), root)
    return names
