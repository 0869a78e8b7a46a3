"""Template discovery: scan a directory and build the sorted catalog"""

from collections.abc import Iterable
from pathlib import Path

import aiofiles
import aiofiles.os
import structlog

from jotr.config import Settings

from .errors import TemplateError, TemplateErrorKind
from .models import Template
from .parser import parse_template

logger = structlog.get_logger(__name__)

TEMPLATE_SUFFIX = ".md"


def sort_templates(templates: Iterable[Template]) -> list[Template]:
    """Order by priority, then category, then name."""
    return sorted(templates, key=lambda t: (t.priority, t.category, t.name))


async def discover_templates(
    templates_dir: str | Path,
) -> tuple[list[Template], list[Exception]]:
    """Parse every ``*.md`` file directly inside ``templates_dir``.

    A missing directory is an empty catalog. A file that cannot be read or
    parsed is skipped and its error returned alongside the templates, so one
    broken template never hides the others.
    """
    templates: list[Template] = []
    errors: list[Exception] = []

    try:
        entries = await aiofiles.os.scandir(templates_dir)
    except FileNotFoundError:
        return templates, errors
    except OSError as e:
        return [], [e]

    with entries:
        candidates = sorted(
            (
                entry
                for entry in entries
                if entry.name.endswith(TEMPLATE_SUFFIX) and entry.is_file()
            ),
            key=lambda entry: entry.name,
        )

    for entry in candidates:
        try:
            async with aiofiles.open(entry.path, "rb") as f:
                raw = await f.read()
        except OSError as e:
            errors.append(OSError(f"reading {entry.name}: {e.strerror or e}"))
            continue

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            errors.append(
                TemplateError(
                    TemplateErrorKind.PARSE_FAILED, str(e), template=entry.name
                )
            )
            continue

        try:
            template = parse_template(entry.path, content)
        except TemplateError as e:
            errors.append(e)
            continue

        templates.append(template)

    return templates, errors


async def load_templates(settings: Settings) -> tuple[list[Template], list[str]]:
    """Discover and sort the configured templates, returning warning strings."""
    templates_dir = settings.templates_path
    templates, errors = await discover_templates(templates_dir)

    warnings = [str(error) for error in errors]
    for warning in warnings:
        logger.warning("Skipping template", reason=warning)

    logger.debug(
        "Loaded templates",
        templates_dir=str(templates_dir),
        count=len(templates),
        skipped=len(warnings),
    )
    return sort_templates(templates), warnings


def find_template(templates: Iterable[Template], query: str) -> Template:
    """Look a template up by name, ``category/name``, filename or stem."""
    for template in templates:
        if query in (
            template.name,
            template.display_name,
            template.filename,
            template.stem,
        ):
            return template
    raise TemplateError(TemplateErrorKind.TEMPLATE_NOT_FOUND, query)


def group_by_category(templates: Iterable[Template]) -> dict[str, list[Template]]:
    """Group catalog entries by category, keeping catalog order."""
    groups: dict[str, list[Template]] = {}
    for template in templates:
        groups.setdefault(template.category, []).append(template)
    return groups
