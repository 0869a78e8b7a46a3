"""Write rendered notes to disk exactly once"""

import asyncio
from pathlib import Path

import structlog

from jotr.utils.editor import open_in_editor
from jotr.utils.file_utils import (
    DEFAULT_FILE_MODE,
    atomic_write,
    ensure_dir,
    file_exists,
)

from .errors import TemplateError, TemplateErrorKind

logger = structlog.get_logger(__name__)


async def create_from_template(
    content: str,
    target_path: str | Path,
    cancel_event: asyncio.Event | None = None,
) -> Path:
    """Create ``target_path`` with ``content``; never overwrites.

    The existence check and the final rename are separate steps, so two
    concurrent calls for the same path can both pass the check and the later
    rename wins.
    """
    target = Path(target_path)

    try:
        await ensure_dir(target.parent)
    except OSError as e:
        raise TemplateError(
            TemplateErrorKind.DIRECTORY_CREATE_FAILED, f"{target.parent}: {e}"
        ) from e

    if await file_exists(target):
        raise TemplateError(TemplateErrorKind.TARGET_EXISTS, str(target))

    try:
        await atomic_write(
            target, content, mode=DEFAULT_FILE_MODE, cancel_event=cancel_event
        )
    except OSError as e:
        raise TemplateError(TemplateErrorKind.WRITE_FAILED, f"{target}: {e}") from e

    logger.info("Note created", path=str(target), size=len(content))
    return target


async def create_and_open(
    content: str,
    target_path: str | Path,
    editor: str | None,
    cancel_event: asyncio.Event | None = None,
) -> Path:
    """Materialize the note, then open it in ``editor``."""
    target = await create_from_template(content, target_path, cancel_event)
    await open_in_editor(target, editor)
    return target
