"""Hand a file over to the operator's editor."""

import asyncio
import shlex
import shutil
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


class EditorError(Exception):
    """Editor is missing, invalid or exited with an error"""


def validate_editor(editor: str | None) -> list[str]:
    """Split ``editor`` into argv and check the executable is on PATH."""
    if not editor:
        raise EditorError(
            "no editor configured - set JOTR_EDITOR, VISUAL or EDITOR"
        )

    argv = shlex.split(editor)
    if not argv:
        raise EditorError(f"invalid editor command: {editor!r}")

    if shutil.which(argv[0]) is None:
        raise EditorError(f"editor '{argv[0]}' not found in PATH")

    return argv


async def open_in_editor(path: str | Path, editor: str | None) -> None:
    """Open ``path`` in ``editor`` and wait for it to exit."""
    argv = validate_editor(editor)

    logger.info("Opening editor", editor=argv[0], path=str(path))
    process = await asyncio.create_subprocess_exec(*argv, str(path))
    returncode = await process.wait()

    if returncode != 0:
        raise EditorError(f"editor '{argv[0]}' exited with status {returncode}")
