"""Generic filesystem helpers used by the note materializer."""

import asyncio
import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_FILE_MODE = 0o644


async def file_exists(path: str | Path) -> bool:
    """Return True if a file or directory exists at ``path``."""
    return await aiofiles.os.path.exists(path)


async def ensure_dir(path: str | Path) -> None:
    """Create ``path`` and any missing parents."""
    await aiofiles.os.makedirs(path, exist_ok=True)


async def atomic_write(
    path: str | Path,
    content: str,
    mode: int = DEFAULT_FILE_MODE,
    cancel_event: asyncio.Event | None = None,
) -> None:
    """Write ``content`` to ``path`` so readers never see a partial file.

    Data goes to a hidden sibling temp file which is flushed, synced and
    chmod-ed before being renamed over ``path``. The temp file is removed on
    any failure. ``cancel_event`` is checked once before anything is touched.
    """
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError(f"write to {path} cancelled")

    target = Path(path)
    logger.debug("Starting atomic write", path=str(target), size=len(content))

    fd, tmp_name = await asyncio.to_thread(
        tempfile.mkstemp, dir=target.parent, prefix=f".{target.name}.tmp."
    )
    os.close(fd)

    try:
        async with aiofiles.open(tmp_name, "w", encoding="utf-8") as f:
            await f.write(content)
            await f.flush()
            await asyncio.to_thread(os.fsync, f.fileno())

        await asyncio.to_thread(os.chmod, tmp_name, mode)
        await aiofiles.os.replace(tmp_name, target)
    except BaseException:
        # Covers CancelledError as well
        if await aiofiles.os.path.exists(tmp_name):
            await aiofiles.os.remove(tmp_name)
        raise

    logger.debug("Atomic write completed", path=str(target))
