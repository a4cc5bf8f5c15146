"""Batched concurrent reading of collected source files."""

import asyncio
from collections.abc import Collection, Sequence
from pathlib import Path
from typing import Optional

from ..cancellation import CancellationToken, check_cancelled
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..models import SourceFile

logger = get_logger(__name__)


def relative_posix(path: Path, project_root: Path) -> str:
    """Project-relative path with forward slashes, as reported in hits."""
    try:
        rel = Path(path).relative_to(project_root)
    except ValueError:
        rel = Path(path)
    return rel.as_posix()


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(path, str(e))


async def read_source_files(
    paths: Sequence[Path],
    project_root: Path,
    header_extensions: Collection[str],
    batch_size: int = 20,
    cancel_token: Optional[CancellationToken] = None,
) -> list[SourceFile]:
    """Load file contents in fixed-size batches.

    Files within a batch are read concurrently in worker threads; the next
    batch starts only after the current one completes, which bounds open file
    descriptors. Unreadable or empty files are left out of the result.
    """
    header_set = {e.lower() for e in header_extensions}
    project_root = Path(project_root).absolute()
    loaded: list[SourceFile] = []

    for start in range(0, len(paths), batch_size):
        check_cancelled(cancel_token, "reading")
        batch = paths[start:start + batch_size]
        results = await asyncio.gather(
            *(asyncio.to_thread(_read_text, p) for p in batch),
            return_exceptions=True,
        )
        for path, result in zip(batch, results):
            if isinstance(result, FileAccessError):
                logger.debug(f"Skipping unreadable file: {result.filepath} ({result.reason})")
                continue
            if isinstance(result, BaseException):
                raise result
            if not result:
                continue
            loaded.append(
                SourceFile(
                    path=path,
                    relative_path=relative_posix(path, project_root),
                    content=result,
                    is_header=path.suffix.lower() in header_set,
                )
            )

    logger.debug(f"Read {len(loaded)} of {len(paths)} source files")
    return loaded
