"""Source file collection.

Walks the native source tree once, keeping files whose extension matches and
pruning build-output and tooling directories. Depth and count bounds protect
against symlink loops and pathological trees.
"""

import os
from collections.abc import Collection
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger(__name__)


def collect_source_files(
    directory: Path,
    extensions: Collection[str],
    exclude_dirs: Collection[str] = (),
    max_depth: int = 8,
    max_files: int = 2000,
) -> list[Path]:
    """Collect absolute paths of matching files under ``directory``.

    Args:
        directory: Root of the walk (depth 0)
        extensions: Allowed suffixes, matched case-insensitively
        exclude_dirs: Directory names skipped at any depth
        max_depth: Deepest directory level that is still listed
        max_files: Collection stops once this many files are found

    Returns:
        Paths in sorted walk order. Unreadable directories contribute nothing.
    """
    ext_set = {e.lower() for e in extensions}
    skip = set(exclude_dirs)
    results: list[Path] = []

    def walk(current: Path, depth: int) -> None:
        if depth > max_depth:
            return
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {current}: {e}")
            return

        for entry in entries:
            if len(results) >= max_files:
                return
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name not in skip:
                        walk(Path(entry.path), depth + 1)
                elif entry.is_file() and os.path.splitext(entry.name)[1].lower() in ext_set:
                    results.append(Path(entry.path).absolute())
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {entry.path}: {e}")

    walk(Path(directory), 0)

    if len(results) >= max_files:
        logger.warning(f"Reached max files limit ({max_files}) under {directory}")
    logger.debug(f"Collected {len(results)} source files under {directory}")
    return results
