"""Per-file churn and shotgun-surgery detection from recent git history.

Churn is enrichment: every failure here degrades to missing data and is
never raised to the caller.
"""

from __future__ import annotations

import re
from collections import Counter
from pathlib import Path
from typing import Optional

from ..cancellation import CancellationToken, check_cancelled
from ..exceptions import GitCommandError
from ..logging_config import get_logger
from ..models import ChurnReport, FileChurn, ShotgunSurgery
from .git_extractor import GitRunner

logger = get_logger(__name__)

_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"
_SURGERY_FORMAT = "--pretty=format:%x1e%H%x1f%s%x1f%aI"
_FILES_CHANGED_RE = re.compile(r"(\d+)\s+files?\s+changed")

_SHORT_HASH_LEN = 8
_MAX_MESSAGE_LEN = 80


def count_file_commits(raw: str) -> Counter[str]:
    """Count commits per path in ``git log --name-only --pretty=format:`` output.

    Counter preserves first-seen order, so ties rank the most recently
    touched file first.
    """
    counts: Counter[str] = Counter()
    for line in raw.splitlines():
        path = line.strip()
        if path:
            counts[path] += 1
    return counts


def top_churn_files(counts: Counter[str], limit: int) -> list[tuple[str, int]]:
    # sorted() is stable, so equal counts keep first-seen order.
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]


def parse_shotgun_surgeries(raw: str, min_files: int) -> list[ShotgunSurgery]:
    """Commits from record-separated ``--shortstat`` output touching >= min_files."""
    surgeries = []
    for record in raw.split(_RECORD_SEP):
        if not record.strip():
            continue
        header, _, stat = record.partition("\n")
        parts = header.split(_FIELD_SEP)
        if len(parts) != 3:
            continue
        commit, message, date = parts
        match = _FILES_CHANGED_RE.search(stat)
        if not match:
            continue
        files_changed = int(match.group(1))
        if files_changed >= min_files:
            surgeries.append(
                ShotgunSurgery(
                    commit=commit[:_SHORT_HASH_LEN],
                    message=message[:_MAX_MESSAGE_LEN],
                    files_changed=files_changed,
                    date=date.strip(),
                )
            )
    return surgeries


async def _file_churn(git: GitRunner, path: str, commits: int) -> FileChurn:
    """Author count and last-modified date for one file.

    Each query degrades on its own: authors falls back to 1 and the date to
    an empty string.
    """
    authors = 1
    last_modified = ""
    try:
        names = {n.strip() for n in (await git.run("log", "--format=%aN", "--", path)).splitlines()}
        names.discard("")
        if names:
            authors = len(names)
    except GitCommandError as e:
        logger.debug(f"Author query failed for {path}: {e}")
    try:
        last_modified = (await git.run("log", "-1", "--format=%aI", "--", path)).strip()
    except GitCommandError as e:
        logger.debug(f"Date query failed for {path}: {e}")
    return FileChurn(file=path, commits=commits, authors=authors, last_modified=last_modified)


async def analyze_git_churn(
    project_root: Path,
    source_dir: str = "Source",
    max_commits: int = 200,
    top_files: int = 50,
    shotgun_min_files: int = 10,
    timeout: float = 30,
    cancel_token: Optional[CancellationToken] = None,
) -> ChurnReport:
    """Churn for the most-changed source files plus shotgun-surgery commits.

    Paths are reported relative to ``project_root`` so they join with hit
    paths even when the repository root sits above the project.
    """
    git = GitRunner(project_root, timeout=timeout)
    if not await git.is_work_tree():
        logger.info("Not a git repository or git unavailable; skipping churn analysis")
        return ChurnReport()

    churn: list[FileChurn] = []
    try:
        raw = await git.run(
            "log",
            f"--max-count={max_commits}",
            "--pretty=format:",
            "--name-only",
            "--diff-filter=AMRC",
            "--relative",
            "--",
            f"{source_dir.rstrip('/')}/",
        )
    except GitCommandError as e:
        logger.warning(f"Churn query failed: {e}")
    else:
        # TODO: fold the author/date lookups into the windowed log walk above
        # to avoid two git spawns per file.
        for path, commits in top_churn_files(count_file_commits(raw), top_files):
            check_cancelled(cancel_token, "churn-analysis")
            churn.append(await _file_churn(git, path, commits))

    surgeries: list[ShotgunSurgery] = []
    check_cancelled(cancel_token, "churn-analysis")
    try:
        raw = await git.run("log", f"--max-count={max_commits}", _SURGERY_FORMAT, "--shortstat")
    except GitCommandError as e:
        logger.warning(f"Shotgun surgery query failed: {e}")
    else:
        surgeries = parse_shotgun_surgeries(raw, shotgun_min_files)

    logger.debug(f"Churn: {len(churn)} files, {len(surgeries)} shotgun surgeries")
    return ChurnReport(churn=churn, surgeries=surgeries)
