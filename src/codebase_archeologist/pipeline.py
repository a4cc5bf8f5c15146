"""Analysis orchestrator: one scan from source tree to report.

Stages run strictly in order. Failures are contained at the narrowest scope
(a file, a git query); only an unusable project path is fatal.
"""

from __future__ import annotations

import asyncio
import time
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from .backlog import synthesize_backlog
from .cancellation import CancellationToken, check_cancelled
from .config import DEFAULT_CONFIG, ArcheologistConfig
from .detectors import build_detectors, run_detectors
from .exceptions import InvalidPathError
from .graph import (
    build_include_graph,
    circular_include_hits,
    find_include_cycles,
    header_paths_by_basename,
)
from .ids import HitIdGenerator
from .logging_config import get_logger
from .models import AntiPatternHit, ArcheologistAnalysis, Category, Severity
from .scanning import collect_source_files, read_source_files
from .temporal import analyze_git_churn

logger = get_logger(__name__)


class ScanStage(str, Enum):
    COLLECTING = "collecting"
    READING = "reading"
    DETECTING = "detecting"
    GRAPH_ANALYSIS = "graph-analysis"
    CHURN_ANALYSIS = "churn-analysis"
    SYNTHESIZING = "synthesizing"
    DONE = "done"


StageCallback = Callable[[ScanStage], None]


def resolve_project_root(project_path: str | Path, source_dir: str) -> tuple[Path, Path]:
    """Validate the project path and locate its native source directory.

    Raises:
        InvalidPathError: The project root or its source directory is missing
            or not a directory.
    """
    root = Path(project_path).expanduser().absolute()
    if not root.exists():
        raise InvalidPathError(root, "does not exist")
    if not root.is_dir():
        raise InvalidPathError(root, "is not a directory")

    source = root / source_dir
    if not source.is_dir():
        raise InvalidPathError(source, f"{source_dir}/ directory not found in project path")
    return root, source


async def run_analysis(
    project_path: str | Path,
    config: Optional[ArcheologistConfig] = None,
    cancel_token: Optional[CancellationToken] = None,
    on_stage: Optional[StageCallback] = None,
) -> ArcheologistAnalysis:
    """Scan a project and return its self-contained report.

    Args:
        project_path: Project root containing the native source directory
        config: Scan settings; defaults apply when omitted
        cancel_token: Checked between stages, read batches and git queries
        on_stage: Called as each stage begins

    Raises:
        InvalidPathError: The project path is unusable (nothing is scanned)
        ScanCancelledError: The token was cancelled mid-scan
    """
    config = config or DEFAULT_CONFIG
    started = time.monotonic()
    root, source_dir = resolve_project_root(project_path, config.source_dir)

    def enter(stage: ScanStage) -> None:
        check_cancelled(cancel_token, stage.value)
        logger.debug(f"Stage: {stage.value}")
        if on_stage is not None:
            on_stage(stage)

    enter(ScanStage.COLLECTING)
    paths = await asyncio.to_thread(
        collect_source_files,
        source_dir,
        config.all_extensions,
        exclude_dirs=config.exclude_dirs,
        max_depth=config.max_depth,
        max_files=config.max_files,
    )

    enter(ScanStage.READING)
    sources = await read_source_files(
        paths,
        root,
        config.header_extensions,
        batch_size=config.read_batch_size,
        cancel_token=cancel_token,
    )

    enter(ScanStage.DETECTING)
    detectors = build_detectors(config)
    hits: list[AntiPatternHit] = []
    for source in sources:
        hits.extend(run_detectors(source, detectors))

    enter(ScanStage.GRAPH_ANALYSIS)
    headers = [s for s in sources if s.is_header]
    cycles = find_include_cycles(build_include_graph(headers), config.max_include_chain)
    hits.extend(circular_include_hits(cycles, header_paths_by_basename(headers)))

    enter(ScanStage.CHURN_ANALYSIS)
    churn_report = await analyze_git_churn(
        root,
        source_dir=config.source_dir,
        max_commits=config.git_max_commits,
        top_files=config.churn_top_files,
        shotgun_min_files=config.shotgun_min_files,
        timeout=config.git_timeout_seconds,
        cancel_token=cancel_token,
    )

    enter(ScanStage.SYNTHESIZING)
    hits = HitIdGenerator().assign(hits)
    backlog = synthesize_backlog(hits, churn_report.churn, limit=config.backlog_limit)
    severity_counts = Counter(h.severity for h in hits)
    category_counts = Counter(h.category for h in hits)

    analysis = ArcheologistAnalysis(
        scanned_at=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        scan_duration_ms=int((time.monotonic() - started) * 1000),
        total_files=len(paths),
        total_anti_patterns=len(hits),
        by_severity={s: severity_counts.get(s, 0) for s in Severity},
        by_category={c: category_counts.get(c, 0) for c in Category},
        anti_patterns=hits,
        churn=churn_report.churn,
        shotgun_surgeries=churn_report.surgeries,
        refactoring_backlog=backlog,
    )

    if on_stage is not None:
        on_stage(ScanStage.DONE)
    logger.info(
        f"Scanned {analysis.total_files} files: {analysis.total_anti_patterns} anti-patterns, "
        f"{len(cycles)} include cycles, {len(analysis.churn)} churned files "
        f"in {analysis.scan_duration_ms}ms"
    )
    return analysis
