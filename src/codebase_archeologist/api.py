"""Public API for Codebase Archeologist.

Example:
    >>> from codebase_archeologist import analyze
    >>> report = analyze("/path/to/MyGame")
    >>> report.total_anti_patterns
    42

Async callers await ``run_analysis`` directly.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from .cancellation import CancellationToken
from .config import load_config
from .logging_config import get_logger, setup_logging
from .models import ArcheologistAnalysis
from .pipeline import StageCallback, run_analysis

logger = get_logger(__name__)


def analyze(
    path: str | Path = ".",
    config_file: Optional[Path] = None,
    cancel_token: Optional[CancellationToken] = None,
    on_stage: Optional[StageCallback] = None,
    **overrides,
) -> ArcheologistAnalysis:
    """Load configuration, configure logging and run one scan to completion.

    Args:
        path: Project root (must contain the native source directory)
        config_file: Optional explicit TOML config file
        cancel_token: Optional token for aborting from another thread
        on_stage: Optional stage progress callback
        **overrides: Configuration overrides (e.g. verbose=True, max_files=500)

    Raises:
        ConfigurationError: If configuration is invalid
        InvalidPathError: If the project path is unusable
        ScanCancelledError: If the token is cancelled mid-scan
    """
    config = load_config(config_file=config_file, project_root=Path(path), **overrides)
    setup_logging(verbose=config.verbosity == "verbose", quiet=config.verbosity == "quiet")
    logger.info(f"Starting archeologist scan of {path}")

    return asyncio.run(
        run_analysis(path, config=config, cancel_token=cancel_token, on_stage=on_stage)
    )
