"""Anti-pattern detectors.

Circular includes are not a per-file rule; see ``graph.cycles``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from ..config import DEFAULT_CONFIG, ArcheologistConfig
from ..models import AntiPatternHit, SourceFile
from .asset_paths import HardCodedAssetPathDetector
from .base import Detector
from .deprecated_api import DEPRECATION_RULES, DeprecatedApiDetector, DeprecationRule
from .generated_body import MissingGeneratedBodyDetector
from .god_class import GodClassDetector
from .new_object import UntrackedNewObjectDetector


def build_detectors(config: Optional[ArcheologistConfig] = None) -> list[Detector]:
    """Detector instances tuned by ``config``, headers-only rules first."""
    config = config or DEFAULT_CONFIG
    return [
        MissingGeneratedBodyDetector(lookahead=config.generated_body_lookahead),
        GodClassDetector(
            max_lines=config.god_class_max_lines,
            max_methods=config.god_class_max_methods,
        ),
        HardCodedAssetPathDetector(),
        UntrackedNewObjectDetector(context_lines=config.newobject_context_lines),
        DeprecatedApiDetector(),
    ]


def run_detectors(source: SourceFile, detectors: Iterable[Detector]) -> list[AntiPatternHit]:
    """Concatenate every applicable detector's hits for one file."""
    hits: list[AntiPatternHit] = []
    for detector in detectors:
        if detector.headers_only and not source.is_header:
            continue
        hits.extend(detector.detect(source.content, source.relative_path))
    return hits


__all__ = [
    "Detector",
    "DeprecationRule",
    "DEPRECATION_RULES",
    "DeprecatedApiDetector",
    "GodClassDetector",
    "HardCodedAssetPathDetector",
    "MissingGeneratedBodyDetector",
    "UntrackedNewObjectDetector",
    "build_detectors",
    "run_detectors",
]
