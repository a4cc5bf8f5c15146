"""Data models for an archeologist scan.

Every model is created fresh per scan and is immutable once built. The
``to_dict`` methods produce the JSON wire shape consumed by the dashboard
(camelCase keys).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def weight(self) -> int:
        return _SEVERITY_WEIGHTS[self]


_SEVERITY_WEIGHTS = {
    Severity.CRITICAL: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
}


class Category(str, Enum):
    """Anti-pattern categories, in report order."""

    MISSING_GENERATED_BODY = "missing-generated-body"
    CIRCULAR_INCLUDE = "circular-include"
    HARD_CODED_ASSET_PATH = "hard-coded-asset-path"
    UNTRACKED_NEWOBJECT = "untracked-newobject"
    DEPRECATED_API = "deprecated-api"
    GOD_CLASS = "god-class"


# Basename -> basenames it includes, in directive order.
IncludeGraph = dict[str, list[str]]


@dataclass(frozen=True)
class SourceFile:
    path: Path  # absolute
    relative_path: str  # project-relative, forward slashes
    content: str
    is_header: bool


@dataclass(frozen=True)
class AntiPatternHit:
    category: Category
    severity: Severity
    file: str
    message: str
    suggestion: str
    line: Optional[int] = None
    id: str = ""  # assigned at report assembly, unique per report only

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "category": self.category.value,
            "severity": self.severity.value,
            "file": self.file,
        }
        if self.line is not None:
            data["line"] = self.line
        data["message"] = self.message
        data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class FileChurn:
    file: str
    commits: int
    authors: int
    last_modified: str  # ISO-8601, empty when unknown

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "commits": self.commits,
            "authors": self.authors,
            "lastModified": self.last_modified,
        }


@dataclass(frozen=True)
class ShotgunSurgery:
    commit: str  # short hash
    message: str
    files_changed: int
    date: str  # ISO-8601

    def to_dict(self) -> dict[str, Any]:
        return {
            "commit": self.commit,
            "message": self.message,
            "filesChanged": self.files_changed,
            "date": self.date,
        }


@dataclass(frozen=True)
class ChurnReport:
    churn: list[FileChurn] = field(default_factory=list)
    surgeries: list[ShotgunSurgery] = field(default_factory=list)


@dataclass(frozen=True)
class RefactoringItem:
    file: str
    score: int  # anti_patterns * churn
    churn: int  # never below 1
    anti_patterns: int
    top_category: Category
    top_severity: Severity

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "score": self.score,
            "churn": self.churn,
            "antiPatterns": self.anti_patterns,
            "topCategory": self.top_category.value,
            "topSeverity": self.top_severity.value,
        }


@dataclass(frozen=True)
class ArcheologistAnalysis:
    scanned_at: str
    scan_duration_ms: int
    total_files: int
    total_anti_patterns: int
    by_severity: dict[Severity, int]
    by_category: dict[Category, int]
    anti_patterns: list[AntiPatternHit]
    churn: list[FileChurn]
    shotgun_surgeries: list[ShotgunSurgery]
    refactoring_backlog: list[RefactoringItem]

    def to_dict(self) -> dict[str, Any]:
        return {
            "scannedAt": self.scanned_at,
            "scanDurationMs": self.scan_duration_ms,
            "totalFiles": self.total_files,
            "totalAntiPatterns": self.total_anti_patterns,
            "bySeverity": {s.value: self.by_severity.get(s, 0) for s in Severity},
            "byCategory": {c.value: self.by_category.get(c, 0) for c in Category},
            "antiPatterns": [h.to_dict() for h in self.anti_patterns],
            "churn": [c.to_dict() for c in self.churn],
            "shotgunSurgeries": [s.to_dict() for s in self.shotgun_surgeries],
            "refactoringBacklog": [r.to_dict() for r in self.refactoring_backlog],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
