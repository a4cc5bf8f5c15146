"""
Codebase Archeologist - engineering debt scanner for Unreal Engine C++ trees

Finds missing reflection boilerplate, untracked object lifetimes, hard-coded
content paths, deprecated API usage, god classes and circular includes, then
ranks files for refactoring by combining those findings with git churn.
"""

__version__ = "0.1.0"

from .api import analyze
from .cancellation import CancellationToken
from .config import ArcheologistConfig, load_config
from .models import (
    AntiPatternHit,
    ArcheologistAnalysis,
    Category,
    FileChurn,
    RefactoringItem,
    Severity,
    ShotgunSurgery,
)
from .pipeline import ScanStage, run_analysis

__all__ = [
    "analyze",  # Sync entry point
    "run_analysis",  # Async entry point
    "ArcheologistAnalysis",
    "ArcheologistConfig",
    "AntiPatternHit",
    "CancellationToken",
    "Category",
    "FileChurn",
    "RefactoringItem",
    "ScanStage",
    "Severity",
    "ShotgunSurgery",
    "load_config",
]
