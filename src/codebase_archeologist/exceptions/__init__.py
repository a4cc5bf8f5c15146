"""Exception hierarchy for Codebase Archeologist."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    GitCommandError,
    ScanCancelledError,
)
from .base import ArcheologistError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "ArcheologistError",
    "AnalysisError",
    "FileAccessError",
    "GitCommandError",
    "ScanCancelledError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
