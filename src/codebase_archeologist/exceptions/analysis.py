"""Analysis-related exceptions: file access, git queries, cancellation."""

from pathlib import Path
from typing import Optional, Sequence

from .base import ArcheologistError


class AnalysisError(ArcheologistError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class GitCommandError(AnalysisError):
    """Raised when a git subprocess fails, times out or cannot be started."""

    def __init__(self, args: Sequence[str], reason: str, returncode: Optional[int] = None):
        details = {"command": " ".join(args), "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)

        super().__init__(f"git command failed: {' '.join(args)}", details=details)
        self.command = list(args)
        self.reason = reason
        self.returncode = returncode


class ScanCancelledError(AnalysisError):
    """Raised when a scan is aborted through its cancellation token."""

    def __init__(self, stage: str):
        super().__init__(f"Scan cancelled during {stage}", details={"stage": stage})
        self.stage = stage
