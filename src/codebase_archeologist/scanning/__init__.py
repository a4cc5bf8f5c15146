"""Source tree collection and reading."""

from .collector import collect_source_files
from .reader import read_source_files, relative_posix

__all__ = ["collect_source_files", "read_source_files", "relative_posix"]
