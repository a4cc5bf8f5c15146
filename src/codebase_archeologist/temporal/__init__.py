"""Git history analysis: churn and shotgun surgery."""

from .churn import analyze_git_churn, count_file_commits, parse_shotgun_surgeries, top_churn_files
from .git_extractor import GitRunner

__all__ = [
    "GitRunner",
    "analyze_git_churn",
    "count_file_commits",
    "parse_shotgun_surgeries",
    "top_churn_files",
]
