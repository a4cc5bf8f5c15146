"""Refactoring backlog: static findings weighted by change frequency."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import AntiPatternHit, Category, FileChurn, RefactoringItem, Severity


@dataclass
class _FileTally:
    count: int
    top_category: Category
    top_severity: Severity


def tally_hits(hits: Iterable[AntiPatternHit]) -> dict[str, _FileTally]:
    """Per-file hit count and worst hit, in first-seen file order.

    A later hit replaces the worst only when strictly more severe.
    """
    tallies: dict[str, _FileTally] = {}
    for hit in hits:
        tally = tallies.get(hit.file)
        if tally is None:
            tallies[hit.file] = _FileTally(1, hit.category, hit.severity)
            continue
        tally.count += 1
        if hit.severity.weight > tally.top_severity.weight:
            tally.top_severity = hit.severity
            tally.top_category = hit.category
    return tallies


def synthesize_backlog(
    hits: Iterable[AntiPatternHit],
    churn: Iterable[FileChurn],
    limit: int = 50,
) -> list[RefactoringItem]:
    """Rank files by ``hits x churn``, highest first.

    Files without a churn record count as churn 1 so purely static findings
    still rank by hit count.
    """
    commits_by_file = {c.file: c.commits for c in churn}

    items = []
    for file, tally in tally_hits(hits).items():
        file_churn = commits_by_file.get(file) or 1
        items.append(
            RefactoringItem(
                file=file,
                score=tally.count * file_churn,
                churn=file_churn,
                anti_patterns=tally.count,
                top_category=tally.top_category,
                top_severity=tally.top_severity,
            )
        )

    items.sort(key=lambda item: item.score, reverse=True)
    return items[:limit]
