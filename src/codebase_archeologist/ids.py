"""Per-scan hit id assignment."""

import itertools
from dataclasses import replace

from .models import AntiPatternHit


class HitIdGenerator:
    """Issues ``ap-1``, ``ap-2``, ... for one report.

    Each scan builds its own generator, so concurrent scans never share a
    counter and ids are only unique within a single report.
    """

    def __init__(self, prefix: str = "ap") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"

    def assign(self, hits: list[AntiPatternHit]) -> list[AntiPatternHit]:
        """Return copies of ``hits`` numbered in list order."""
        return [replace(hit, id=self.next_id()) for hit in hits]
