"""Shared detector plumbing.

Detectors are regex heuristics over raw source text, not a C++ parser. Each
one trades precision for needing no compiler or build system; the known
false-positive and false-negative risks are listed in each module.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional

from ..models import AntiPatternHit, Category, Severity

# UCLASS(...)/USTRUCT(...) followed by the class or struct it tags, with an
# optional MODULE_API export macro. Macro arguments containing ')' (nested
# meta specifiers) end the match early and hide the declaration.
REFLECTED_TYPE_RE = re.compile(
    r"\b(UCLASS|USTRUCT)\s*\([^)]*\)\s*(?:class|struct)\s+(?:\w+_API\s+)?(\w+)"
)


def line_of(content: str, index: int) -> int:
    """1-based line number of a character offset."""
    return content.count("\n", 0, index) + 1


class Detector(ABC):
    """A stateless rule mapping one file's text to zero or more hits."""

    name: str = ""
    category: Category
    headers_only: bool = False

    @abstractmethod
    def detect(self, content: str, file: str) -> list[AntiPatternHit]:
        """Scan ``content`` of the project-relative ``file``."""

    def _hit(
        self,
        severity: Severity,
        file: str,
        message: str,
        suggestion: str,
        line: Optional[int] = None,
    ) -> AntiPatternHit:
        return AntiPatternHit(
            category=self.category,
            severity=severity,
            file=file,
            message=message,
            suggestion=suggestion,
            line=line,
        )
