"""MISSING_GENERATED_BODY: reflected types without their body macro.

Known risks:
- The lookahead window is measured from the macro, so a short type followed
  by another reflected type can borrow the neighbour's GENERATED_BODY()
  (false negative).
- A very long preamble (doc comments, many specifiers) pushes a present macro
  past the window (false positive).
- Commented-out declarations are still matched.
"""

import re

from ..models import AntiPatternHit, Category, Severity
from .base import REFLECTED_TYPE_RE, Detector, line_of

GENERATED_BODY_RE = re.compile(r"GENERATED_(?:U(?:CLASS|STRUCT)_)?BODY\s*\(\s*\)")


class MissingGeneratedBodyDetector(Detector):
    """Flags UCLASS/USTRUCT declarations with no GENERATED_BODY() nearby."""

    name = "missing_generated_body"
    category = Category.MISSING_GENERATED_BODY
    headers_only = True

    def __init__(self, lookahead: int = 2000):
        self.lookahead = lookahead

    def detect(self, content: str, file: str) -> list[AntiPatternHit]:
        hits = []
        for m in REFLECTED_TYPE_RE.finditer(content):
            macro, type_name = m.group(1), m.group(2)
            window = content[m.start():m.start() + self.lookahead]
            if GENERATED_BODY_RE.search(window):
                continue
            hits.append(
                self._hit(
                    Severity.CRITICAL,
                    file,
                    f"{type_name} ({macro}) is missing GENERATED_BODY() macro",
                    "Add GENERATED_BODY() as the first line inside the class body",
                    line=line_of(content, m.start()),
                )
            )
        return hits
