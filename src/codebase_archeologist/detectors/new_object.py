"""UNTRACKED_NEWOBJECT: NewObject<T> results the GC may not see.

The rule looks for a UPROPERTY marker in the few lines before the call. It
cannot tell which variable receives the object.

Known risks:
- Members declared in the header and assigned in the .cpp are always flagged
  (false positive); so are locals that are intentionally transient or added
  to the root set.
- Any unrelated UPROPERTY in the window suppresses the hit (false negative).
"""

import re

from ..models import AntiPatternHit, Category, Severity
from .base import Detector, line_of

NEW_OBJECT_RE = re.compile(r"NewObject\s*<\s*(\w+)\s*>")

# Characters scanned backwards before the context is cut to whole lines.
_CONTEXT_CHARS = 500


class UntrackedNewObjectDetector(Detector):
    """Flags NewObject calls with no UPROPERTY in the preceding lines."""

    name = "untracked_newobject"
    category = Category.UNTRACKED_NEWOBJECT

    def __init__(self, context_lines: int = 5):
        self.context_lines = context_lines

    def detect(self, content: str, file: str) -> list[AntiPatternHit]:
        hits = []
        for m in NEW_OBJECT_RE.finditer(content):
            preceding = content[max(0, m.start() - _CONTEXT_CHARS):m.start()]
            context = preceding.split("\n")[-self.context_lines:]
            if any("UPROPERTY" in line for line in context):
                continue
            hits.append(
                self._hit(
                    Severity.WARNING,
                    file,
                    f"NewObject<{m.group(1)}> may not be tracked by GC (no nearby UPROPERTY)",
                    "Ensure the result is stored in a UPROPERTY() member or added to root set",
                    line=line_of(content, m.start()),
                )
            )
        return hits
