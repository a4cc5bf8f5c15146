"""GOD_CLASS: reflected types that are too long or have too many methods.

Known risks:
- Braces inside string literals, character literals or comments skew the
  depth count, so the measured body can end early or run to end of file.
- The method pattern needs a return type, so constructors, operators and
  multi-line signatures are not counted (false negative); macro calls such
  as ``DECLARE_DELEGATE(...)`` after a type-like word can be counted.
- Only UCLASS/USTRUCT types are measured; plain C++ classes are ignored.
"""

import re
from typing import Optional

from ..models import AntiPatternHit, Category, Severity
from .base import REFLECTED_TYPE_RE, Detector, line_of

METHOD_RE = re.compile(r"\b\w+\s+\w+\s*\([^)]*\)\s*(?:const\s*)?(?:override\s*)?[;{]")


def match_brace_body(content: str, open_index: int) -> Optional[str]:
    """Text from the brace at ``open_index`` up to its matching close brace.

    Returns None when the braces never balance.
    """
    depth = 0
    for i in range(open_index, len(content)):
        ch = content[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return content[open_index:i]
    return None


class GodClassDetector(Detector):
    """Measures each reflected type's body by depth-counted brace matching."""

    name = "god_class"
    category = Category.GOD_CLASS
    headers_only = True

    def __init__(self, max_lines: int = 1000, max_methods: int = 20):
        self.max_lines = max_lines
        self.max_methods = max_methods

    def detect(self, content: str, file: str) -> list[AntiPatternHit]:
        hits = []
        for m in REFLECTED_TYPE_RE.finditer(content):
            type_name = m.group(2)
            open_index = content.find("{", m.start())
            if open_index == -1:
                continue
            body = match_brace_body(content, open_index)
            if body is None:
                continue

            line_count = body.count("\n") + 1
            method_count = len(METHOD_RE.findall(body))
            line = line_of(content, m.start())

            if line_count > self.max_lines:
                hits.append(
                    self._hit(
                        Severity.CRITICAL,
                        file,
                        f"{type_name} has {line_count} lines: god class",
                        "Split into smaller focused classes using composition",
                        line=line,
                    )
                )
            elif method_count > self.max_methods:
                hits.append(
                    self._hit(
                        Severity.WARNING,
                        file,
                        f"{type_name} has {method_count} methods: approaching god class",
                        "Consider extracting related methods into helper/component classes",
                        line=line,
                    )
                )
        return hits
