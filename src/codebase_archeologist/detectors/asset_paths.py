"""HARD_CODED_ASSET_PATH: content paths baked into string literals.

Known risks:
- Only the ``/Game/`` mount point is recognised; plugin content mounts
  (``/MyPlugin/...``) are missed.
- Paths in comments, log messages and editor-only code are flagged too.
"""

import re

from ..models import AntiPatternHit, Category, Severity
from .base import Detector, line_of

ASSET_PATH_RE = re.compile(r"""(?:TEXT\s*\(\s*)?["']/Game/[^"']+["']\)?""")

_MAX_SHOWN = 60


class HardCodedAssetPathDetector(Detector):
    """Flags literals that reference /Game/ content directly."""

    name = "hard_coded_asset_path"
    category = Category.HARD_CODED_ASSET_PATH

    def detect(self, content: str, file: str) -> list[AntiPatternHit]:
        hits = []
        for m in ASSET_PATH_RE.finditer(content):
            literal = m.group(0)
            shown = literal[:_MAX_SHOWN] + ("..." if len(literal) > _MAX_SHOWN else "")
            hits.append(
                self._hit(
                    Severity.WARNING,
                    file,
                    f"Hard-coded asset path: {shown}",
                    "Use FSoftObjectPath or TSoftObjectPtr<> for runtime-resolvable references",
                    line=line_of(content, m.start()),
                )
            )
        return hits
