"""Include graph construction from header text.

Nodes are header basenames, not paths. Two headers with the same name in
different directories collapse into one node (the later header's edges win),
which can invent or hide cycles. The collision is logged, not resolved.
"""

import re
from collections.abc import Iterable
from pathlib import PurePosixPath

from ..logging_config import get_logger
from ..models import IncludeGraph, SourceFile

logger = get_logger(__name__)

# Quoted (project-local) includes only; <...> system includes are ignored.
# Directives inside /* */ block comments still match.
LOCAL_INCLUDE_RE = re.compile(r'^[ \t]*#[ \t]*include[ \t]+"([^"]+)"', re.MULTILINE)


def include_basename(target: str) -> str:
    return PurePosixPath(target.replace("\\", "/")).name


def parse_local_includes(content: str) -> list[str]:
    """Basenames of quoted includes in directive order."""
    return [include_basename(m.group(1)) for m in LOCAL_INCLUDE_RE.finditer(content)]


def build_include_graph(headers: Iterable[SourceFile]) -> IncludeGraph:
    """Map each header basename to the basenames it includes."""
    graph: IncludeGraph = {}
    for header in headers:
        key = header.path.name
        if key in graph:
            logger.debug(f"Header name collision on {key}; keeping edges of {header.relative_path}")
        graph[key] = parse_local_includes(header.content)
    return graph


def header_paths_by_basename(headers: Iterable[SourceFile]) -> dict[str, str]:
    """Basename -> project-relative path, last header wins like the graph."""
    return {h.path.name: h.relative_path for h in headers}
