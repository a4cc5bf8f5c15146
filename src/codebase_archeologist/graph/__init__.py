"""Header include graph and cycle detection."""

from .cycles import circular_include_hits, find_include_cycles
from .includes import build_include_graph, header_paths_by_basename, parse_local_includes

__all__ = [
    "build_include_graph",
    "circular_include_hits",
    "find_include_cycles",
    "header_paths_by_basename",
    "parse_local_includes",
]
