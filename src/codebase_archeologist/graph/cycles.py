"""Circular include detection over an IncludeGraph."""

from ..models import AntiPatternHit, Category, IncludeGraph, Severity

CYCLE_ARROW = " → "


def find_include_cycles(graph: IncludeGraph, max_chain: int = 6) -> list[list[str]]:
    """Find include cycles with at most ``max_chain`` distinct headers.

    From every node, in graph order, walks simple paths with an explicit
    stack. A cycle is a path that leads back to its start through at least
    one other header. Cycles are deduplicated by their sorted node set, so a
    loop reached from several starting headers is reported once, as first
    found.

    Returns:
        Chains that end where they start, e.g. ``["A.h", "B.h", "A.h"]``.
    """
    seen: set[tuple[str, ...]] = set()
    cycles: list[list[str]] = []

    for start in graph:
        stack: list[list[str]] = [[start]]
        while stack:
            chain = stack.pop()
            branches = []
            for dep in graph.get(chain[-1], []):
                if dep == start:
                    if len(chain) > 1:
                        key = tuple(sorted(set(chain)))
                        if key not in seen:
                            seen.add(key)
                            cycles.append(chain + [start])
                elif dep not in chain and dep in graph and len(chain) < max_chain:
                    branches.append(chain + [dep])
            # Reversed so the first include is explored first.
            stack.extend(reversed(branches))

    return cycles


def circular_include_hits(
    cycles: list[list[str]], basename_to_path: dict[str, str]
) -> list[AntiPatternHit]:
    """One warning per cycle, attributed to the header that starts the chain."""
    return [
        AntiPatternHit(
            category=Category.CIRCULAR_INCLUDE,
            severity=Severity.WARNING,
            file=basename_to_path.get(chain[0], chain[0]),
            message=f"Circular include: {CYCLE_ARROW.join(chain)}",
            suggestion="Break the cycle by using forward declarations or splitting headers",
        )
        for chain in cycles
    ]
