"""🧭 Traversal - Impact and root cause walks over a graph snapshot.

All functions are breadth-first, pure and deterministic. A visited set
guarantees termination on cyclic graphs.
"""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterable

from .models import DataAsset, HealthStatus, LineageEdge


def _adjacency(edges: Iterable[LineageEdge], reverse: bool = False) -> dict[str, list[str]]:
    adjacency: dict[str, list[str]] = defaultdict(list)
    for edge in edges:
        if reverse:
            adjacency[edge.target].append(edge.source)
        else:
            adjacency[edge.source].append(edge.target)
    return adjacency


def downstream_closure(start_id: str, edges: Iterable[LineageEdge]) -> frozenset[str]:
    """Everything reachable from ``start_id`` following data flow, start included.

    Args:
        start_id: Asset to start from
        edges: Lineage edges of the snapshot

    Returns:
        Set of reachable asset ids
    """
    successors = _adjacency(edges)
    visited: set[str] = set()
    queue = deque([start_id])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        queue.extend(t for t in successors.get(current, ()) if t not in visited)

    return frozenset(visited)


def upstream_closure(start_id: str, edges: Iterable[LineageEdge]) -> frozenset[str]:
    """Every ancestor of ``start_id``, start included."""
    predecessors = _adjacency(edges, reverse=True)
    visited: set[str] = set()
    queue = deque([start_id])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        queue.extend(s for s in predecessors.get(current, ()) if s not in visited)

    return frozenset(visited)


def upstream_error_closure(
    start_id: str,
    nodes: Iterable[DataAsset],
    edges: Iterable[LineageEdge],
) -> frozenset[str]:
    """Walk upstream from ``start_id`` through non-healthy assets only.

    A healthy asset is a firewall: it is not part of the result and its own
    predecessors are not explored through it. A healthy start therefore
    yields the empty set. Ids without a known status count as not healthy.

    Args:
        start_id: Broken asset to trace from
        nodes: Assets of the snapshot (for their status)
        edges: Lineage edges of the snapshot

    Returns:
        Set of asset ids on the error path
    """
    status = {n.id: n.status for n in nodes}
    predecessors = _adjacency(edges, reverse=True)
    visited: set[str] = set()
    error_path: set[str] = set()
    queue = deque([start_id])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)

        if status.get(current) is HealthStatus.HEALTHY:
            continue

        error_path.add(current)
        queue.extend(s for s in predecessors.get(current, ()) if s not in visited)

    return frozenset(error_path)


def root_causes(
    start_id: str,
    nodes: Iterable[DataAsset],
    edges: Iterable[LineageEdge],
) -> frozenset[str]:
    """Origins of the error path leading to ``start_id``.

    These are the members of the upstream error closure that have no
    predecessor inside the closure. On a cycle made only of broken assets
    every member has one, so the whole closure is returned.
    """
    edges = list(edges)
    closure = upstream_error_closure(start_id, nodes, edges)
    if not closure:
        return closure

    fed_by_error = {
        e.target for e in edges if e.source in closure and e.target in closure
    }
    origins = closure - fed_by_error
    return origins or closure
