"""🔀 Ingestion merge - Fold discovered assets into the live graph.

Merging is identity based and idempotent: re-ingesting the same (or an
overlapping) batch never duplicates an asset or an edge, and never
overwrites fields of an asset that already exists.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..graph import DataAsset, LineageEdge, LineageGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeReport:
    """What a merge changed."""

    graph: LineageGraph
    added_nodes: tuple[str, ...] = ()
    added_edges: tuple[str, ...] = ()
    dropped_edges: tuple[str, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return bool(self.added_nodes or self.added_edges)


def merge_ingestion_result(
    graph: LineageGraph,
    new_nodes: Iterable[DataAsset],
    new_edges: Iterable[LineageEdge],
) -> MergeReport:
    """Merge newly discovered assets and edges into ``graph``.

    Nodes are added first so edges of the same batch can reference them.
    Edges whose id already exists are skipped; edges with a missing
    endpoint are dropped and listed in ``dropped_edges``.

    Args:
        graph: Current live graph
        new_nodes: Discovered assets
        new_edges: Discovered lineage edges

    Returns:
        MergeReport with the merged graph
    """
    new_edges = list(new_edges)

    merged = graph.add_nodes(new_nodes)
    merged = merged.add_edges(new_edges)

    added_nodes = tuple(n.id for n in merged.nodes[len(graph.nodes) :])
    added_edges = tuple(e.id for e in merged.edges[len(graph.edges) :])
    known_edges = graph.edge_ids | set(added_edges)
    dropped = tuple(
        dict.fromkeys(
            e.id
            for e in new_edges
            if e.id not in known_edges
            and (e.source not in merged or e.target not in merged)
        )
    )

    if added_nodes or added_edges:
        logger.info(
            "Merged %d asset(s) and %d edge(s) into the lineage graph",
            len(added_nodes),
            len(added_edges),
        )
    if dropped:
        logger.debug("Dropped %d dangling edge(s): %s", len(dropped), ", ".join(dropped))

    return MergeReport(
        graph=merged,
        added_nodes=added_nodes,
        added_edges=added_edges,
        dropped_edges=dropped,
    )
