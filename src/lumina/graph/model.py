"""🔗 Lineage Graph - Immutable snapshot of assets and lineage edges.

Every mutator returns a new ``LineageGraph``; a snapshot handed to the
traversal engine or a renderer never changes underneath it.

Invariants:
- asset ids are unique (first writer wins, later duplicates are skipped)
- edge ids are unique
- every edge's endpoints exist (dangling edges are dropped on add)
- removing an asset removes every edge incident to it
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .models import DataAsset, HealthStatus, LineageEdge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineageGraph:
    """A (nodes, edges) snapshot.

    Example:
        graph = LineageGraph().add_nodes([raw, stg]).add_edges([edge])
        graph = graph.update_node_status("stg", HealthStatus.ERROR)
        graph = graph.remove_node("raw")    # also drops ``edge``
    """

    nodes: tuple[DataAsset, ...] = ()
    edges: tuple[LineageEdge, ...] = ()
    _index: dict[str, DataAsset] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "_index", {n.id: n for n in self.nodes})

    @classmethod
    def build(
        cls, nodes: Iterable[DataAsset], edges: Iterable[LineageEdge] = ()
    ) -> LineageGraph:
        """Build a graph enforcing the invariants on raw node and edge lists."""
        return cls().add_nodes(nodes).add_edges(edges)

    # =========================================================================
    # Lookups
    # =========================================================================

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[DataAsset]:
        return iter(self.nodes)

    def get(self, node_id: str) -> DataAsset | None:
        """Get an asset by id."""
        return self._index.get(node_id)

    @property
    def node_ids(self) -> frozenset[str]:
        return frozenset(self._index)

    @property
    def edge_ids(self) -> frozenset[str]:
        return frozenset(e.id for e in self.edges)

    def status_map(self) -> dict[str, HealthStatus]:
        """Map asset id to its current status."""
        return {n.id: n.status for n in self.nodes}

    def successors(self, node_id: str) -> list[str]:
        """Direct downstream neighbours, in edge order."""
        return [e.target for e in self.edges if e.source == node_id]

    def predecessors(self, node_id: str) -> list[str]:
        """Direct upstream neighbours, in edge order."""
        return [e.source for e in self.edges if e.target == node_id]

    # =========================================================================
    # Mutators (return new snapshots)
    # =========================================================================

    def add_nodes(self, batch: Iterable[DataAsset]) -> LineageGraph:
        """Add assets whose id is not present yet.

        Duplicates, against the graph or within the batch, are skipped
        without merging any of their fields.
        """
        seen = set(self._index)
        fresh = []
        for node in batch:
            if node.id in seen:
                continue
            seen.add(node.id)
            fresh.append(node)

        if not fresh:
            return self
        return LineageGraph(self.nodes + tuple(fresh), self.edges)

    def add_edges(self, batch: Iterable[LineageEdge]) -> LineageGraph:
        """Add edges whose id is new and whose endpoints both exist."""
        seen = set(self.edge_ids)
        fresh = []
        for edge in batch:
            if edge.id in seen:
                continue
            if edge.source not in self._index or edge.target not in self._index:
                logger.debug(
                    "Dropping dangling edge %s (%s -> %s)",
                    edge.id,
                    edge.source,
                    edge.target,
                )
                continue
            seen.add(edge.id)
            fresh.append(edge)

        if not fresh:
            return self
        return LineageGraph(self.nodes, self.edges + tuple(fresh))

    def remove_node(self, node_id: str) -> LineageGraph:
        """Remove an asset and every edge touching it. Unknown ids are a no-op."""
        if node_id not in self._index:
            return self
        return LineageGraph(
            tuple(n for n in self.nodes if n.id != node_id),
            tuple(e for e in self.edges if not e.touches(node_id)),
        )

    def update_node_status(self, node_id: str, status: HealthStatus) -> LineageGraph:
        """Set the status of one asset. Unknown ids are a no-op."""
        node = self._index.get(node_id)
        if node is None or node.status is status:
            return self
        updated = node.with_status(status)
        return LineageGraph(
            tuple(updated if n.id == node_id else n for n in self.nodes),
            self.edges,
        )

    def with_statuses(self, statuses: dict[str, HealthStatus]) -> LineageGraph:
        """Apply several status changes at once, ignoring unknown ids."""
        if not any(
            node_id in self._index and self._index[node_id].status is not status
            for node_id, status in statuses.items()
        ):
            return self
        return LineageGraph(
            tuple(
                n.with_status(statuses[n.id]) if n.id in statuses else n
                for n in self.nodes
            ),
            self.edges,
        )
