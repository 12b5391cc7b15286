"""🚨 Incidents - Active problems derived from the graph.

Every non-healthy asset is an incident. Each one carries its root causes
(where the error path starts) and its blast radius (how many assets
downstream depend on it).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .graph import HealthStatus, LineageGraph, downstream_closure, root_causes


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"


_SEVERITY = {HealthStatus.ERROR: Severity.CRITICAL, HealthStatus.WARNING: Severity.WARNING}
_ORDER = {Severity.CRITICAL: 0, Severity.WARNING: 1}


@dataclass(frozen=True)
class Incident:
    """One unhealthy asset."""

    node_id: str
    label: str
    severity: Severity
    owner: str
    root_causes: tuple[str, ...]
    impacted: int  # downstream assets, excluding the asset itself

    @property
    def is_origin(self) -> bool:
        """True when the asset is its own root cause."""
        return self.root_causes == (self.node_id,)


def active_incidents(graph: LineageGraph) -> list[Incident]:
    """List incidents, most severe first, then by asset id."""
    incidents = []
    for node in graph.nodes:
        severity = _SEVERITY.get(node.status)
        if severity is None:
            continue
        incidents.append(
            Incident(
                node_id=node.id,
                label=node.label,
                severity=severity,
                owner=node.owner,
                root_causes=tuple(sorted(root_causes(node.id, graph.nodes, graph.edges))),
                impacted=len(downstream_closure(node.id, graph.edges)) - 1,
            )
        )
    return sorted(incidents, key=lambda i: (_ORDER[i.severity], i.node_id))
