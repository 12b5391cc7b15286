"""🔗 Lineage Graph - Assets, edges and the walks over them.

Tracks:
- Assets (sources, transforms, models, dashboards) and their health
- Source → Target lineage relationships
- Impact analysis (what depends on what)
- Root cause analysis (which broken upstream asset explains an error)
"""

from .model import LineageGraph
from .models import AssetKind, ColumnSchema, DataAsset, HealthStatus, LineageEdge, Position
from .traversal import (
    downstream_closure,
    root_causes,
    upstream_closure,
    upstream_error_closure,
)

__all__ = [
    "AssetKind",
    "ColumnSchema",
    "DataAsset",
    "HealthStatus",
    "LineageEdge",
    "LineageGraph",
    "Position",
    "downstream_closure",
    "root_causes",
    "upstream_closure",
    "upstream_error_closure",
]
