"""📥 Ingestion - Discover lineage from external catalogs and merge it in.

Flow:
1. ``IngestionHub.connect`` registers a source through a ``ConnectorPort``
2. ``IngestionHub.sync`` crawls it and validates the payload
3. ``merge_ingestion_result`` folds new assets/edges into the graph
"""

from .connectors import ConnectorPort, MockConnector
from .hub import IngestionHub, parse_payload
from .merge import MergeReport, merge_ingestion_result
from .models import (
    DataSource,
    IngestionResult,
    IntegrationType,
    SourceStatus,
    SyncOutcome,
    SyncStatus,
)

__all__ = [
    "ConnectorPort",
    "DataSource",
    "IngestionHub",
    "IngestionResult",
    "IntegrationType",
    "MergeReport",
    "MockConnector",
    "SourceStatus",
    "SyncOutcome",
    "SyncStatus",
    "merge_ingestion_result",
    "parse_payload",
]
