"""📥 Ingestion models - Sources, crawl results and sync outcomes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from ..graph import DataAsset, LineageEdge

NO_CHANGES = "No changes detected."


class IntegrationType(str, Enum):
    """Kinds of systems a catalog connector can crawl."""

    # Warehouses
    SNOWFLAKE = "SNOWFLAKE"
    POSTGRES = "POSTGRES"
    BIGQUERY = "BIGQUERY"
    # Transformation / orchestration
    DBT = "DBT"
    AIRFLOW = "AIRFLOW"
    # BI tools
    TABLEAU = "TABLEAU"


class SourceStatus(str, Enum):
    """Connection state of a source."""

    CONNECTED = "CONNECTED"
    SYNCING = "SYNCING"
    ERROR = "ERROR"


class DataSource(BaseModel):
    """A connected catalog source."""

    id: str
    name: str
    type: IntegrationType
    status: SourceStatus = Field(default=SourceStatus.CONNECTED)
    last_sync: datetime | None = Field(default=None)
    last_error: str | None = Field(default=None)


class IngestionResult(BaseModel):
    """Assets and edges discovered by one crawl."""

    nodes: list[DataAsset] = Field(default_factory=list)
    edges: list[LineageEdge] = Field(default_factory=list)
    summary: str = Field(default=NO_CHANGES)

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.edges


class SyncStatus(str, Enum):
    """How a sync request ended."""

    SYNCED = "synced"  # new assets or edges were merged
    UNCHANGED = "unchanged"  # crawl succeeded, nothing new
    REJECTED = "rejected"  # a sync for this source is already running
    FAILED = "failed"  # connector failure or malformed payload


class SyncOutcome(BaseModel):
    """Result of ``IngestionHub.sync``."""

    source_id: str
    status: SyncStatus
    result: IngestionResult | None = None
    added_nodes: list[str] = Field(default_factory=list)
    added_edges: list[str] = Field(default_factory=list)
    dropped_edges: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (SyncStatus.SYNCED, SyncStatus.UNCHANGED)
