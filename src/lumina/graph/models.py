"""📋 Lineage graph models - Assets, columns and lineage edges."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetKind(str, Enum):
    """What kind of data artifact an asset is."""

    SOURCE = "SOURCE"
    TRANSFORM = "TRANSFORM"
    MODEL = "MODEL"
    DASHBOARD = "DASHBOARD"


class HealthStatus(str, Enum):
    """Health of an asset."""

    HEALTHY = "HEALTHY"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ColumnSchema(BaseModel):
    """A column of a tabular asset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Column name")
    type: str = Field(default="varchar", description="Column type")
    is_pii: bool = Field(default=False, alias="isPii")
    description: str = Field(default="")


class Position(BaseModel):
    """Layout coordinate. Owned by the render layer, never read by the engine."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class DataAsset(BaseModel):
    """A node in the lineage graph.

    Assets are immutable; status changes and layout moves produce a copy
    with ``model_copy(update=...)``. Field aliases accept the camelCase
    keys used by catalog payloads (``rowCount``, ``qualityScore``...).

    Example:
        asset = DataAsset(
            id="stg_orders",
            label="STG_CLEAN_ORDERS",
            kind=AssetKind.TRANSFORM,
            status=HealthStatus.HEALTHY,
            owner="Core Data Team",
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Unique, stable asset key")
    label: str = Field(description="Display name")
    kind: AssetKind = Field(alias="type")
    status: HealthStatus = Field(default=HealthStatus.HEALTHY)

    owner: str = Field(default="")
    description: str = Field(default="")
    freshness: str = Field(default="")
    last_updated: str | None = Field(default=None, alias="lastUpdated")
    row_count: int | None = Field(default=None, ge=0, alias="rowCount")
    quality_score: int = Field(default=100, ge=0, le=100, alias="qualityScore")
    tags: tuple[str, ...] = Field(default=())
    columns: tuple[ColumnSchema, ...] = Field(default=(), alias="schema")

    position: Position = Field(default_factory=Position)

    @field_validator("tags", mode="before")
    @classmethod
    def dedupe_tags(cls, v: object) -> object:
        """Tags behave as a set; keep first-seen order for display."""
        if isinstance(v, (list, tuple, set, frozenset)):
            return tuple(dict.fromkeys(v))
        return v

    @property
    def is_healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY

    def with_status(self, status: HealthStatus) -> "DataAsset":
        """Return a copy of this asset with another health status."""
        if status is self.status:
            return self
        return self.model_copy(update={"status": status})

    def pii_columns(self) -> list[ColumnSchema]:
        """Get columns marked as PII."""
        return [col for col in self.columns if col.is_pii]


class LineageEdge(BaseModel):
    """Data flows from ``source`` to ``target``."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    source: str
    target: str

    def touches(self, node_id: str) -> bool:
        """Check if either endpoint is ``node_id``."""
        return self.source == node_id or self.target == node_id
