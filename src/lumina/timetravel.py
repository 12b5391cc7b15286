"""⏪ Time Travel - Project the graph as it looked N days ago.

There is no historical store: the past is simulated with a deterministic
override table. Each override says "before ``after_days`` days ago, this
asset was ``status``". Projection is pure, so sliding back to a lower
offset gives back exactly the statuses of that offset.

Example YAML:
    max_days: 5
    overrides:
      - node_id: fct_attribution
        after_days: 1
      - node_id: dash_mkt
        after_days: 2
        status: HEALTHY
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from .errors import InvalidConfigError
from .graph import HealthStatus, LineageGraph


class StatusOverride(BaseModel):
    """Status shown for an asset once the offset exceeds ``after_days``."""

    node_id: str = Field(description="Asset id")
    after_days: int = Field(ge=0, description="Applies when days_ago > after_days")
    status: HealthStatus = Field(default=HealthStatus.HEALTHY)

    def applies(self, days_ago: int) -> bool:
        return days_ago > self.after_days


DEFAULT_OVERRIDES: tuple[StatusOverride, ...] = (
    # Attribution broke 2 days ago, the marketing dashboard 3 days ago
    StatusOverride(node_id="fct_attribution", after_days=1),
    StatusOverride(node_id="dash_mkt", after_days=2),
)


class TimeTravelProjector(BaseModel):
    """Deterministic status overlay keyed by "days ago"."""

    overrides: list[StatusOverride] = Field(
        default_factory=lambda: list(DEFAULT_OVERRIDES)
    )
    max_days: int = Field(default=5, ge=0)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "TimeTravelProjector":
        """Load the override table from a YAML file.

        Raises:
            InvalidConfigError: If the file does not hold a mapping
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data, dict):
            data = data.get("time_travel", data)
        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Expected a mapping in {path}, got {type(data).__name__}"
            )
        return cls(**data)

    @classmethod
    def from_settings(cls) -> "TimeTravelProjector":
        """Build the projector from environment settings."""
        from .config import get_settings

        settings = get_settings()
        if settings.time_travel_overrides is not None:
            projector = cls.from_yaml(settings.time_travel_overrides)
            return projector.model_copy(update={"max_days": settings.time_travel_max_days})
        return cls(max_days=settings.time_travel_max_days)

    def clamp(self, days_ago: int) -> int:
        """Keep an offset inside ``[0, max_days]``."""
        return max(0, min(int(days_ago), self.max_days))

    def statuses_at(self, days_ago: int) -> dict[str, HealthStatus]:
        """Overrides active at an offset. Later rows win for the same asset."""
        days_ago = self.clamp(days_ago)
        if days_ago == 0:
            return {}
        return {o.node_id: o.status for o in self.overrides if o.applies(days_ago)}

    def project(self, graph: LineageGraph, days_ago: int) -> LineageGraph:
        """Materialize the graph as seen ``days_ago`` days back.

        Args:
            graph: Live graph (never modified)
            days_ago: Offset, clamped to ``[0, max_days]``

        Returns:
            The live graph itself for offset 0, otherwise a copy with the
            active overrides applied
        """
        active = self.statuses_at(days_ago)
        if not active:
            return graph
        return graph.with_statuses(active)

    def label(self, days_ago: int) -> str:
        """Slider caption: ``Now`` or ``3d ago``."""
        days_ago = self.clamp(days_ago)
        return "Now" if days_ago == 0 else f"{days_ago}d ago"
