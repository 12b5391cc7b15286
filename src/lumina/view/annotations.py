"""🎨 Render annotations - Per node/edge styling derived from the view mode.

Annotations are recomputed from (mode, closure) every time instead of being
patched onto previous styles, so a reset can never leave stale highlights.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..graph import LineageGraph

NEUTRAL_STROKE = "#64748b"  # slate
IMPACT_STROKE = "#3b82f6"  # blue
ROOT_CAUSE_STROKE = "#ef4444"  # red

DIMMED_OPACITY = 0.2
FADED_OPACITY = 0.1
HIGHLIGHT_WIDTH = 2.0


class ViewMode(str, Enum):
    """How a node click affects highlighting."""

    STANDARD = "STANDARD"
    IMPACT_ANALYSIS = "IMPACT_ANALYSIS"  # highlight downstream
    ROOT_CAUSE = "ROOT_CAUSE"  # highlight upstream errors

    @property
    def highlight_color(self) -> str:
        if self is ViewMode.IMPACT_ANALYSIS:
            return IMPACT_STROKE
        if self is ViewMode.ROOT_CAUSE:
            return ROOT_CAUSE_STROKE
        return NEUTRAL_STROKE


@dataclass(frozen=True)
class RenderAnnotation:
    """Visual state of one node or edge."""

    opacity: float = 1.0
    stroke_color: str = NEUTRAL_STROKE
    stroke_width: float = 1.0


NEUTRAL = RenderAnnotation()


def annotate_nodes(
    graph: LineageGraph, closure: frozenset[str] | None
) -> dict[str, RenderAnnotation]:
    """Dim every node outside the closure. No closure means all neutral."""
    if closure is None:
        return {n.id: NEUTRAL for n in graph.nodes}

    dimmed = RenderAnnotation(opacity=DIMMED_OPACITY)
    return {n.id: NEUTRAL if n.id in closure else dimmed for n in graph.nodes}


def annotate_edges(
    graph: LineageGraph, mode: ViewMode, closure: frozenset[str] | None
) -> dict[str, RenderAnnotation]:
    """Highlight edges inside the closure in the mode's color, fade the rest."""
    if closure is None:
        return {e.id: NEUTRAL for e in graph.edges}

    on_path = RenderAnnotation(
        stroke_color=mode.highlight_color, stroke_width=HIGHLIGHT_WIDTH
    )
    faded = RenderAnnotation(opacity=FADED_OPACITY)
    return {
        e.id: on_path if e.source in closure and e.target in closure else faded
        for e in graph.edges
    }
