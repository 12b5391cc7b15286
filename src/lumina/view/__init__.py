"""🎛️ View - Mode state machine and render annotations."""

from .annotations import (
    NEUTRAL,
    NEUTRAL_STROKE,
    RenderAnnotation,
    ViewMode,
    annotate_edges,
    annotate_nodes,
)
from .state import (
    GraphState,
    IngestionMerged,
    ModeSelected,
    NodeClicked,
    NodeDeleted,
    NodeStatusChanged,
    PaneClicked,
    TimeTravelChanged,
    ViewReset,
    compute_closure,
    reduce,
)

__all__ = [
    "GraphState",
    "IngestionMerged",
    "ModeSelected",
    "NEUTRAL",
    "NEUTRAL_STROKE",
    "NodeClicked",
    "NodeDeleted",
    "NodeStatusChanged",
    "PaneClicked",
    "RenderAnnotation",
    "TimeTravelChanged",
    "ViewMode",
    "ViewReset",
    "annotate_edges",
    "annotate_nodes",
    "compute_closure",
    "reduce",
]
