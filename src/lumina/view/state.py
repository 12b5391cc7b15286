"""🎛️ View State - The graph, the active mode and the selection as one value.

UI events are folded into a ``GraphState`` by the pure ``reduce`` function:

    state = GraphState.initial(seed_graph())
    state = reduce(state, ModeSelected(ViewMode.ROOT_CAUSE))
    state = reduce(state, NodeClicked("dash_mkt"))
    state.highlighted    # frozenset({'dash_mkt', 'fct_attribution', 'stg_events'})

Rules:
- every mode change clears the selection and all highlighting
- a click on an unknown id is ignored
- pane clicks and resets clear the selection but keep the mode
- after any topology, status or time travel change the highlight is
  recomputed against the new view
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import cached_property

from ..graph import (
    DataAsset,
    HealthStatus,
    LineageEdge,
    LineageGraph,
    downstream_closure,
    upstream_error_closure,
)
from ..ingestion.merge import MergeReport, merge_ingestion_result
from ..timetravel import TimeTravelProjector
from .annotations import RenderAnnotation, ViewMode, annotate_edges, annotate_nodes


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class ModeSelected:
    mode: ViewMode


@dataclass(frozen=True)
class NodeClicked:
    node_id: str


@dataclass(frozen=True)
class PaneClicked:
    """Click on the empty canvas."""


@dataclass(frozen=True)
class ViewReset:
    """Explicit reset action (e.g. closing the details panel)."""


@dataclass(frozen=True)
class TimeTravelChanged:
    days_ago: int


@dataclass(frozen=True)
class IngestionMerged:
    nodes: tuple[DataAsset, ...] = ()
    edges: tuple[LineageEdge, ...] = ()


@dataclass(frozen=True)
class NodeDeleted:
    node_id: str


@dataclass(frozen=True)
class NodeStatusChanged:
    node_id: str
    status: HealthStatus


Event = (
    ModeSelected
    | NodeClicked
    | PaneClicked
    | ViewReset
    | TimeTravelChanged
    | IngestionMerged
    | NodeDeleted
    | NodeStatusChanged
)


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class GraphState:
    """Everything the renderer needs, as an immutable value.

    Attributes:
        live: Graph with current (present-day) statuses
        mode: Active view mode
        selected_id: Selected asset, if any
        closure: Highlighted asset ids, ``None`` when nothing is highlighted
        days_ago: Time travel offset
        generation: Bumped on every selection or mode change
        last_merge: Report of the most recent ingestion merge
    """

    live: LineageGraph
    mode: ViewMode = ViewMode.STANDARD
    selected_id: str | None = None
    closure: frozenset[str] | None = None
    days_ago: int = 0
    generation: int = 0
    projector: TimeTravelProjector = field(
        default_factory=TimeTravelProjector, compare=False, repr=False
    )
    last_merge: MergeReport | None = field(default=None, compare=False, repr=False)

    @classmethod
    def initial(
        cls, graph: LineageGraph, projector: TimeTravelProjector | None = None
    ) -> GraphState:
        return cls(live=graph, projector=projector or TimeTravelProjector())

    @cached_property
    def view(self) -> LineageGraph:
        """The graph at the current time travel offset."""
        return self.projector.project(self.live, self.days_ago)

    @property
    def selected(self) -> DataAsset | None:
        if self.selected_id is None:
            return None
        return self.view.get(self.selected_id)

    @property
    def highlighted(self) -> frozenset[str]:
        return self.closure if self.closure is not None else frozenset()

    def node_annotations(self) -> dict[str, RenderAnnotation]:
        return annotate_nodes(self.view, self.closure)

    def edge_annotations(self) -> dict[str, RenderAnnotation]:
        return annotate_edges(self.view, self.mode, self.closure)


def compute_closure(
    mode: ViewMode, node_id: str, graph: LineageGraph
) -> frozenset[str] | None:
    """Highlight set for a click in ``mode``. STANDARD highlights nothing."""
    if mode is ViewMode.IMPACT_ANALYSIS:
        return downstream_closure(node_id, graph.edges)
    if mode is ViewMode.ROOT_CAUSE:
        return upstream_error_closure(node_id, graph.nodes, graph.edges)
    return None


def _clear_selection(state: GraphState) -> GraphState:
    if state.selected_id is None and state.closure is None:
        return state
    return replace(
        state, selected_id=None, closure=None, generation=state.generation + 1
    )


def _refresh(state: GraphState) -> GraphState:
    """Recompute the highlight of the current selection against the view."""
    if state.selected_id is None:
        return state
    if state.selected_id not in state.view:
        return _clear_selection(state)
    closure = compute_closure(state.mode, state.selected_id, state.view)
    if closure == state.closure:
        return state
    return replace(state, closure=closure)


def reduce(state: GraphState, event: Event) -> GraphState:
    """Apply one UI event and return the next state."""
    if isinstance(event, ModeSelected):
        return replace(
            state,
            mode=event.mode,
            selected_id=None,
            closure=None,
            generation=state.generation + 1,
        )

    if isinstance(event, NodeClicked):
        if event.node_id not in state.view:
            return state
        return replace(
            state,
            selected_id=event.node_id,
            closure=compute_closure(state.mode, event.node_id, state.view),
            generation=state.generation + 1,
        )

    if isinstance(event, (PaneClicked, ViewReset)):
        return _clear_selection(state)

    if isinstance(event, TimeTravelChanged):
        days_ago = state.projector.clamp(event.days_ago)
        if days_ago == state.days_ago:
            return state
        return _refresh(replace(state, days_ago=days_ago))

    if isinstance(event, IngestionMerged):
        report = merge_ingestion_result(state.live, event.nodes, event.edges)
        if report.graph is state.live:
            return replace(state, last_merge=report)
        return _refresh(replace(state, live=report.graph, last_merge=report))

    if isinstance(event, NodeDeleted):
        live = state.live.remove_node(event.node_id)
        if live is state.live:
            return state
        return _refresh(replace(state, live=live))

    if isinstance(event, NodeStatusChanged):
        live = state.live.update_node_status(event.node_id, event.status)
        if live is state.live:
            return state
        return _refresh(replace(state, live=live))

    raise TypeError(f"Unknown event: {event!r}")
