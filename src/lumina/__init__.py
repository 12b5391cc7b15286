"""🔦 Lumina - Data lineage observability.

Quick Start:
    from lumina import seed_graph, GraphState, reduce
    from lumina.view import ModeSelected, NodeClicked, ViewMode

    state = GraphState.initial(seed_graph())
    state = reduce(state, ModeSelected(ViewMode.ROOT_CAUSE))
    state = reduce(state, NodeClicked("dash_mkt"))
    state.highlighted               # assets on the error path

Traversals:
    from lumina.graph import downstream_closure, upstream_error_closure

    downstream_closure("stg_orders", graph.edges)          # impact
    upstream_error_closure("dash_mkt", graph.nodes, graph.edges)  # root cause

Session (ingestion + assistant):
    from lumina import Workbench

    bench = Workbench.from_settings()
    source = await bench.connect(IntegrationType.DBT)
    await bench.sync(source.id)
"""

from lumina.graph import DataAsset, HealthStatus, LineageEdge, LineageGraph
from lumina.seed import seed_graph
from lumina.view import GraphState, ViewMode, reduce
from lumina.workbench import Workbench

__version__ = "0.3.0"

__all__ = [
    "DataAsset",
    "GraphState",
    "HealthStatus",
    "LineageEdge",
    "LineageGraph",
    "ViewMode",
    "Workbench",
    "reduce",
    "seed_graph",
    "__version__",
]
