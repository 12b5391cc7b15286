"""🧾 Assistant context - The reduced graph view sent to the language model."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

from ..graph import DataAsset, LineageEdge

SYSTEM_PROMPT_TEMPLATE = """\
You are an expert Data Observability Assistant for a platform called "Lumina".
Your role is to help Data Engineers and Auditors understand the data lineage graph.

Context:
- You are provided with a JSON representation of a Directed Acyclic Graph (DAG) of data assets.
- Nodes represent tables, streams, models, or dashboards.
- Edges represent data flow.
- Status can be HEALTHY, WARNING, or ERROR.

Tasks:
1. If the user asks about errors, trace the lineage to find the root cause (upstream errors).
2. If the user asks about impact, trace downstream dependencies.
3. Be concise and professional.

Current Graph Data:
Nodes: {nodes}
Edges: {edges}
Currently Selected Node: {selected}
"""


@dataclass(frozen=True)
class GraphContext:
    """What the assistant gets to see."""

    nodes: Sequence[DataAsset]
    edges: Sequence[LineageEdge]
    selected_id: str | None = None


def reduce_nodes(nodes: Sequence[DataAsset]) -> list[dict]:
    """Keep only the fields the model needs."""
    return [
        {
            "id": n.id,
            "label": n.label,
            "type": n.kind.value,
            "status": n.status.value,
            "quality": n.quality_score,
            "owner": n.owner,
        }
        for n in nodes
    ]


def reduce_edges(edges: Sequence[LineageEdge]) -> list[dict]:
    return [{"id": e.id, "source": e.source, "target": e.target} for e in edges]


def build_system_prompt(context: GraphContext) -> str:
    """Render the analysis system prompt for a graph context."""
    return SYSTEM_PROMPT_TEMPLATE.format(
        nodes=json.dumps(reduce_nodes(context.nodes)),
        edges=json.dumps(reduce_edges(context.edges)),
        selected=context.selected_id or "None",
    )
