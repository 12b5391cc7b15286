"""🧰 Workbench - One operator session: graph state, sources and chat.

All state changes go through ``dispatch`` on a single logical thread. The
only suspending calls are ``sync`` (catalog crawl) and ``ask`` (assistant).
Their results are applied to whatever the state is when they complete:

- sync results are merged idempotently into the current graph
- assistant replies are dropped if the user changed selection or mode
  while waiting (the state's ``generation`` moved on)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from .assistant import GREETING, AssistantBridge, GeminiAssistant, GraphContext
from .graph import LineageGraph
from .ingestion import (
    DataSource,
    IngestionHub,
    IntegrationType,
    MockConnector,
    SyncOutcome,
    SyncStatus,
)
from .seed import seed_graph
from .timetravel import TimeTravelProjector
from .view import GraphState, IngestionMerged, reduce
from .view.state import Event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["user", "assistant"]
    content: str


class Workbench:
    """Glue between UI events, the ingestion hub and the assistant.

    Example:
        bench = Workbench.from_settings()
        bench.dispatch(ModeSelected(ViewMode.ROOT_CAUSE))
        bench.dispatch(NodeClicked("dash_mkt"))

        source = await bench.connect(IntegrationType.DBT)
        await bench.sync(source.id)

        answer = await bench.ask("Why is the marketing dashboard broken?")
    """

    def __init__(self, state: GraphState, hub: IngestionHub, bridge: AssistantBridge):
        self.state = state
        self.hub = hub
        self.bridge = bridge
        self.transcript: list[ChatMessage] = [ChatMessage("assistant", GREETING)]
        self._asking = False

    @classmethod
    def from_settings(cls, graph: LineageGraph | None = None) -> "Workbench":
        """Wire a workbench with the seed graph, mock connector and Gemini."""
        from .config import get_settings

        settings = get_settings()
        state = GraphState.initial(
            graph if graph is not None else seed_graph(),
            TimeTravelProjector.from_settings(),
        )
        hub = IngestionHub(MockConnector(latency=settings.connector_latency_seconds))
        bridge = AssistantBridge(
            GeminiAssistant.from_settings(),
            temperature=settings.assistant_temperature,
        )
        return cls(state, hub, bridge)

    def dispatch(self, event: Event) -> GraphState:
        """Apply a UI event."""
        self.state = reduce(self.state, event)
        return self.state

    # =========================================================================
    # Ingestion
    # =========================================================================

    async def connect(
        self, type: IntegrationType, credentials: dict[str, Any] | None = None
    ) -> DataSource | None:
        return await self.hub.connect(type, credentials)

    async def sync(self, source_id: str) -> SyncOutcome:
        """Crawl a source and merge what it found into the live graph."""
        outcome = await self.hub.sync(source_id)
        if outcome.status is not SyncStatus.SYNCED or outcome.result is None:
            return outcome

        result = outcome.result
        report = self.dispatch(
            IngestionMerged(tuple(result.nodes), tuple(result.edges))
        ).last_merge

        return outcome.model_copy(
            update={
                "status": SyncStatus.SYNCED if report.changed else SyncStatus.UNCHANGED,
                "added_nodes": list(report.added_nodes),
                "added_edges": list(report.added_edges),
                "dropped_edges": list(report.dropped_edges),
            }
        )

    # =========================================================================
    # Assistant
    # =========================================================================

    def context(self) -> GraphContext:
        view = self.state.view
        return GraphContext(view.nodes, view.edges, self.state.selected_id)

    async def ask(self, query: str) -> str | None:
        """Ask the assistant about the current graph.

        Returns:
            The reply, or None when the query is blank, another question is
            still pending, or the reply went stale
        """
        query = query.strip()
        if not query or self._asking:
            return None

        self.transcript.append(ChatMessage("user", query))
        generation = self.state.generation
        self._asking = True
        try:
            reply = await self.bridge.analyze(query, self.context())
        finally:
            self._asking = False

        if self.state.generation != generation:
            logger.debug("Discarding stale assistant reply for %r", query)
            return None

        self.transcript.append(ChatMessage("assistant", reply))
        return reply
