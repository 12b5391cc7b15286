"""🛰️ Ingestion Hub - Manage catalog sources and their syncs.

The hub owns the list of connected sources and talks to a ``ConnectorPort``.
It never raises to its caller: a failing crawl or a malformed payload marks
the source as ERROR and comes back as a FAILED ``SyncOutcome``.

Example:
    hub = IngestionHub(MockConnector())
    source = await hub.connect(IntegrationType.DBT, {"token": "..."})
    outcome = await hub.sync(source.id)
    if outcome.status is SyncStatus.SYNCED:
        state = reduce(state, IngestionMerged(...))
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from ..errors import MalformedPayloadError
from .connectors import ConnectorPort
from .models import (
    DataSource,
    IngestionResult,
    IntegrationType,
    SourceStatus,
    SyncOutcome,
    SyncStatus,
)

logger = logging.getLogger(__name__)


def parse_payload(payload: Any) -> IngestionResult:
    """Validate a raw connector payload.

    Raises:
        MalformedPayloadError: If the payload is not a valid ingestion result
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError(
            f"Expected a mapping, got {type(payload).__name__}", payload
        )
    try:
        return IngestionResult.model_validate(payload)
    except ValidationError as e:
        raise MalformedPayloadError(
            f"Invalid ingestion payload: {e.error_count()} error(s)", payload
        ) from e


class IngestionHub:
    """Registry of connected sources plus the sync lifecycle."""

    def __init__(self, connector: ConnectorPort):
        self.connector = connector
        self._sources: dict[str, DataSource] = {}

    @property
    def sources(self) -> list[DataSource]:
        return list(self._sources.values())

    def get_source(self, source_id: str) -> DataSource | None:
        return self._sources.get(source_id)

    def _update(self, source_id: str, **changes: Any) -> DataSource:
        source = self._sources[source_id].model_copy(update=changes)
        self._sources[source_id] = source
        return source

    async def connect(
        self,
        type: IntegrationType,
        credentials: dict[str, Any] | None = None,
        name: str | None = None,
    ) -> DataSource | None:
        """Connect a new source.

        Args:
            type: Kind of system
            credentials: Passed through to the connector
            name: Display name (default: "<TYPE> Production")

        Returns:
            The new DataSource, or None if the connector refused or failed
        """
        try:
            accepted = await self.connector.connect(type, credentials or {})
        except Exception as e:  # connector failures never reach the caller
            logger.warning("Connecting %s failed: %s", type.value, e)
            return None

        if not accepted:
            logger.warning("Connector refused credentials for %s", type.value)
            return None

        source = DataSource(
            id=uuid.uuid4().hex[:9],
            name=name or f"{type.value} Production",
            type=type,
            status=SourceStatus.CONNECTED,
        )
        self._sources[source.id] = source
        logger.info("Connected source %s (%s)", source.name, source.id)
        return source

    async def sync(self, source_id: str) -> SyncOutcome:
        """Crawl a source once.

        A source that is already syncing is rejected rather than crawled
        twice. Unknown source ids are rejected too. A cancelled crawl marks
        the source ERROR before the cancellation propagates.

        Returns:
            SyncOutcome; the graph itself is not touched here
        """
        source = self._sources.get(source_id)
        if source is None:
            return SyncOutcome(
                source_id=source_id,
                status=SyncStatus.REJECTED,
                error=f"Unknown source: {source_id}",
            )
        if source.status is SourceStatus.SYNCING:
            return SyncOutcome(
                source_id=source_id,
                status=SyncStatus.REJECTED,
                error=f"Sync already in progress for {source.name}",
            )

        self._update(source_id, status=SourceStatus.SYNCING)

        try:
            result = parse_payload(await self.connector.sync(source.type))
        except asyncio.CancelledError:
            logger.warning("Sync of %s was cancelled", source.name)
            self._update(source_id, status=SourceStatus.ERROR, last_error="Sync cancelled")
            raise
        except Exception as e:  # connector failures never reach the caller
            logger.warning("Sync of %s failed: %s", source.name, e)
            self._update(source_id, status=SourceStatus.ERROR, last_error=str(e))
            return SyncOutcome(
                source_id=source_id, status=SyncStatus.FAILED, error=str(e)
            )

        self._update(
            source_id,
            status=SourceStatus.CONNECTED,
            last_sync=datetime.now(),
            last_error=None,
        )
        status = SyncStatus.UNCHANGED if result.is_empty else SyncStatus.SYNCED
        return SyncOutcome(source_id=source_id, status=status, result=result)
