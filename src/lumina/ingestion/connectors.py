"""🔌 Catalog connectors - Where discovered lineage comes from.

``ConnectorPort`` is the seam between the engine and external catalogs.
``MockConnector`` simulates crawling a small modern data stack: a Snowflake
table, dbt models built on top of it (and on an existing customer
dimension), and a Tableau dashboard reading the dbt model.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from ..errors import ConnectorError
from .models import NO_CHANGES, IntegrationType


class ConnectorPort(ABC):
    """Abstract catalog connector."""

    @abstractmethod
    async def connect(self, type: IntegrationType, credentials: dict[str, Any]) -> bool:
        """Check credentials for a source. Returns False when refused."""
        pass

    @abstractmethod
    async def sync(self, type: IntegrationType) -> dict[str, Any]:
        """Crawl a source and return a raw payload.

        The payload has ``nodes``, ``edges`` and ``summary`` keys and is
        validated by the caller.

        Raises:
            ConnectorError: When the crawl fails
        """
        pass


def _catalog(timestamp: str) -> dict[IntegrationType, dict[str, Any]]:
    """Payloads the mock crawl returns, keyed by source type."""
    return {
        IntegrationType.SNOWFLAKE: {
            "nodes": [
                {
                    "id": "sf_ads_raw",
                    "label": "RAW_AD_CAMPAIGNS",
                    "type": "SOURCE",
                    "status": "HEALTHY",
                    "description": "Raw advertising spend data from 3rd party API dump.",
                    "owner": "Marketing Eng",
                    "lastUpdated": timestamp,
                    "rowCount": 85000,
                    "freshness": "2 hours",
                    "tags": ["Snowflake", "External"],
                    "qualityScore": 100,
                    "schema": [
                        {"name": "campaign_id", "type": "varchar", "isPii": False, "description": "Campaign ID"},
                        {"name": "daily_spend", "type": "float", "isPii": False, "description": "Daily Spend USD"},
                    ],
                    "position": {"x": 50, "y": 500},
                }
            ],
            "edges": [],
            "summary": "Scanned ACCOUNT_USAGE.TABLES. Found 1 new table.",
        },
        IntegrationType.DBT: {
            "nodes": [
                {
                    "id": "dbt_stg_ads",
                    "label": "STG_AD_PERFORMANCE",
                    "type": "TRANSFORM",
                    "status": "HEALTHY",
                    "description": "Cleaned ad performance metrics via dbt model.",
                    "owner": "Analytics Eng",
                    "lastUpdated": timestamp,
                    "rowCount": 85000,
                    "freshness": "2 hours",
                    "tags": ["dbt", "Silver"],
                    "qualityScore": 98,
                    "schema": [
                        {"name": "campaign_id", "type": "varchar", "isPii": False, "description": "ID"},
                        {"name": "roas", "type": "float", "isPii": False, "description": "Return on Ad Spend"},
                    ],
                    "position": {"x": 400, "y": 500},
                },
                {
                    "id": "dbt_model_roas",
                    "label": "FCT_ROAS_ANALYSIS",
                    "type": "MODEL",
                    "status": "HEALTHY",
                    "description": "Final fact table for ROAS analysis.",
                    "owner": "Marketing Data",
                    "lastUpdated": timestamp,
                    "rowCount": 1200,
                    "freshness": "2 hours",
                    "tags": ["dbt", "Gold"],
                    "qualityScore": 95,
                    "schema": [],
                    "position": {"x": 800, "y": 500},
                },
            ],
            # sf_ads_raw only exists once Snowflake has been synced
            "edges": [
                {"id": "e_new_1", "source": "sf_ads_raw", "target": "dbt_stg_ads"},
                {"id": "e_new_2", "source": "dbt_stg_ads", "target": "dbt_model_roas"},
                {"id": "e_new_3", "source": "dim_customer", "target": "dbt_model_roas"},
            ],
            "summary": "Parsed manifest.json. Found 2 models and 3 lineage relationships.",
        },
        IntegrationType.TABLEAU: {
            "nodes": [
                {
                    "id": "tab_marketing_exec",
                    "label": "CMO_DASHBOARD",
                    "type": "DASHBOARD",
                    "status": "WARNING",
                    "description": "Executive marketing overview.",
                    "owner": "Marketing Ops",
                    "lastUpdated": timestamp,
                    "rowCount": 0,
                    "freshness": "1 day",
                    "tags": ["Tableau", "Critical"],
                    "qualityScore": 80,
                    "schema": [],
                    "position": {"x": 1200, "y": 500},
                }
            ],
            "edges": [
                {"id": "e_new_4", "source": "dbt_model_roas", "target": "tab_marketing_exec"},
            ],
            "summary": "Scanned Tableau Metadata API. Found 1 Dashboard linked to existing models.",
        },
    }


class MockConnector(ConnectorPort):
    """In-memory connector returning canned crawl results.

    Example:
        connector = MockConnector(latency=0.5, failing=[IntegrationType.POSTGRES])
        await connector.connect(IntegrationType.DBT, {"token": "..."})  # True
        payload = await connector.sync(IntegrationType.DBT)
    """

    def __init__(
        self,
        latency: float = 0.0,
        failing: Iterable[IntegrationType] = (),
        refused: Iterable[IntegrationType] = (),
        payloads: dict[IntegrationType, dict[str, Any]] | None = None,
    ):
        """Initialize the mock connector.

        Args:
            latency: Simulated seconds per call
            failing: Source types whose sync raises ``ConnectorError``
            refused: Source types whose credentials are rejected
            payloads: Replace the canned catalog (raw payloads per type)
        """
        self.latency = latency
        self.failing = set(failing)
        self.refused = set(refused)
        self._payloads = payloads

    async def _delay(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    async def connect(self, type: IntegrationType, credentials: dict[str, Any]) -> bool:
        await self._delay()
        return type not in self.refused

    async def sync(self, type: IntegrationType) -> dict[str, Any]:
        await self._delay()

        if type in self.failing:
            raise ConnectorError(f"{type.value} crawl failed: metadata API unreachable")

        if self._payloads is not None:
            catalog = self._payloads
        else:
            catalog = _catalog(datetime.now(timezone.utc).isoformat())
        return catalog.get(type, {"nodes": [], "edges": [], "summary": NO_CHANGES})
