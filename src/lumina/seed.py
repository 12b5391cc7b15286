"""🌱 Seed data - The demo estate loaded at startup.

Two pipelines share the estate: an orders flow that is mostly healthy
(``sap_raw`` → ``stg_orders`` → ``fct_sales`` which is WARNING) and a
marketing flow broken by a schema mismatch in ``stg_events`` that cascades
to ``fct_attribution`` and ``dash_mkt``. The clickstream feeding
``stg_events`` is healthy, so the schema mismatch is the root cause.
"""

from __future__ import annotations

from datetime import date, timedelta

from .graph import AssetKind, DataAsset, HealthStatus, LineageEdge, LineageGraph


def _days_ago(days: int, today: date | None = None) -> str:
    return ((today or date.today()) - timedelta(days=days)).isoformat()


def seed_nodes(today: date | None = None) -> list[DataAsset]:
    """Initial assets, layer by layer."""
    return [
        # Layer 1: sources
        DataAsset(
            id="sap_raw",
            label="SAP_ORDERS_RAW",
            kind=AssetKind.SOURCE,
            status=HealthStatus.HEALTHY,
            description="Raw replication of SAP VBAK/VBAP tables.",
            owner="Ingestion Team",
            last_updated=_days_ago(0, today),
            row_count=1542000,
            freshness="15 mins",
            tags=["PII", "Finance"],
            quality_score=98,
            columns=[
                {"name": "order_id", "type": "varchar", "is_pii": False, "description": "PK"},
                {
                    "name": "customer_email",
                    "type": "varchar",
                    "is_pii": True,
                    "description": "Customer Email",
                },
            ],
            position={"x": 50, "y": 100},
        ),
        DataAsset(
            id="clickstream",
            label="WEB_CLICKS_STREAM",
            kind=AssetKind.SOURCE,
            status=HealthStatus.HEALTHY,
            description="Kafka stream of website events.",
            owner="Web Team",
            last_updated=_days_ago(0, today),
            row_count=50000000,
            freshness="Real-time",
            tags=["High Volume"],
            quality_score=85,
            columns=[
                {"name": "session_id", "type": "uuid", "description": "Session ID"},
                {"name": "url", "type": "varchar", "description": "Page URL"},
            ],
            position={"x": 50, "y": 300},
        ),
        # Layer 2: staging
        DataAsset(
            id="stg_orders",
            label="STG_CLEAN_ORDERS",
            kind=AssetKind.TRANSFORM,
            status=HealthStatus.HEALTHY,
            description="Cleaned orders with standardized currency.",
            owner="Core Data Team",
            last_updated=_days_ago(0, today),
            row_count=1541800,
            freshness="1 hour",
            tags=["Silver"],
            quality_score=99,
            columns=[
                {"name": "order_id", "type": "varchar", "description": "PK"},
                {"name": "amount_usd", "type": "decimal", "description": "Normalized Amount"},
            ],
            position={"x": 400, "y": 100},
        ),
        DataAsset(
            id="stg_events",
            label="STG_USER_SESSIONS",
            kind=AssetKind.TRANSFORM,
            status=HealthStatus.ERROR,
            description="Sessionized web events. FAILED due to schema mismatch.",
            owner="Core Data Team",
            last_updated=_days_ago(1, today),
            row_count=4500000,
            freshness="25 hours",
            tags=["Silver", "Broken"],
            quality_score=40,
            position={"x": 400, "y": 300},
        ),
        # Layer 3: semantic models
        DataAsset(
            id="dim_customer",
            label="DIM_CUSTOMER_360",
            kind=AssetKind.MODEL,
            status=HealthStatus.HEALTHY,
            description="Golden record of customer attributes.",
            owner="Analytics Eng",
            last_updated=_days_ago(0, today),
            row_count=50000,
            freshness="4 hours",
            tags=["Gold", "PII"],
            quality_score=95,
            position={"x": 800, "y": 50},
        ),
        DataAsset(
            id="fct_sales",
            label="FCT_DAILY_SALES",
            kind=AssetKind.MODEL,
            status=HealthStatus.WARNING,
            description="Aggregated daily sales facts.",
            owner="Analytics Eng",
            last_updated=_days_ago(0, today),
            row_count=1200,
            freshness="4 hours",
            tags=["Gold"],
            quality_score=92,
            position={"x": 800, "y": 200},
        ),
        DataAsset(
            id="fct_attribution",
            label="FCT_MKT_ATTRIBUTION",
            kind=AssetKind.MODEL,
            status=HealthStatus.ERROR,
            description="Marketing attribution model linking sales to clicks.",
            owner="Marketing Data",
            last_updated=_days_ago(2, today),
            row_count=0,
            freshness="48 hours",
            tags=["Gold"],
            quality_score=0,
            position={"x": 800, "y": 350},
        ),
        # Layer 4: consumption
        DataAsset(
            id="dash_exec",
            label="EXEC_OVERVIEW_DASH",
            kind=AssetKind.DASHBOARD,
            status=HealthStatus.HEALTHY,
            description="Tableau dashboard for C-Suite.",
            owner="BI Team",
            last_updated=_days_ago(0, today),
            row_count=0,
            freshness="4 hours",
            tags=["Critical"],
            quality_score=100,
            position={"x": 1200, "y": 100},
        ),
        DataAsset(
            id="dash_mkt",
            label="MARKETING_ROI_DASH",
            kind=AssetKind.DASHBOARD,
            status=HealthStatus.ERROR,
            description="PowerBI dashboard for Marketing Ops.",
            owner="Marketing Ops",
            last_updated=_days_ago(3, today),
            row_count=0,
            freshness="STALE",
            tags=["Critical"],
            quality_score=0,
            position={"x": 1200, "y": 350},
        ),
    ]


def seed_edges() -> list[LineageEdge]:
    """Initial lineage relationships."""
    pairs = [
        ("e1", "sap_raw", "stg_orders"),
        ("e2", "clickstream", "stg_events"),
        ("e3", "stg_orders", "dim_customer"),
        ("e4", "stg_orders", "fct_sales"),
        ("e5", "stg_orders", "fct_attribution"),  # join key
        ("e6", "stg_events", "fct_attribution"),  # broken link
        ("e7", "dim_customer", "dash_exec"),
        ("e8", "fct_sales", "dash_exec"),
        ("e9", "fct_attribution", "dash_mkt"),
    ]
    return [LineageEdge(id=i, source=s, target=t) for i, s, t in pairs]


def seed_graph(today: date | None = None) -> LineageGraph:
    """Build the initial graph snapshot."""
    return LineageGraph.build(seed_nodes(today), seed_edges())
