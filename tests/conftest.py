"""🧪 Pytest configuration and shared fixtures."""

import pytest

from lumina.config import get_settings
from lumina.graph import AssetKind, DataAsset, HealthStatus, LineageEdge, LineageGraph
from lumina.seed import seed_graph


def make_asset(
    node_id: str,
    status: HealthStatus = HealthStatus.HEALTHY,
    kind: AssetKind = AssetKind.MODEL,
    **fields,
) -> DataAsset:
    """Build a minimal asset for tests."""
    return DataAsset(id=node_id, label=node_id.upper(), kind=kind, status=status, **fields)


def make_edge(source: str, target: str, edge_id: str | None = None) -> LineageEdge:
    """Build an edge, id defaults to ``source->target``."""
    return LineageEdge(id=edge_id or f"{source}->{target}", source=source, target=target)


@pytest.fixture
def seed():
    """The demo estate."""
    return seed_graph()


@pytest.fixture
def chain():
    """A(ERROR) → B(ERROR) → C(HEALTHY) → D(ERROR)."""
    return LineageGraph.build(
        [
            make_asset("A", HealthStatus.ERROR),
            make_asset("B", HealthStatus.ERROR),
            make_asset("C", HealthStatus.HEALTHY),
            make_asset("D", HealthStatus.ERROR),
        ],
        [make_edge("A", "B"), make_edge("B", "C"), make_edge("C", "D")],
    )


@pytest.fixture
def cycle():
    """A(ERROR) ⇄ B(ERROR), with C(WARNING) feeding A."""
    return LineageGraph.build(
        [
            make_asset("A", HealthStatus.ERROR),
            make_asset("B", HealthStatus.ERROR),
            make_asset("C", HealthStatus.WARNING),
        ],
        [make_edge("A", "B"), make_edge("B", "A"), make_edge("C", "A")],
    )


# Environment setup for tests
@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Isolate tests from the developer's environment."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("LUMINA_GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("LUMINA_TIME_TRAVEL_OVERRIDES", raising=False)
    monkeypatch.setenv("LUMINA_CONNECTOR_LATENCY_SECONDS", "0")
    monkeypatch.setenv("LUMINA_LOG_LEVEL", "WARNING")

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def asset():
    """Factory fixture for assets."""
    return make_asset


@pytest.fixture
def edge():
    """Factory fixture for edges."""
    return make_edge
