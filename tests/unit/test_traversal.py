"""🧪 Tests for impact and root cause traversals."""

from lumina.graph import (
    HealthStatus,
    LineageGraph,
    downstream_closure,
    root_causes,
    upstream_closure,
    upstream_error_closure,
)


class TestDownstreamClosure:
    """Tests for downstream_closure."""

    def test_contains_start(self, seed):
        for node in seed.nodes:
            assert node.id in downstream_closure(node.id, seed.edges)

    def test_seed_impact(self, seed):
        """Test the blast radius of the orders staging table."""
        assert downstream_closure("stg_orders", seed.edges) == {
            "stg_orders",
            "dim_customer",
            "fct_sales",
            "fct_attribution",
            "dash_exec",
            "dash_mkt",
        }

    def test_leaf_is_alone(self, seed):
        assert downstream_closure("dash_exec", seed.edges) == {"dash_exec"}

    def test_fixed_point(self, seed):
        """Test that expanding every member adds nothing new."""
        for node in seed.nodes:
            closure = downstream_closure(node.id, seed.edges)
            expanded = set().union(*(downstream_closure(m, seed.edges) for m in closure))
            assert expanded == closure

    def test_terminates_on_cycle(self, cycle):
        assert downstream_closure("A", cycle.edges) == {"A", "B"}

    def test_self_loop(self, asset, edge):
        graph = LineageGraph.build([asset("a")], [edge("a", "a")])
        assert downstream_closure("a", graph.edges) == {"a"}

    def test_unknown_start(self, seed):
        assert downstream_closure("ghost", seed.edges) == {"ghost"}

    def test_deterministic(self, seed):
        first = downstream_closure("sap_raw", seed.edges)
        second = downstream_closure("sap_raw", list(reversed(seed.edges)))
        assert first == second


class TestUpstreamErrorClosure:
    """Tests for upstream_error_closure."""

    def test_healthy_start_is_empty(self, seed):
        assert upstream_error_closure("dash_exec", seed.nodes, seed.edges) == frozenset()
        assert upstream_error_closure("sap_raw", seed.nodes, seed.edges) == frozenset()

    def test_healthy_node_is_firewall(self, chain):
        """Test that C (healthy) hides A and B from D's error path."""
        assert upstream_error_closure("D", chain.nodes, chain.edges) == {"D"}

    def test_walks_through_errors(self, chain):
        assert upstream_error_closure("B", chain.nodes, chain.edges) == {"A", "B"}

    def test_seed_marketing_dashboard(self, seed):
        """Test the schema mismatch path behind the marketing dashboard."""
        assert upstream_error_closure("dash_mkt", seed.nodes, seed.edges) == {
            "dash_mkt",
            "fct_attribution",
            "stg_events",
        }

    def test_warning_counts_as_broken(self, seed):
        graph = seed.update_node_status("stg_orders", HealthStatus.WARNING)
        assert upstream_error_closure("fct_sales", graph.nodes, graph.edges) == {
            "fct_sales",
            "stg_orders",
        }

    def test_terminates_on_cycle(self, cycle):
        assert upstream_error_closure("B", cycle.nodes, cycle.edges) == {"A", "B", "C"}

    def test_does_not_mutate(self, seed):
        nodes, edges = list(seed.nodes), list(seed.edges)
        upstream_error_closure("dash_mkt", nodes, edges)
        assert nodes == list(seed.nodes)
        assert edges == list(seed.edges)


class TestUpstreamClosure:
    """Tests for upstream_closure."""

    def test_ancestors(self, seed):
        assert upstream_closure("fct_attribution", seed.edges) == {
            "fct_attribution",
            "stg_orders",
            "stg_events",
            "sap_raw",
            "clickstream",
        }

    def test_terminates_on_cycle(self, cycle):
        assert upstream_closure("A", cycle.edges) == {"A", "B", "C"}


class TestRootCauses:
    """Tests for root_causes."""

    def test_seed_root_cause(self, seed):
        assert root_causes("dash_mkt", seed.nodes, seed.edges) == {"stg_events"}

    def test_origin_is_its_own_cause(self, seed):
        assert root_causes("stg_events", seed.nodes, seed.edges) == {"stg_events"}

    def test_healthy_has_none(self, seed):
        assert root_causes("dash_exec", seed.nodes, seed.edges) == frozenset()

    def test_cycle_with_feeder(self, cycle):
        assert root_causes("B", cycle.nodes, cycle.edges) == {"C"}

    def test_pure_cycle_returns_closure(self, asset, edge):
        graph = LineageGraph.build(
            [asset("a", HealthStatus.ERROR), asset("b", HealthStatus.ERROR)],
            [edge("a", "b"), edge("b", "a")],
        )
        assert root_causes("a", graph.nodes, graph.edges) == {"a", "b"}
