"""🧪 Tests for the time travel projector."""

import pytest

from lumina.config import get_settings
from lumina.errors import InvalidConfigError
from lumina.graph import HealthStatus
from lumina.timetravel import StatusOverride, TimeTravelProjector


@pytest.fixture
def projector():
    return TimeTravelProjector()


class TestProjection:
    """Tests for TimeTravelProjector.project."""

    def test_offset_zero_is_live(self, projector, seed):
        assert projector.project(seed, 0) is seed

    def test_failures_are_recent(self, projector, seed):
        """Test that going further back shows more healthy assets."""
        one = projector.project(seed, 1)
        two = projector.project(seed, 2)
        three = projector.project(seed, 3)

        assert one.status_map() == seed.status_map()
        assert two.get("fct_attribution").status is HealthStatus.HEALTHY
        assert two.get("dash_mkt").status is HealthStatus.ERROR
        assert three.get("dash_mkt").status is HealthStatus.HEALTHY

    def test_monotonic(self, projector, seed):
        def healthy(days):
            return {n.id for n in projector.project(seed, days) if n.is_healthy}

        for days in range(projector.max_days):
            assert healthy(days) <= healthy(days + 1)

    def test_live_graph_untouched(self, projector, seed):
        before = seed.status_map()
        projector.project(seed, 5)
        assert seed.status_map() == before

    def test_round_trip_restores_statuses(self, projector, seed):
        """Test that 3 → 0 gives back exactly the live statuses."""
        past = projector.project(seed, 3)
        assert past.status_map() != seed.status_map()
        assert projector.project(seed, 0).status_map() == seed.status_map()
        assert projector.project(seed, 2).status_map() == projector.project(seed, 2).status_map()

    def test_offset_is_clamped(self, projector, seed):
        assert projector.clamp(-3) == 0
        assert projector.clamp(42) == 5
        assert projector.project(seed, 42).status_map() == projector.project(seed, 5).status_map()

    def test_unknown_override_ids_ignored(self, seed):
        projector = TimeTravelProjector(overrides=[StatusOverride(node_id="ghost", after_days=0)])
        assert projector.project(seed, 1).status_map() == seed.status_map()

    def test_label(self, projector):
        assert projector.label(0) == "Now"
        assert projector.label(3) == "3d ago"


class TestLoading:
    """Tests for loading override tables."""

    def test_from_yaml(self, tmp_path, seed):
        yaml_file = tmp_path / "time_travel.yaml"
        yaml_file.write_text(
            """
time_travel:
  max_days: 3
  overrides:
    - node_id: stg_events
      after_days: 0
    - node_id: fct_sales
      after_days: 1
      status: ERROR
"""
        )

        projector = TimeTravelProjector.from_yaml(yaml_file)

        assert projector.max_days == 3
        assert projector.project(seed, 1).get("stg_events").status is HealthStatus.HEALTHY
        assert projector.project(seed, 2).get("fct_sales").status is HealthStatus.ERROR

    def test_from_settings_default(self):
        projector = TimeTravelProjector.from_settings()
        assert projector.max_days == 5
        assert [o.node_id for o in projector.overrides] == ["fct_attribution", "dash_mkt"]

    def test_from_settings_with_file(self, tmp_path, monkeypatch):
        yaml_file = tmp_path / "overrides.yaml"
        yaml_file.write_text("overrides:\n  - node_id: dash_exec\n    after_days: 0\n")
        monkeypatch.setenv("LUMINA_TIME_TRAVEL_OVERRIDES", str(yaml_file))
        monkeypatch.setenv("LUMINA_TIME_TRAVEL_MAX_DAYS", "2")
        get_settings.cache_clear()

        projector = TimeTravelProjector.from_settings()

        assert projector.max_days == 2
        assert [o.node_id for o in projector.overrides] == ["dash_exec"]

    @pytest.mark.parametrize("content", ["- node_id: dash_mkt\n", "just text\n", "time_travel: 3\n"])
    def test_from_yaml_rejects_non_mapping(self, tmp_path, content):
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text(content)

        with pytest.raises(InvalidConfigError, match="Expected a mapping"):
            TimeTravelProjector.from_yaml(yaml_file)
