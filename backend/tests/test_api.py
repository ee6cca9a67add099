"""
Tests for the simulation API routes.
"""

import json
from typing import List

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.api.routes import simulations_routes
from app.platforms import LeagueDataSource, PlatformError
from app.simulator import TeamRecord, LeagueSettings, WeekMatchups


@pytest.fixture(scope="module")
def client():
    """Test client with startup/shutdown events."""
    with TestClient(app) as test_client:
        yield test_client


def league_payload(**overrides) -> dict:
    """Four-team league at week 10 with two weeks left before the playoffs."""
    payload = {
        "league_id": "test-league",
        "current_week": 10,
        "settings": {"league_name": "Test League", "playoff_spots": 2, "playoff_start_week": 13},
        "standings": [
            {"id": "a", "name": "Alpha", "wins": 7, "losses": 3, "points_for": 1150.0, "rank": 1},
            {"id": "b", "name": "Beta", "wins": 6, "losses": 4, "points_for": 1100.0, "rank": 2},
            {"id": "c", "name": "Gamma", "wins": 5, "losses": 5, "points_for": 1050.0, "rank": 3},
            {"id": "d", "name": "Delta", "wins": 2, "losses": 8, "points_for": 900.0, "rank": 4},
        ],
        "weeks": [
            {
                "week": 11,
                "start_date": "2025-11-10",
                "end_date": "2025-11-16",
                "matchups": [
                    {"teams": [{"id": "a", "name": "Alpha"}, {"id": "d", "name": "Delta"}]},
                    {"teams": [{"id": "b", "name": "Beta"}, {"id": "c", "name": "Gamma"}]},
                ],
            },
            {
                "week": 12,
                "matchups": [
                    {"teams": [{"id": "a", "name": "Alpha"}, {"id": "c", "name": "Gamma"}]},
                    {"teams": [{"id": "b", "name": "Beta"}, {"id": "d", "name": "Delta"}]},
                ],
            },
        ],
        "n_simulations": 1000,
        "scenario_simulations": 200,
        "seed": 7,
    }
    payload.update(overrides)
    return payload


class TestHealth:
    """Tests for service info endpoints."""

    def test_health(self, client):
        """Test health check endpoint."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        """Test root endpoint."""
        assert client.get("/").json()["docs"] == "/api/docs"


class UnreachableSource(LeagueDataSource):
    """Data source whose backend cannot be reached."""

    @property
    def platform_name(self) -> str:
        return "remote"

    async def fetch_standings(self, league_id: str) -> List[TeamRecord]:
        raise PlatformError("connection refused")

    async def fetch_league_settings(self, league_id: str) -> LeagueSettings:
        raise PlatformError("connection refused")

    async def fetch_week_matchups(self, league_id: str, week: int) -> WeekMatchups:
        raise PlatformError("connection refused")


class TestRunSimulation:
    """Tests for POST /api/simulations/run."""

    def test_baseline_results(self, client):
        """Test the baseline is returned sorted by playoff odds."""
        response = client.post("/api/simulations/run", json=league_payload())
        assert response.status_code == 200
        data = response.json()

        assert data["league_name"] == "Test League"
        assert data["playoff_spots"] == 2
        assert data["weeks_remaining"] == 2
        assert data["games_remaining"] == 4
        assert len(data["teams"]) == 4

        probs = [t["playoff_prob"] for t in data["teams"]]
        assert probs == sorted(probs, reverse=True)
        assert sum(probs) == pytest.approx(2.0)
        for team in data["teams"]:
            assert sum(team["rank_dist"]) == pytest.approx(1.0)

        assert data["scenario_task_id"] is not None

    def test_seeded_runs_match(self, client):
        """Test the same seed returns the same baseline."""
        first = client.post("/api/simulations/run", json=league_payload(include_scenarios=False))
        second = client.post("/api/simulations/run", json=league_payload(include_scenarios=False))
        assert first.json()["teams"] == second.json()["teams"]

    def test_without_scenarios(self, client):
        """Test no task is created when scenarios are not requested."""
        response = client.post("/api/simulations/run", json=league_payload(include_scenarios=False))
        assert response.status_code == 200
        assert response.json()["scenario_task_id"] is None

    def test_missing_week_rejected(self, client):
        """Test a gap in the provided schedule is a client error."""
        payload = league_payload(current_week=9)
        response = client.post("/api/simulations/run", json=payload)
        assert response.status_code == 400
        assert "week 10" in response.json()["detail"]

    def test_invalid_strength_model(self, client):
        """Test request validation."""
        response = client.post("/api/simulations/run", json=league_payload(strength_model="elo"))
        assert response.status_code == 422

    def test_source_unreachable(self, client, monkeypatch):
        """Test data source failures map to 502."""
        monkeypatch.setattr(simulations_routes, "build_source", lambda request: UnreachableSource())
        response = client.post("/api/simulations/run", json=league_payload())
        assert response.status_code == 502
        assert "remote" in response.json()["detail"]

    def test_season_over(self, client):
        """Test a finished regular season gives settled odds."""
        payload = league_payload(current_week=12, weeks=[])
        data = client.post("/api/simulations/run", json=payload).json()
        odds = {t["team_id"]: t["playoff_prob"] for t in data["teams"]}
        assert odds == {"a": 1.0, "b": 1.0, "c": 0.0, "d": 0.0}


class TestScenarioTask:
    """Tests for the deferred scenario pass."""

    @pytest.fixture(scope="class")
    def task_id(self, client):
        response = client.post("/api/simulations/run", json=league_payload())
        return response.json()["scenario_task_id"]

    def test_status_completed(self, client, task_id):
        """Test the background task completes."""
        data = client.get(f"/api/simulations/{task_id}/status").json()
        assert data["status"] == "completed"
        assert data["progress"] == 100
        assert data["error"] is None

    def test_scenarios(self, client, task_id):
        """Test week reports keep schedule order and carry every team's odds."""
        response = client.get(f"/api/simulations/{task_id}/scenarios")
        assert response.status_code == 200
        data = response.json()

        assert data["league_id"] == "test-league"
        assert data["n_simulations"] == 200
        assert [w["week"] for w in data["weeks"]] == [11, 12]
        assert data["weeks"][0]["start_date"] == "2025-11-10"

        first = data["weeks"][0]["matchups"][0]
        assert (first["team1_id"], first["team2_id"]) == ("a", "d")
        assert set(first["if_team1_wins"]) == {"a", "b", "c", "d"}
        assert first["stakes"] >= 0

    def test_scenarios_sorted_by_stakes(self, client, task_id):
        """Test optional stakes ordering."""
        data = client.get(f"/api/simulations/{task_id}/scenarios?sort=stakes").json()
        for week in data["weeks"]:
            stakes = [m["stakes"] for m in week["matchups"]]
            assert stakes == sorted(stakes, reverse=True)

    def test_stream_ends_on_completion(self, client, task_id):
        """Test the SSE stream reports the finished task."""
        response = client.get(f"/api/simulations/{task_id}/stream")
        events = [line for line in response.text.splitlines() if line.startswith("data: ")]
        assert json.loads(events[-1][len("data: "):])["status"] == "completed"

    def test_unknown_task(self, client):
        """Test unknown task ids return 404."""
        assert client.get("/api/simulations/nope/status").status_code == 404
        assert client.get("/api/simulations/nope/scenarios").status_code == 404

    def test_failed_task(self, client, monkeypatch):
        """Test a scenario pass that raises is recorded as failed."""
        def broken_scenarios(*args, **kwargs):
            raise RuntimeError("scenario worker crashed")

        monkeypatch.setattr(simulations_routes, "build_week_scenarios", broken_scenarios)
        task_id = client.post("/api/simulations/run", json=league_payload()).json()["scenario_task_id"]

        data = client.get(f"/api/simulations/{task_id}/status").json()
        assert data["status"] == "failed"
        assert data["error"] == "scenario worker crashed"

        response = client.get(f"/api/simulations/{task_id}/scenarios")
        assert response.status_code == 500
        assert "scenario worker crashed" in response.json()["detail"]

    def test_pending_task(self, client, monkeypatch):
        """Test results are refused until the scenario pass finishes."""
        async def never_started(*args, **kwargs):
            return None

        monkeypatch.setattr(simulations_routes, "run_scenario_task", never_started)
        task_id = client.post("/api/simulations/run", json=league_payload()).json()["scenario_task_id"]

        data = client.get(f"/api/simulations/{task_id}/status").json()
        assert data["status"] == "pending"
        assert data["progress"] == 0

        response = client.get(f"/api/simulations/{task_id}/scenarios")
        assert response.status_code == 400
        assert "still running" in response.json()["detail"]

    def test_reruns_use_baseline_model(self, client, monkeypatch):
        """Test scenario reruns use the same strength model as the baseline."""
        used_models = []
        original = simulations_routes.build_week_scenarios

        def recording_scenarios(*args, **kwargs):
            used_models.append(kwargs["strength_model"])
            return original(*args, **kwargs)

        monkeypatch.setattr(simulations_routes, "SCENARIO_STRENGTH_MODEL", None)
        monkeypatch.setattr(simulations_routes, "build_week_scenarios", recording_scenarios)
        client.post("/api/simulations/run", json=league_payload())
        client.post("/api/simulations/run", json=league_payload(strength_model="laplace"))

        assert used_models == ["blended", "laplace"]

    def test_configured_rerun_model(self, monkeypatch):
        """Test a configured scenario model overrides the baseline's."""
        monkeypatch.setattr(simulations_routes, "SCENARIO_STRENGTH_MODEL", "laplace")
        assert simulations_routes.resolve_scenario_model("blended") == "laplace"

        monkeypatch.setattr(simulations_routes, "SCENARIO_STRENGTH_MODEL", None)
        assert simulations_routes.resolve_scenario_model("blended") == "blended"
