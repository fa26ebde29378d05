"""
Tests for the read-only Flask data server.
"""

import pytest

from atp_brackets.brackets import load_and_generate
from atp_brackets.common_names import add_common_names
from atp_brackets.config import Config
from atp_brackets.ingest import ingest_batches, write_outputs
from atp_brackets.server import create_app
from tests.helpers import make_row


@pytest.fixture
def data_dir(tmp_path):
    rows_2023 = [make_row(Date="01/03/23", Tournament="BNP Paribas Open", Location="Indian Wells", Series="Masters")]
    rows_2024 = [
        make_row(Round="Semifinals", Winner="A", Loser="C"),
        make_row(Round="Semifinals", Winner="B", Loser="D", Surface="Hard"),
        make_row(Round="The Final", Winner="A", Loser="B"),
        make_row(Round="Quarterfinals", Winner="B", Loser="A", Tournament="Adelaide International", Location="Adelaide"),
    ]
    result = ingest_batches([("2023.csv", rows_2023), ("2024.csv", rows_2024)])
    write_outputs(result, tmp_path)
    load_and_generate(tmp_path)
    add_common_names(tmp_path / "tournaments.json")
    return tmp_path


@pytest.fixture
def client(data_dir):
    app = create_app(data_dir)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _tournament_id(client, name, year):
    data = client.get(f"/api/tournaments?year={year}").get_json()["data"]
    return next(t["id"] for t in data if t["name"] == name)


class TestDataFiles:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "healthy"

    def test_serves_json_files(self, client):
        resp = client.get("/data/players.json")
        assert resp.status_code == 200
        assert [p["id"] for p in resp.get_json()][:2] == ["john-smith", "jane-doe"]

    def test_serves_bracket_file(self, client):
        tid = _tournament_id(client, "Brisbane International", 2024)
        resp = client.get(f"/data/brackets/{tid}.json")
        assert resp.status_code == 200
        assert resp.get_json()["attributes"]["round"] == "F"

    def test_missing_file(self, client):
        assert client.get("/data/nope.json").status_code == 404


class TestApi:
    def test_tournaments_with_display_name(self, client):
        data = client.get("/api/tournaments").get_json()["data"]
        by_name = {t["name"]: t for t in data}
        assert by_name["BNP Paribas Open"]["displayName"] == "Indian Wells"
        assert by_name["Brisbane International"]["displayName"] == "Brisbane International"

    def test_tournament_filters(self, client):
        payload = client.get("/api/tournaments?year=2023").get_json()
        assert payload["count"] == 1
        payload = client.get("/api/tournaments?series=Masters").get_json()
        assert [t["name"] for t in payload["data"]] == ["BNP Paribas Open"]
        payload = client.get("/api/tournaments?surface=Clay").get_json()
        assert payload["count"] == 0

    def test_bracket(self, client):
        tid = _tournament_id(client, "Brisbane International", 2024)
        payload = client.get(f"/api/tournaments/{tid}/bracket").get_json()
        assert payload["success"] is True
        assert payload["data"]["name"] == "A d. B"

    def test_bracket_missing(self, client):
        tid = _tournament_id(client, "Adelaide International", 2024)
        assert client.get(f"/api/tournaments/{tid}/bracket").status_code == 404
        assert client.get("/api/tournaments/..%2Fplayers/bracket").status_code == 404

    def test_player_matches(self, client):
        payload = client.get("/api/players/a/matches").get_json()
        assert payload["player"]["name"] == "A"
        assert payload["count"] == 3

    def test_unknown_player(self, client):
        assert client.get("/api/players/nobody/matches").status_code == 404

    def test_head_to_head(self, client):
        payload = client.get("/api/h2h?p1=a&p2=b").get_json()["data"]
        assert payload["p1_wins"] == 1
        assert payload["p2_wins"] == 1
        assert len(payload["matches"]) == 2

    def test_head_to_head_needs_two_players(self, client):
        assert client.get("/api/h2h?p1=a").status_code == 400
        assert client.get("/api/h2h?p1=a&p2=a").status_code == 400

    def test_unknown_route(self, client):
        resp = client.get("/api/does-not-exist")
        assert resp.status_code == 404
        assert resp.get_json()["success"] is False


class TestMissingData:
    def test_tournaments_not_generated(self, tmp_path):
        client = create_app(tmp_path).test_client()
        assert client.get("/api/tournaments").status_code == 404
        assert client.get("/api/h2h?p1=a&p2=b").status_code == 404

    def test_data_reloaded_after_cache_expiry(self, data_dir, monkeypatch):
        # A zero TTL expires every entry as soon as it is stored.
        monkeypatch.setattr(Config, "CACHE_DATA_FILES", 0)
        client = create_app(data_dir).test_client()
        for _ in range(2):
            resp = client.get("/api/tournaments")
            assert resp.status_code == 200
            assert resp.get_json()["count"] == 3
