import pytest


@pytest.fixture
def seeded(client, raw_rows):
    r = client.post("/ingest", json=raw_rows)
    assert r.status_code == 200


def test_list_titles(client, seeded):
    r = client.get("/titles")
    assert r.status_code == 200
    assert [t["id"] for t in r.json()] == ["s1", "s2", "s4", "s5"]

def test_list_titles_filters(client, seeded):
    r = client.get("/titles", params={"kind": "TV Show"})
    assert {t["id"] for t in r.json()} == {"s2", "s5"}
    r = client.get("/titles", params={"country": "united states"})
    assert {t["id"] for t in r.json()} == {"s1", "s5"}
    r = client.get("/titles", params={"genre": "thriller"})
    assert [t["id"] for t in r.json()] == ["s4"]

def test_get_title_missing(client, seeded):
    r = client.get("/titles/nope")
    assert r.status_code == 404

def test_unparsed_date_round_trips(client, seeded):
    t = client.get("/titles/s4").json()
    assert t["date_added"] == {"raw": "not a date", "value": None, "status": "unparsed"}

def test_stats_kinds(client, seeded):
    r = client.get("/stats/kinds")
    assert r.status_code == 200
    assert {row["kind"]: row["count"] for row in r.json()} == {"Movie": 2, "TV Show": 2}

def test_stats_top_country(client, seeded):
    r = client.get("/stats/top/country", params={"n": 1})
    assert r.status_code == 200
    assert r.json() == [{"value": "United States", "count": 2}]

def test_stats_top_rejects_other_fields(client, seeded):
    r = client.get("/stats/top/rating")
    assert r.status_code == 422

def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    out = r.json()
    assert out["ok"] is True
    assert out["aliases"] >= 1
    assert "%Y-%m-%d" in out["date_formats"]
