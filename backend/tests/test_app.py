import pytest
from fastapi.testclient import TestClient

from backend.app import app

SUBJECTS = [
    {"name": "Mathematics", "percentage": 85},
    {"name": "Life Orientation", "percentage": 70},
    {"name": "English Home Language", "percentage": "75"},
    {"name": "Afrikaans First Additional Language", "percentage": 60},
    {"name": "Physical Science", "percentage": 80},
    {"name": "Accounting", "percentage": 55},
    {"name": "Geography", "percentage": 65},
]


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def test_institutions(client):
    assert client.get("/institutions").json() == ["wits", "uj", "up"]


def test_universities(client):
    unis = client.get("/universities").json()
    assert [u["short_name"] for u in unis] == ["Wits", "UJ", "UP", "UCT"]
    assert unis[3]["scale"] is None


def test_courses_filter(client):
    assert len(client.get("/courses").json()) == 15
    uj = client.get("/courses", params={"institution": "UJ"}).json()
    assert len(uj) == 5
    assert all(c["institution"] == "uj" for c in uj)
    assert client.get("/courses", params={"institution": "nope"}).status_code == 404


def test_aps(client):
    resp = client.post("/aps", json={"subjects": SUBJECTS})
    assert resp.status_code == 200
    body = resp.json()
    assert body["scores"] == {"wits": 40, "uj": 34, "up": 34}
    assert body["breakdown"]["uj"][-1] == "APS = 34"


def test_aps_incomplete(client):
    subjects = SUBJECTS[:6] + [{"name": "Geography", "percentage": ""}]
    resp = client.post("/aps", json={"subjects": subjects})
    assert resp.status_code == 400
    assert "6 valid" in resp.json()["detail"]


def test_aps_life_orientation_moved(client):
    subjects = [SUBJECTS[1], SUBJECTS[0]] + SUBJECTS[2:]
    assert client.post("/aps", json={"subjects": subjects}).status_code == 400


def test_match_not_ready(client):
    body = client.post("/match", json={"scores": {"uj": 34}, "subjects": ["Mathematics"]}).json()
    assert body["status"] == "not_ready"
    assert body["courses"] == []


def test_match_no_matches_offers_alternatives(client):
    body = client.post("/match", json={
        "scores": {"wits": 10, "uj": 10, "up": 10},
        "subjects": ["Mathematics", "English"],
        "personality": "ESFP",
    }).json()
    assert body["status"] == "no_matches"
    assert body["personality_group"] == "Creative"
    assert len(body["alternatives"]) == 4


def test_compute_pipeline(client):
    resp = client.post("/compute", json={"subjects": SUBJECTS, "personality": "Analytical"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["scores"] == {"wits": 40, "uj": 34, "up": 34}
    assert body["status"] == "matched"
    assert [c["course_name"] for c in body["courses"]] == ["BSc Information Technology"]
    assert body["unknown_institutions"] == ["uct"]
    assert "alternatives" not in body


def test_personality_quiz_roundtrip(client):
    questions = client.get("/personality/quiz").json()
    assert len(questions) == 6
    answers = {q["id"]: q["options"][0]["value"] for q in questions}
    resp = client.post("/personality/classify", json={"answers": answers})
    assert resp.status_code == 200
    assert resp.json()["personality"] in ("Analytical", "Creative", "Practical", "Social")


def test_personality_incomplete(client):
    resp = client.post("/personality/classify", json={"answers": {"problem_solving": "analytical"}})
    assert resp.status_code == 400


def test_aps_oversized_percentage_is_incomplete(client):
    subjects = SUBJECTS[:6] + [{"name": "Geography", "percentage": 10**400}]
    resp = client.post("/aps", json={"subjects": subjects})
    assert resp.status_code == 400


def test_match_normalizes_score_keys(client):
    body = client.post("/match", json={
        "scores": {" UJ ": 34},
        "subjects": ["Mathematics", "Physical Science"],
        "personality": "Analytical",
    }).json()
    assert body["status"] == "matched"
    assert [c["course_name"] for c in body["courses"]] == ["BSc Information Technology"]
    assert "uj" not in body["unknown_institutions"]
