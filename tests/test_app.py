from datetime import datetime

from fastapi.testclient import TestClient

from symptom_checker.app import create_app
from symptom_checker.database import make_engine
from symptom_checker.resolver import ResponseResolver
from symptom_checker.rules import Category
from symptom_checker.templates import CATALOG, DEFAULT, MEDICAL_DISCLAIMER, UNAVAILABLE

from conftest import FailingClassifier, StaticClassifier

RESULT_FIELDS = {
    "conditions", "red_flags", "general_advice", "when_to_seek_help",
    "disclaimer", "timestamp", "query_info",
}


def template_json(template):
    return template.model_dump(mode="json")


def test_index(client):
    body = client.get("/").json()
    assert body["status"] == "active"
    assert "POST /api/analyze-symptoms" in body["endpoints"]


def test_analyze_example(client):
    res = client.post("/api/analyze-symptoms", json={
        "symptoms": "I have a bad cough and chest tightness",
        "age": 34,
        "gender": "male",
    })
    assert res.status_code == 200
    body = res.json()
    assert set(body) == RESULT_FIELDS
    assert body["conditions"][0]["name"] == "Acute Bronchitis"
    assert body["query_info"] == {
        "symptoms": "I have a bad cough and chest tightness",
        "age": 34,
        "gender": "male",
    }
    assert body["disclaimer"] == MEDICAL_DISCLAIMER
    datetime.fromisoformat(body["timestamp"])


def test_analyze_returns_category_template(client):
    body = client.post("/api/analyze-symptoms", json={"symptoms": "blurry vision"}).json()
    expected = template_json(CATALOG[Category.EYE])
    assert body["conditions"] == expected["conditions"]
    assert body["red_flags"] == expected["red_flags"]
    assert body["general_advice"] == expected["general_advice"]
    assert body["when_to_seek_help"] == expected["when_to_seek_help"]


def test_analyze_unmatched_is_default(client):
    body = client.post("/api/analyze-symptoms", json={"symptoms": "I feel generally unwell"}).json()
    assert body["conditions"] == template_json(DEFAULT)["conditions"]
    assert body["query_info"] == {"symptoms": "I feel generally unwell", "age": None, "gender": None}


def test_analyze_trims_symptoms(client):
    body = client.post("/api/analyze-symptoms", json={"symptoms": "   itchy rash  "}).json()
    assert body["query_info"]["symptoms"] == "itchy rash"


def test_missing_symptoms(client):
    res = client.post("/api/analyze-symptoms", json={"symptoms": "   "})
    assert res.status_code == 400
    assert res.json()["error"] == "Symptoms are required"

    res = client.post("/api/analyze-symptoms", json={"age": 30})
    assert res.status_code == 400


def test_symptoms_too_short(client):
    res = client.post("/api/analyze-symptoms", json={"symptoms": " ab "})
    assert res.status_code == 400
    assert res.json()["error"] == "Symptoms too short"


def test_invalid_age_and_gender(client):
    assert client.post("/api/analyze-symptoms", json={"symptoms": "cough", "age": 150}).status_code == 422
    assert client.post("/api/analyze-symptoms", json={"symptoms": "cough", "age": -1}).status_code == 422
    assert client.post("/api/analyze-symptoms", json={"symptoms": "cough", "gender": "robot"}).status_code == 422


def test_history(client):
    client.post("/api/analyze-symptoms", json={"symptoms": "persistent cough", "age": 34, "gender": "male"})
    client.post("/api/analyze-symptoms", json={"symptoms": "itchy rash"})

    body = client.get("/api/history", params={"limit": 5}).json()
    assert body["total_returned"] == 2
    assert [q["symptoms"] for q in body["recent_queries"]] == ["itchy rash", "persistent cough"]
    assert body["recent_queries"][1]["age"] == 34
    assert body["recent_queries"][1]["gender"] == "male"
    assert set(body["recent_queries"][0]) == {"symptoms", "age", "gender", "timestamp"}


def test_history_limit_bounds(client):
    assert client.get("/api/history", params={"limit": 0}).status_code == 422
    assert client.get("/api/history", params={"limit": 101}).status_code == 422


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "healthy"
    assert body["environment"] == "test"
    assert body["database"] == "connected"
    assert body["features"]["medical_categories"] == 10
    assert body["features"]["classifier"] == "rules"


def test_unknown_endpoint(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["error"] == "Endpoint not found"
    assert "GET /api/history" in res.json()["available_endpoints"]


def test_classifier_failure_still_returns_200(settings):
    app = create_app(settings, resolver=ResponseResolver(FailingClassifier()))
    with TestClient(app) as client:
        res = client.post("/api/analyze-symptoms", json={"symptoms": "persistent cough", "age": 34})
        assert res.status_code == 200
        body = res.json()
        assert body["conditions"] == template_json(UNAVAILABLE)["conditions"]
        assert body["query_info"] == {"symptoms": "persistent cough", "age": 34, "gender": None}
        assert client.get("/api/health").json()["features"]["classifier"] == "failing"


def test_classifier_success(settings):
    classifier = StaticClassifier()
    app = create_app(settings, resolver=ResponseResolver(classifier))
    with TestClient(app) as client:
        body = client.post("/api/analyze-symptoms", json={"symptoms": "persistent cough"}).json()
    assert body["conditions"][0]["name"] == "Common Cold"
    assert len(classifier.prompts) == 1


class RaisingResolver:
    mode = "rules"

    async def resolve(self, query):
        raise RuntimeError("resolver exploded")


def break_database(client, tmp_path):
    client.app.state.store.engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'history.db'}")


def test_history_timestamp_matches_analyze_format(client):
    client.post("/api/analyze-symptoms", json={"symptoms": "persistent cough"})
    stamp = client.get("/api/history").json()["recent_queries"][0]["timestamp"]
    assert stamp.endswith("+00:00")


def test_analyze_succeeds_when_history_save_fails(client, tmp_path):
    break_database(client, tmp_path)
    res = client.post("/api/analyze-symptoms", json={"symptoms": "persistent cough"})
    assert res.status_code == 200
    assert res.json()["conditions"][0]["name"] == "Acute Bronchitis"


def test_history_database_error(client, tmp_path):
    break_database(client, tmp_path)
    res = client.get("/api/history")
    assert res.status_code == 500
    assert res.json() == {
        "error": "Database error",
        "message": "Could not retrieve query history",
    }


def test_health_reports_unavailable_database(client, tmp_path):
    break_database(client, tmp_path)
    assert client.get("/api/health").json()["database"] == "unavailable"


def test_unhandled_error_returns_json_500(settings):
    app = create_app(settings, resolver=RaisingResolver())
    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.post("/api/analyze-symptoms", json={"symptoms": "persistent cough"})
    assert res.status_code == 500
    assert res.json() == {
        "error": "Internal server error",
        "message": "An unexpected error occurred",
        "disclaimer": MEDICAL_DISCLAIMER,
    }


def test_wrong_method(client):
    res = client.get("/api/analyze-symptoms")
    assert res.status_code == 405
    body = res.json()
    assert body["error"] == "Method not allowed"
    assert "POST /api/analyze-symptoms" in body["available_endpoints"]
