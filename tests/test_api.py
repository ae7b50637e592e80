import pytest
from fastapi.testclient import TestClient

from api.deps import get_engine, get_entity_store, get_history_store
from core.store import EntityStore, HistoryStore
from main import app
from scheduler.engine import build_rule_engine


@pytest.fixture
def entity_store():
    return EntityStore()


@pytest.fixture
def history_store():
    return HistoryStore()


@pytest.fixture
def client(entity_store, history_store):
    engine = build_rule_engine()
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_entity_store] = lambda: entity_store
    app.dependency_overrides[get_history_store] = lambda: history_store
    client = TestClient(app)
    client.headers.update({"x-api-key": "test-key"})
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(entity_store):
    for pid, group in (("A", "1"), ("B", "1"), ("C", "2")):
        entity_store.create_entity("participant", {"name": pid, "group": group}, pid)
    entity_store.create_entity(
        "target", {"name": "T1", "required_count": 1, "allowed_groups": ["2"]}, "T1"
    )
    entity_store.create_entity("target", {"name": "T2", "required_count": 2}, "T2")
    return entity_store


def test_health_check_is_public(client):
    response = TestClient(app).get("/api/health/check")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["strategies"] == 4


def test_api_key_is_required(client):
    response = TestClient(app).get("/api/assign/strategies")
    assert response.status_code == 401


def test_list_strategies_and_validators(client):
    strategies = client.get("/api/assign/strategies").json()
    validators = client.get("/api/assign/validators").json()

    assert strategies["default"] == "balanced_rotation"
    assert {s["name"] for s in strategies["strategies"]} == {
        "balanced_rotation",
        "greedy_distribution",
        "random_assignment",
        "skill_based",
    }
    assert set(validators["validators"]) == {"capacity_check", "availability_check", "skill_matching"}


def test_entity_crud(client):
    created = client.post(
        "/api/entities/participant", json={"id": "p1", "attributes": {"name": "Alice"}}
    )
    assert created.status_code == 201
    assert created.json()["id"] == "p1"

    updated = client.put("/api/entities/participant/p1", json={"attributes": {"group": "2"}})
    assert updated.json()["attributes"] == {"name": "Alice", "group": "2"}

    assert client.get("/api/entities/participant/p1").json()["attributes"]["group"] == "2"
    assert len(client.get("/api/entities/participant").json()["entities"]) == 1

    deleted = client.delete("/api/entities/participant/p1")
    assert deleted.json()["status"] == "inactive"
    assert client.get("/api/entities/participant").json()["entities"] == []


def test_entity_errors(client):
    assert client.get("/api/entities/room").status_code == 400
    assert client.get("/api/entities/participant/missing").status_code == 404
    response = client.post(
        "/api/entities/target", json={"attributes": {"name": "T", "required_count": 0}}
    )
    assert response.status_code == 400


def test_generate_and_commit(client, seeded, history_store):
    response = client.post(
        "/api/assign/generate",
        json={"strategy": "greedy_distribution", "seed": 1, "commit": True},
    )

    assert response.status_code == 200
    body = response.json()
    pairs = {(a["participant_id"], a["target_id"]) for a in body["assignments"]}
    assert ("C", "T1") in pairs
    assert len(pairs) == 3
    assert body["metadata"]["validation_results"][0]["passed"]

    history = client.get("/api/history").json()
    assert history["assignments"]["C"] == ["T1"]
    assert history_store.get("A") == ("T2",)


def test_generate_without_commit_leaves_history_alone(client, seeded, history_store):
    response = client.post("/api/assign/generate", json={"strategy": "random_assignment"})

    assert response.status_code == 200
    assert history_store.snapshot() == {}


def test_generate_unknown_strategy(client, seeded):
    response = client.post("/api/assign/generate", json={"strategy": "round_robin"})
    assert response.status_code == 404


def test_generate_unknown_entity(client, seeded):
    response = client.post(
        "/api/assign/generate", json={"strategy": "random_assignment", "participantIds": ["Z"]}
    )
    assert response.status_code == 404


def test_generate_infeasible(client, seeded):
    response = client.post(
        "/api/assign/generate",
        json={
            "strategy": "greedy_distribution",
            "participantIds": ["A", "B"],
            "parameters": {"max_attempts": 3},
        },
    )

    assert response.status_code == 422
    assert "after 3 attempts" in response.json()["detail"]


def test_generate_strict_validation_failure(client, seeded):
    response = client.post(
        "/api/assign/generate",
        json={"strategy": "random_assignment", "participantIds": ["C"], "targetIds": ["T2"]},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["rule_name"] == "capacity_check"
    assert "short by 1" in detail["message"]


def test_generate_permissive_mode_returns_partial_result(client, seeded):
    response = client.post(
        "/api/assign/generate",
        json={
            "strategy": "random_assignment",
            "participantIds": ["C"],
            "targetIds": ["T2"],
            "validationMode": "permissive",
        },
    )

    assert response.status_code == 200
    assert len(response.json()["assignments"]) == 1


def test_generate_rejects_bad_parameters(client, seeded):
    response = client.post(
        "/api/assign/generate",
        json={"strategy": "balanced_rotation", "parameters": {"rotation_weight": 3}},
    )
    assert response.status_code == 400


def test_generate_rejects_repeated_participant_ids(client, seeded, history_store):
    response = client.post(
        "/api/assign/generate",
        json={
            "strategy": "balanced_rotation",
            "participantIds": ["A", "A"],
            "targetIds": ["T2"],
            "commit": True,
        },
    )

    assert response.status_code == 400
    assert "Duplicate participant ids" in response.json()["detail"]
    assert history_store.snapshot() == {}


def test_openapi_marks_only_open_paths_public(client):
    paths = client.get("/openapi.json").json()["paths"]

    assert paths["/api/health/check"]["get"]["security"] == []
    assert paths["/api/assign/generate"]["post"]["security"] == [{"ApiKeyAuth": []}]
