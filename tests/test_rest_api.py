from fastapi.testclient import TestClient

from weekplanner.cmd.api.main import create_app
from weekplanner.core.database import MongoStore

from conftest import MISSING_ID, TASK, WEEK


def _create_week(client, **overrides):
    response = client.post("/weeks", json=dict(WEEK, **overrides))
    assert response.status_code == 201
    return response.json()


def _create_task(client, **overrides):
    response = client.post("/tasks", json=dict(TASK, **overrides))
    assert response.status_code == 201
    return response.json()


class TestWeekRoutes:
    def test_create_and_list(self, client):
        created = _create_week(client)

        response = client.get("/weeks")

        assert response.status_code == 200
        assert response.json() == [created]
        assert {k: v for k, v in created.items() if k != "id"} == WEEK

    def test_create_missing_field_returns_422(self, client):
        payload = dict(WEEK)
        del payload["link"]

        response = client.post("/weeks", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == 1
        assert "link" in body["message"]
        assert client.get("/weeks").json() == []

    def test_create_malformed_integer_returns_422(self, client):
        response = client.post("/weeks", json=dict(WEEK, year="next year"))

        assert response.status_code == 422

    def test_put_is_full_replace(self, client):
        created = _create_week(client)
        replacement = dict(WEEK, description="Replaced", priority=7)

        response = client.put(f"/weeks/{created['id']}", json=replacement)

        assert response.status_code == 200
        assert response.json() == dict(replacement, id=created["id"])
        assert client.get(f"/weeks/{created['id']}").json() == response.json()

    def test_put_requires_every_field(self, client):
        created = _create_week(client)

        response = client.put(f"/weeks/{created['id']}", json={"description": "only"})

        assert response.status_code == 422
        assert client.get(f"/weeks/{created['id']}").json() == created

    def test_delete_returns_deleted_week(self, client):
        created = _create_week(client)

        response = client.delete(f"/weeks/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created
        assert client.get("/weeks").json() == []

    def test_unknown_week_returns_404(self, client):
        for response in (
            client.get(f"/weeks/{MISSING_ID}"),
            client.put(f"/weeks/{MISSING_ID}", json=WEEK),
            client.delete(f"/weeks/{MISSING_ID}"),
            client.delete("/weeks/not-an-id"),
        ):
            assert response.status_code == 404
            assert response.json()["error_code"] == 1
            assert "not found" in response.json()["message"]


class TestTaskRoutes:
    def test_create_and_list(self, client):
        created = _create_task(client)

        assert created["file"] is None
        assert client.get("/tasks").json() == [created]

    def test_put_merges_partially(self, client):
        created = _create_task(client, file="plan.pdf")

        response = client.put(f"/tasks/{created['id']}", json={"name": "x"})

        assert response.status_code == 200
        assert response.json() == dict(created, name="x")

    def test_put_null_name_is_rejected(self, client):
        created = _create_task(client)

        response = client.put(f"/tasks/{created['id']}", json={"name": None})

        assert response.status_code == 422
        assert client.get(f"/tasks/{created['id']}").json() == created

    def test_bulk_put_updates_task_named_in_body(self, client):
        target = _create_task(client)
        other = _create_task(client, name="B")

        response = client.put("/tasks", json={"_id": target["id"], "finished": 1})

        assert response.status_code == 200
        assert response.json() == dict(target, finished=1)
        assert client.get(f"/tasks/{other['id']}").json() == other

    def test_bulk_put_without_identifier_returns_422(self, client):
        _create_task(client)

        response = client.put("/tasks", json={"finished": 1})

        assert response.status_code == 422
        assert all(task["finished"] == 0 for task in client.get("/tasks").json())

    def test_bulk_put_unknown_identifier_returns_404(self, client):
        response = client.put("/tasks", json={"id": MISSING_ID, "finished": 1})

        assert response.status_code == 404

    def test_delete_returns_deleted_task_then_404(self, client):
        created = _create_task(client)

        response = client.delete(f"/tasks/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created
        assert client.get(f"/tasks/{created['id']}").status_code == 404
        assert client.delete(f"/tasks/{created['id']}").status_code == 404

    def test_task_may_reference_nonexistent_week(self, client):
        created = _create_task(client, yearweek="1999-W99")

        assert created["yearweek"] == "1999-W99"


def test_disconnected_store_returns_503(settings):
    client = TestClient(create_app(settings, MongoStore(settings)))

    response = client.get("/weeks")

    assert response.status_code == 503
    assert response.json()["error_code"] == 1


def test_health_reports_disconnected_store(settings):
    client = TestClient(create_app(settings, MongoStore(settings)))

    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "degraded"
    assert data["database"] == "disconnected"


def test_root_reports_graphql_path(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["data"]["graphql"] == "/graphql"
