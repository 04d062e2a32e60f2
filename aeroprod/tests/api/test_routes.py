"""
End-to-end tests for the HTTP API.

Uses the ``client`` fixture, which serves a fresh application backed by a
temporary data directory.
"""

import pytest
from fastapi.testclient import TestClient

from aeroprod.api.main import create_app

ADMIN = {"X-Actor-Id": "admin"}

AIRCRAFT = {
    "code": "AC1",
    "model": "E195-E2",
    "category": "COMMERCIAL",
    "capacity": 132,
    "range_km": 4800,
}


@pytest.fixture
def aircraft(client):
    response = client.post("/aircraft", json=AIRCRAFT)
    assert response.status_code == 201
    return response.json()


class TestHealth:
    def test_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "aircraft": 0, "corrupted_records": 0}

    def test_degraded_with_corrupted_records(self, settings):
        settings.DATA_DIR.mkdir(parents=True)
        (settings.DATA_DIR / "aircraft.jsonl").write_text("garbage\n", encoding="utf-8")

        with TestClient(create_app(settings)) as client:
            body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["corrupted_records"] == 1


class TestAircraftRoutes:
    def test_register_and_fetch(self, client, aircraft):
        assert aircraft["code"] == "AC1"
        assert aircraft["parts"] == []

        response = client.get("/aircraft/AC1")
        assert response.status_code == 200
        assert response.json()["model"] == "E195-E2"
        assert [a["code"] for a in client.get("/aircraft").json()] == ["AC1"]

    def test_duplicate_code(self, client, aircraft):
        response = client.post("/aircraft", json=AIRCRAFT)

        assert response.status_code == 409
        assert response.json()["code"] == "DuplicateCodeError"

    def test_validation_error(self, client):
        response = client.post("/aircraft", json={**AIRCRAFT, "capacity": -1})

        assert response.status_code == 422

    def test_not_found(self, client):
        response = client.get("/aircraft/NOPE")

        assert response.status_code == 404
        assert response.json() == {
            "type": "not_found",
            "code": "AircraftNotFoundError",
            "message": "Aircraft not found: NOPE",
            "details": {"aircraft_code": "NOPE"},
        }

    def test_update_and_delete(self, client, aircraft):
        response = client.patch("/aircraft/AC1", json={"range_km": 5000})
        assert response.status_code == 200
        assert response.json()["range_km"] == 5000
        assert response.json()["capacity"] == 132

        assert client.delete("/aircraft/AC1").status_code == 204
        assert client.get("/aircraft/AC1").status_code == 404

    def test_report(self, client, aircraft):
        response = client.post("/aircraft/AC1/report")

        assert response.status_code == 201
        body = response.json()
        assert body["path"].endswith("report_AC1.txt")
        assert body["content"].splitlines()[0] == "Aircraft: AC1 - E195-E2 (COMMERCIAL)"


class TestChildRoutes:
    def test_parts(self, client, aircraft):
        part = {"name": "Wing", "category": "IMPORTED", "supplier": "Acme"}

        response = client.post("/aircraft/AC1/parts", json=part)
        assert response.status_code == 201
        assert response.json()["index"] == 0

        response = client.put("/aircraft/AC1/parts/0/status", json={"status": "INSTALLED"})
        assert response.json()["part"]["status"] == "INSTALLED"

        assert client.get("/aircraft/AC1/parts/1").status_code == 404
        assert client.delete("/aircraft/AC1/parts/0").status_code == 204
        assert client.get("/aircraft/AC1/parts").json() == []

    def test_invalid_index_body(self, client, aircraft):
        response = client.get("/aircraft/AC1/tests/3")

        assert response.status_code == 404
        assert response.json()["type"] == "invalid_index"
        assert response.json()["details"] == {"collection": "test", "index": 3, "size": 0}

    def test_assign_requires_known_employee(self, client, aircraft):
        client.post("/aircraft/AC1/stages", json={"name": "Assembly", "deadline_days": 5})

        response = client.post("/aircraft/AC1/stages/0/employees", json={"employee_id": "ghost"})
        assert response.status_code == 404

        response = client.post("/aircraft/AC1/stages/0/employees", json={"employee_id": "admin"})
        assert response.status_code == 200
        assert response.json()["stage"]["employee_ids"] == ["admin"]


class TestProductionScenario:
    def test_release_gate(self, client, aircraft):
        for name in ["Assembly", "Paint"]:
            client.post("/aircraft/AC1/stages", json={"name": name, "deadline_days": 10})

        response = client.post("/aircraft/AC1/stages/1/advance")
        assert response.status_code == 409
        assert response.json()["code"] == "PreviousStageIncompleteError"

        assert client.post("/aircraft/AC1/stages/0/advance").status_code == 200
        assert client.post("/aircraft/AC1/stages/0/complete").status_code == 200
        assert client.post("/aircraft/AC1/stages/1/advance").status_code == 200

        client.post("/aircraft/AC1/tests", json={"kind": "ELECTRICAL", "outcome": "REJECTED"})
        response = client.post("/aircraft/AC1/stages/1/complete")
        assert response.status_code == 409
        assert response.json()["details"]["rejected_kinds"] == ["ELECTRICAL"]

        release = client.get("/aircraft/AC1/release").json()
        assert release["can_complete_final_stage"] is False
        assert release["rejected_kinds"] == ["ELECTRICAL"]

        client.post("/aircraft/AC1/tests", json={"kind": "ELECTRICAL", "outcome": "APPROVED"})
        response = client.post("/aircraft/AC1/stages/1/complete")
        assert response.status_code == 200
        assert response.json()["stage"]["status"] == "DONE"
        assert client.get("/aircraft/AC1/release").json()["is_released"] is True

    def test_empty_pipeline(self, client, aircraft):
        response = client.post("/aircraft/AC1/stages/0/advance")

        assert response.status_code == 404
        assert response.json()["type"] == "invalid_index"


class TestUserRoutes:
    EMPLOYEE = {
        "id": "e1",
        "name": "Ana",
        "username": "ana",
        "password": "s3cret",
        "permission_level": "ENGINEER",
    }

    def test_login(self, client):
        response = client.post("/auth/login", json={"username": "admin", "password": "admin-secret"})
        assert response.status_code == 200
        assert response.json()["id"] == "admin"
        assert "password_hash" not in response.json()

        response = client.post("/auth/login", json={"username": "admin", "password": "nope"})
        assert response.status_code == 401

    def test_create_requires_actor_header(self, client):
        assert client.post("/users", json=self.EMPLOYEE).status_code == 422

    def test_admin_creates_and_operator_is_denied(self, client):
        response = client.post("/users", json=self.EMPLOYEE, headers=ADMIN)
        assert response.status_code == 201
        assert response.json()["permission_level"] == "ENGINEER"

        response = client.post(
            "/users",
            json={**self.EMPLOYEE, "id": "e2", "username": "bia"},
            headers={"X-Actor-Id": "e1"},
        )
        assert response.status_code == 403
        assert response.json()["type"] == "permission"

    def test_update_and_delete(self, client):
        client.post("/users", json=self.EMPLOYEE, headers=ADMIN)

        response = client.patch("/users/e1", json={"phone": "555"}, headers={"X-Actor-Id": "e1"})
        assert response.status_code == 200
        assert response.json()["phone"] == "555"

        assert client.delete("/users/admin", headers={"X-Actor-Id": "e1"}).status_code == 403
        assert client.delete("/users/admin", headers=ADMIN).status_code == 409
        assert client.delete("/users/e1", headers=ADMIN).status_code == 204
        assert [u["id"] for u in client.get("/users").json()] == ["admin"]
