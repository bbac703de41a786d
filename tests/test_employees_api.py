"""HTTP tests for the employee endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from conftest import ADMIN_ID, employee_payload
from services.authorization import WriteGrant
from services.employee_service import EmployeeService

BASE_URL = "/api/v1/employees"
MISSING_ID = "7d9f8c2e-0d7b-4f55-9f44-4c1d1e0f5a10"


def _seed(db_session: Session, **overrides) -> str:
    employee = EmployeeService(db_session).create(employee_payload(**overrides), WriteGrant(editor_id=ADMIN_ID))
    return str(employee.id)


class TestHealth:
    def test_health(self, admin_client: TestClient) -> None:
        response = admin_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCreateEndpoint:
    def test_scenario_create(self, admin_client: TestClient) -> None:
        response = admin_client.post(BASE_URL, json=employee_payload(email="JO@X.COM"))

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Employee created successfully"
        data = body["data"]
        assert data["email"] == "jo@x.com"
        assert data["status"] == "Active"
        assert data["firstName"] == "Jo"
        assert data["dateOfJoining"] == "2024-01-01"
        assert data["createdBy"] == ADMIN_ID
        assert data["creator"] == {"id": ADMIN_ID, "username": "admin", "email": "admin@example.com"}
        assert data["updatedBy"] is None
        assert data["address"] is None

    def test_address_round_trips_in_camel_case(self, admin_client: TestClient) -> None:
        address = {"street": "1 Main", "city": "Pune", "state": "MH", "zipCode": "411001"}

        response = admin_client.post(BASE_URL, json=employee_payload(address=address))

        assert response.status_code == 201
        assert response.json()["data"]["address"] == address

    def test_validation_error_envelope(self, admin_client: TestClient) -> None:
        response = admin_client.post(BASE_URL, json=employee_payload(phone="12345", department="Legal"))

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Validation error",
            "errors": ["Please enter a valid 10-digit phone number", "Legal is not a valid department"],
        }
        assert admin_client.get(BASE_URL).json()["count"] == 0

    def test_duplicate_email(self, admin_client: TestClient) -> None:
        first = admin_client.post(BASE_URL, json=employee_payload(email="dup@example.com"))
        second = admin_client.post(
            BASE_URL,
            json=employee_payload(email="DUP@example.com", firstName="Other", department="Sales"),
        )

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["message"] == "Employee with this email already exists"

    def test_oversized_salary_is_a_validation_error(self, admin_client: TestClient) -> None:
        response = admin_client.post(BASE_URL, json=employee_payload(salary=10**400))

        assert response.status_code == 400
        assert response.json()["errors"] == ["Salary must be less than 10000000000"]

    def test_non_object_body_is_rejected(self, admin_client: TestClient) -> None:
        response = admin_client.post(BASE_URL, json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"

    def test_regular_user_forbidden_even_with_valid_payload(self, user_client: TestClient) -> None:
        response = user_client.post(BASE_URL, json=employee_payload())

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Admin access required"}
        assert user_client.get(BASE_URL).json()["count"] == 0


class TestReadEndpoints:
    def test_list_envelope(self, user_client: TestClient, db_session: Session) -> None:
        older = _seed(db_session, email="older@example.com")
        newer = _seed(db_session, email="newer@example.com")

        response = user_client.get(BASE_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert [e["id"] for e in body["data"]] == [newer, older]

    def test_get_one(self, user_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)

        response = user_client.get(f"{BASE_URL}/{employee_id}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"]["id"] == employee_id

    @pytest.mark.parametrize("employee_id", [MISSING_ID, "not-an-id", "42"])
    def test_get_missing_or_malformed(self, user_client: TestClient, employee_id: str) -> None:
        response = user_client.get(f"{BASE_URL}/{employee_id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee not found"}

    def test_search(self, user_client: TestClient, db_session: Session) -> None:
        engineer = _seed(db_session, email="ann@example.com", position="Engineer")
        lead = _seed(
            db_session,
            email="bob@example.com",
            department="Engineering",
            position="Engineering Lead",
            status="On Leave",
        )
        _seed(db_session, email="cat@example.com", department="Finance", position="Accountant")

        by_text = user_client.get(f"{BASE_URL}/search", params={"text": "eng"})
        by_alias = user_client.get(f"{BASE_URL}/search", params={"query": "ENG"})
        combined = user_client.get(
            f"{BASE_URL}/search",
            params={"text": "eng", "department": "Engineering", "status": "On Leave"},
        )
        nothing = user_client.get(f"{BASE_URL}/search", params={"text": "zzz"})
        everything = user_client.get(f"{BASE_URL}/search")

        assert {e["id"] for e in by_text.json()["data"]} == {engineer, lead}
        assert {e["id"] for e in by_alias.json()["data"]} == {engineer, lead}
        assert [e["id"] for e in combined.json()["data"]] == [lead]
        assert nothing.status_code == 200
        assert nothing.json() == {"success": True, "count": 0, "data": []}
        assert everything.json()["count"] == 3

    def test_blank_text_falls_back_to_query(self, user_client: TestClient, db_session: Session) -> None:
        engineer = _seed(db_session, email="ann@example.com", position="Engineer")
        _seed(db_session, email="cat@example.com", department="Finance", position="Accountant")

        response = user_client.get(f"{BASE_URL}/search", params={"text": " ", "query": "eng"})

        assert [e["id"] for e in response.json()["data"]] == [engineer]

    def test_search_rejects_unknown_department(self, user_client: TestClient) -> None:
        response = user_client.get(f"{BASE_URL}/search", params={"department": "Legal"})

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"


class TestUpdateEndpoint:
    def test_update(self, admin_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)
        before = admin_client.get(f"{BASE_URL}/{employee_id}").json()["data"]

        response = admin_client.put(f"{BASE_URL}/{employee_id}", json={"position": "Lead", "salary": 1500})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Employee updated successfully"
        assert body["data"]["position"] == "Lead"
        assert body["data"]["salary"] == 1500
        assert body["data"]["updatedBy"] == ADMIN_ID
        assert body["data"]["updater"]["username"] == "admin"
        assert body["data"]["createdAt"] == before["createdAt"]
        assert body["data"]["updatedAt"] != before["updatedAt"]

    def test_update_rejects_immutable_fields(self, admin_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)

        response = admin_client.put(f"{BASE_URL}/{employee_id}", json={"id": MISSING_ID, "createdBy": 2})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "id is not an updatable field",
            "createdBy is not an updatable field",
        ]

    def test_update_invalid_merge(self, admin_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)

        response = admin_client.put(f"{BASE_URL}/{employee_id}", json={"email": "broken"})

        assert response.status_code == 400
        assert response.json()["errors"] == ["Please enter a valid email"]

    def test_null_status_keeps_stored_status(self, admin_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session, status="Inactive")

        response = admin_client.put(f"{BASE_URL}/{employee_id}", json={"status": None})

        assert response.status_code == 400
        assert response.json()["errors"] == ["Status is required"]
        assert admin_client.get(f"{BASE_URL}/{employee_id}").json()["data"]["status"] == "Inactive"

    def test_update_missing(self, admin_client: TestClient) -> None:
        response = admin_client.put(f"{BASE_URL}/{MISSING_ID}", json={"position": "Lead"})

        assert response.status_code == 404

    def test_update_forbidden_for_user(self, user_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)

        response = user_client.put(f"{BASE_URL}/{employee_id}", json={"position": "Lead"})

        assert response.status_code == 403
        assert user_client.get(f"{BASE_URL}/{employee_id}").json()["data"]["position"] == "Dev"


class TestDeleteEndpoint:
    def test_delete(self, admin_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)

        response = admin_client.delete(f"{BASE_URL}/{employee_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Employee deleted successfully"}
        assert admin_client.get(f"{BASE_URL}/{employee_id}").status_code == 404

    def test_delete_missing(self, admin_client: TestClient) -> None:
        assert admin_client.delete(f"{BASE_URL}/{MISSING_ID}").status_code == 404

    def test_delete_forbidden_for_user(self, user_client: TestClient, db_session: Session) -> None:
        employee_id = _seed(db_session)

        response = user_client.delete(f"{BASE_URL}/{employee_id}")

        assert response.status_code == 403
        assert user_client.get(f"{BASE_URL}/{employee_id}").status_code == 200


class TestUnexpectedFailures:
    def test_store_failure_returns_diagnostic(self, user_client: TestClient, monkeypatch) -> None:
        def explode(self):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(EmployeeService, "list_all", explode)

        response = user_client.get(BASE_URL)

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Server error", "error": "connection reset"}
