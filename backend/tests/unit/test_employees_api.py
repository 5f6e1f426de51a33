from __future__ import annotations

import json
from unittest.mock import patch


def _create(client, employee_data, **overrides):
    response = client.post("/api/v1/employees", json=employee_data(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_list_employees_empty(client):
    response = client.get("/api/v1/employees")
    assert response.status_code == 200
    assert response.json() == []


def test_create_employee_returns_camel_case_record(client, employee_data):
    data = _create(client, employee_data)

    assert data["id"].startswith("EMP-")
    assert data["firstName"] == "Ann"
    assert data["emergencyContactName"] == "Bob Archer"
    assert data["salary"] == 50000

    listed = client.get("/api/v1/employees").json()
    assert [e["id"] for e in listed] == [data["id"]]


def test_create_employee_validation_error(client, employee_data):
    response = client.post("/api/v1/employees", json=employee_data(salary=0, email="nope"))
    assert response.status_code == 422

    fields = {err["loc"][-1] for err in response.json()["detail"]}
    assert {"salary", "email"} <= fields


def test_create_employee_duplicate_email(client, employee_data):
    _create(client, employee_data, email="a@x.com")

    response = client.post("/api/v1/employees", json=employee_data(email="A@X.COM"))
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_get_employee(client, employee_data):
    created = _create(client, employee_data)

    response = client.get(f"/api/v1/employees/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_employee_not_found(client):
    response = client.get("/api/v1/employees/EMP-0-MISSING")
    assert response.status_code == 404


def test_update_employee(client, employee_data):
    created = _create(client, employee_data)

    response = client.put(f"/api/v1/employees/{created['id']}", json=employee_data(salary=60000))
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]
    assert client.get("/api/v1/employees").json()[0]["salary"] == 60000


def test_update_employee_ignores_body_id(client, employee_data):
    created = _create(client, employee_data)

    response = client.put(
        f"/api/v1/employees/{created['id']}",
        json={**employee_data(position="Lead"), "id": "EMP-0-HIJACK"},
    )
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


def test_update_employee_not_found(client, employee_data):
    response = client.put("/api/v1/employees/EMP-0-MISSING", json=employee_data())
    assert response.status_code == 404
    assert client.get("/api/v1/employees").json() == []


def test_update_employee_duplicate_email(client, employee_data):
    _create(client, employee_data, email="a@x.com")
    second = _create(client, employee_data, email="b@x.com")

    response = client.put(f"/api/v1/employees/{second['id']}", json=employee_data(email="a@X.com"))
    assert response.status_code == 409


def test_delete_employee_is_idempotent(client, employee_data):
    created = _create(client, employee_data)

    assert client.delete(f"/api/v1/employees/{created['id']}").status_code == 204
    assert client.delete(f"/api/v1/employees/{created['id']}").status_code == 204
    assert client.get(f"/api/v1/employees/{created['id']}").status_code == 404


def test_email_availability(client, employee_data):
    created = _create(client, employee_data, email="B@X.com")

    taken = client.get("/api/v1/employees/email-availability", params={"email": "b@x.com"}).json()
    assert taken == {"email": "b@x.com", "available": False}

    own = client.get(
        "/api/v1/employees/email-availability",
        params={"email": "b@x.com", "excludeId": created["id"]},
    ).json()
    assert own["available"] is True


def test_summary(client, employee_data):
    _create(client, employee_data, email="a@x.com", department="Sales")
    _create(client, employee_data, email="b@x.com", department="Sales")
    _create(client, employee_data, email="c@x.com", department="Engineering")

    response = client.get("/api/v1/employees/summary")
    assert response.status_code == 200
    assert response.json() == {"total": 3, "byDepartment": {"Sales": 2, "Engineering": 1}}


def test_list_employees_unexpected_error(client):
    with patch("hrms.api.v1.endpoints.employees.employee_store.list_all", side_effect=RuntimeError("boom")):
        response = client.get("/api/v1/employees")
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to retrieve employees"


def test_unconfigured_store_lists_empty(unconfigured_client, employee_data):
    response = unconfigured_client.post("/api/v1/employees", json=employee_data())
    assert response.status_code == 201

    assert unconfigured_client.get("/api/v1/employees").json() == []


def test_validate_registration_step(client):
    response = client.post(
        "/api/v1/registration/steps/1/validate",
        json={"firstName": "A", "surname": "Archer", "dateOfBirth": "1990-04-12", "gender": "Female"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["step"] == 1
    assert data["valid"] is False
    assert [e["field"] for e in data["errors"]] == ["firstName"]


def test_validate_registration_contact_step_checks_uniqueness(client, employee_data):
    created = _create(client, employee_data)
    contact = {k: v for k, v in employee_data().items() if k in {
        "email", "phoneNumber", "address", "emergencyContactName", "emergencyContactPhone",
    }}

    data = client.post("/api/v1/registration/steps/3/validate", json=contact).json()
    assert data["valid"] is False
    assert data["errors"][0]["field"] == "email"

    data = client.post(
        "/api/v1/registration/steps/3/validate",
        json=contact,
        params={"employeeId": created["id"]},
    ).json()
    assert data["valid"] is True


def test_validate_registration_step_out_of_range(client):
    response = client.post("/api/v1/registration/steps/4/validate", json={})
    assert response.status_code == 422


def test_create_employee_infinite_salary_rejected_and_records_kept(client, employee_data):
    first = _create(client, employee_data, email="a@x.com")
    second = _create(client, employee_data, email="b@x.com")

    body = json.dumps(employee_data(email="c@x.com")).replace('"salary": 50000', '"salary": 1e309')
    response = client.post(
        "/api/v1/employees",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422

    listed = client.get("/api/v1/employees").json()
    assert [e["id"] for e in listed] == [first["id"], second["id"]]
