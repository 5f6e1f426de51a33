from __future__ import annotations

from typing import Any

import pytest
from starlette.testclient import TestClient

from hrms.core.storage import InMemoryStorage
from hrms.main import app
from hrms.models.employee import EmployeeCreate
from hrms.services.employee_store import DEFAULT_STORAGE_KEY, EmployeeStore, employee_store


def _employee_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "firstName": "Ann",
        "surname": "Archer",
        "dateOfBirth": "1990-04-12",
        "gender": "Female",
        "position": "Engineer",
        "department": "Engineering",
        "salary": 50000,
        "startDate": "2021-03-01",
        "email": "ann@x.com",
        "phoneNumber": "0123456789",
        "address": "1 Main Street",
        "emergencyContactName": "Bob Archer",
        "emergencyContactPhone": "0987654321",
    }
    data.update(overrides)
    return data


@pytest.fixture
def employee_data():
    return _employee_data


@pytest.fixture
def make_employee():
    def _make(**overrides: Any) -> EmployeeCreate:
        return EmployeeCreate.model_validate(_employee_data(**overrides))

    return _make


@pytest.fixture
def memory_storage():
    return InMemoryStorage()


@pytest.fixture
def store(memory_storage):
    return EmployeeStore(memory_storage, key=DEFAULT_STORAGE_KEY)


@pytest.fixture
def app_storage():
    storage = InMemoryStorage()
    employee_store.storage = storage
    employee_store.key = DEFAULT_STORAGE_KEY
    employee_store.initialized = True
    yield storage
    employee_store.close()


@pytest.fixture
def client(app_storage):
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client():
    employee_store.close()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
