"""Employee record store.

The whole collection is one JSON array stored under a single key. Every
mutation reads the array, changes it in memory and writes the whole array back.
"""

from __future__ import annotations

import logging
import secrets
import string
import threading
import time
from collections import Counter

from pydantic import TypeAdapter, ValidationError

from hrms.core.config import Settings
from hrms.core.storage import BlobStorage, FileStorage, StorageUnavailableError
from hrms.models.employee import DashboardSummary, Employee, EmployeeCreate

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "hrms_employees"

_ID_ALPHABET = string.digits + string.ascii_uppercase
_ID_SUFFIX_LENGTH = 7

_EMPLOYEE_LIST = TypeAdapter(list[Employee])


class EmployeeStoreError(Exception):
    """Base error for employee store operations."""


class DuplicateEmailError(EmployeeStoreError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"An employee with email '{email}' already exists")


def generate_employee_id(existing: set[str] | None = None) -> str:
    """Return an id like ``EMP-1718000000000-K3J9Q2A`` not present in *existing*."""
    existing = existing or set()
    while True:
        suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
        candidate = f"EMP-{time.time_ns() // 1_000_000}-{suffix}"
        if candidate not in existing:
            return candidate


def _email_taken(employees: list[Employee], email: str, exclude_id: str | None) -> bool:
    wanted = email.lower()
    return any(emp.email.lower() == wanted for emp in employees if exclude_id is None or emp.id != exclude_id)


class EmployeeStore:
    def __init__(self, storage: BlobStorage | None = None, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage: BlobStorage | None = storage
        self.key = key
        self.initialized: bool = storage is not None
        self._lock = threading.RLock()

    def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.STORAGE_PATH:
            logger.warning("STORAGE_PATH not set, employee records will not be persisted")
            return

        self.storage = FileStorage(settings.STORAGE_PATH)
        self.key = settings.STORAGE_KEY
        self.initialized = True
        logger.info("EmployeeStore initialized (path=%s, key=%s)", settings.STORAGE_PATH, self.key)

    def close(self) -> None:
        self.storage = None
        self.initialized = False

    def _load(self) -> list[Employee]:
        if self.storage is None:
            return []

        try:
            blob = self.storage.load(self.key)
        except StorageUnavailableError:
            logger.warning("Storage unavailable, reading employees as empty", exc_info=True)
            return []

        if not blob:
            return []

        try:
            return _EMPLOYEE_LIST.validate_json(blob)
        except ValidationError:
            logger.exception("Stored employee data under key=%s is corrupt, treating as empty", self.key)
            return []

    def _save(self, employees: list[Employee]) -> None:
        if self.storage is None:
            logger.debug("No storage configured, skipping save of %d employees", len(employees))
            return

        blob = _EMPLOYEE_LIST.dump_json(employees, by_alias=True).decode("utf-8")
        try:
            self.storage.save(self.key, blob)
        except (StorageUnavailableError, OSError):
            logger.exception("Error saving employees under key=%s", self.key)

    def list_all(self) -> list[Employee]:
        with self._lock:
            return self._load()

    def find_by_id(self, employee_id: str) -> Employee | None:
        with self._lock:
            return next((emp for emp in self._load() if emp.id == employee_id), None)

    def add(self, data: EmployeeCreate) -> Employee:
        with self._lock:
            employees = self._load()
            new_id = generate_employee_id({emp.id for emp in employees})
            employee = Employee.model_validate({**data.model_dump(exclude={"id"}), "id": new_id})
            self._save([*employees, employee])
            logger.info("Added employee %s", employee.id)
            return employee

    def update(self, employee: Employee) -> list[Employee] | None:
        with self._lock:
            employees = self._load()
            index = next((i for i, emp in enumerate(employees) if emp.id == employee.id), None)
            if index is None:
                logger.info("Update skipped, employee %s not found", employee.id)
                return None

            updated = list(employees)
            updated[index] = employee
            self._save(updated)
            logger.info("Updated employee %s", employee.id)
            return updated

    def remove(self, employee_id: str) -> list[Employee]:
        with self._lock:
            employees = self._load()
            remaining = [emp for emp in employees if emp.id != employee_id]
            self._save(remaining)
            if len(remaining) != len(employees):
                logger.info("Removed employee %s", employee_id)
            return remaining

    def is_email_unique(self, email: str, exclude_id: str | None = None) -> bool:
        with self._lock:
            return not _email_taken(self._load(), email, exclude_id)

    def create_employee(self, data: EmployeeCreate) -> Employee:
        """Add *data* unless its email is already registered."""
        with self._lock:
            if not self.is_email_unique(data.email):
                raise DuplicateEmailError(data.email)
            return self.add(data)

    def update_employee(self, employee: Employee) -> Employee | None:
        """Replace the stored record with the same id.

        Returns ``None`` if no such record exists. Raises
        ``DuplicateEmailError`` if another record already uses the new email.
        """
        with self._lock:
            if self.find_by_id(employee.id) is None:
                return None
            if not self.is_email_unique(employee.email, exclude_id=employee.id):
                raise DuplicateEmailError(employee.email)
            self.update(employee)
            return employee

    def summary(self) -> DashboardSummary:
        employees = self.list_all()
        by_department = Counter(emp.department for emp in employees)
        return DashboardSummary(total=len(employees), by_department=dict(by_department))

    def check_storage(self) -> bool:
        if self.storage is None:
            return False
        check = getattr(self.storage, "check", None)
        if check is not None:
            return check()
        try:
            self.storage.load(self.key)
        except StorageUnavailableError:
            logger.exception("Storage check failed")
            return False
        return True


employee_store = EmployeeStore()
