"""Three-step employee registration/edit wizard."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any

from pydantic import ValidationError

from hrms.models.employee import CamelModel, ContactInfo, Employee, EmployeeCreate, JobDetails, PersonalInfo
from hrms.models.registration import FieldError
from hrms.services.employee_store import DuplicateEmailError, EmployeeStore

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "This email is already registered."


class WizardStep(IntEnum):
    PERSONAL = 1
    JOB = 2
    CONTACT = 3


STEP_MODELS: dict[WizardStep, type[CamelModel]] = {
    WizardStep.PERSONAL: PersonalInfo,
    WizardStep.JOB: JobDetails,
    WizardStep.CONTACT: ContactInfo,
}

_ALIASES: dict[str, str] = {
    name: info.alias or name for model in STEP_MODELS.values() for name, info in model.model_fields.items()
}


class WizardValidationError(Exception):
    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


def _to_alias(name: str) -> str:
    return _ALIASES.get(name, name)


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors():
        field = _to_alias(str(err["loc"][0])) if err["loc"] else "__root__"
        errors.append(FieldError(field=field, message=err["msg"]))
    return errors


def _step_values(step: WizardStep, data: dict[str, Any]) -> dict[str, Any]:
    model = STEP_MODELS[step]
    values: dict[str, Any] = {}
    for name, info in model.model_fields.items():
        alias = info.alias or name
        if alias in data:
            values[alias] = data[alias]
        elif name in data:
            values[alias] = data[name]
    return values


def validate_step(
    step: WizardStep | int,
    data: dict[str, Any],
    store: EmployeeStore | None = None,
    employee_id: str | None = None,
) -> list[FieldError]:
    """Validate only the fields that belong to *step*.

    When a store is given, the contact step also checks that the email is not
    used by any record other than *employee_id*.
    """
    step = WizardStep(step)
    try:
        validated = STEP_MODELS[step].model_validate(_step_values(step, data))
    except ValidationError as e:
        return _field_errors(e)

    if store is not None and isinstance(validated, ContactInfo):
        if not store.is_email_unique(validated.email, exclude_id=employee_id):
            return [FieldError(field="email", message=DUPLICATE_EMAIL_MESSAGE)]
    return []


class RegistrationWizard:
    """Step 1 -> 2 -> 3 form state, gated by per-step validation.

    Passing an ``employee_id`` that exists puts the wizard in edit mode with
    the record's fields prefilled.
    """

    def __init__(self, store: EmployeeStore, employee_id: str | None = None) -> None:
        self.store = store
        self.step = WizardStep.PERSONAL
        self.data: dict[str, Any] = {}
        self.employee_id: str | None = None

        if employee_id:
            existing = store.find_by_id(employee_id)
            if existing is None:
                logger.warning("Employee %s not found, starting a new registration", employee_id)
            else:
                self.employee_id = existing.id
                self.data = existing.model_dump(by_alias=True, mode="json", exclude={"id"})

    @property
    def is_edit(self) -> bool:
        return self.employee_id is not None

    @property
    def is_last_step(self) -> bool:
        return self.step == WizardStep.CONTACT

    def set_fields(self, **values: Any) -> None:
        for name, value in values.items():
            self.data[_to_alias(name)] = value

    def validate_step(self, step: WizardStep | None = None) -> list[FieldError]:
        return validate_step(step or self.step, self.data)

    def next(self) -> list[FieldError]:
        errors = self.validate_step()
        if errors:
            return errors
        if not self.is_last_step:
            self.step = WizardStep(self.step + 1)
        return []

    def back(self) -> None:
        if self.step > WizardStep.PERSONAL:
            self.step = WizardStep(self.step - 1)

    def reset(self) -> None:
        self.step = WizardStep.PERSONAL
        self.data = {}
        self.employee_id = None

    def submit(self) -> Employee:
        errors = [error for step in WizardStep for error in self.validate_step(step)]
        if errors:
            raise WizardValidationError(errors)

        try:
            if self.is_edit:
                stored = self.store.update_employee(Employee.model_validate({**self.data, "id": self.employee_id}))
                if stored is None:
                    raise WizardValidationError(
                        [FieldError(field="id", message=f"Employee {self.employee_id} no longer exists.")]
                    )
            else:
                stored = self.store.create_employee(EmployeeCreate.model_validate(self.data))
        except DuplicateEmailError as e:
            raise WizardValidationError([FieldError(field="email", message=DUPLICATE_EMAIL_MESSAGE)]) from e

        logger.info("Wizard %s employee %s", "updated" if self.is_edit else "registered", stored.id)
        self.reset()
        return stored
