from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Path, Query

from hrms.models.registration import StepValidationResponse
from hrms.services.employee_store import employee_store
from hrms.services.registration_wizard import WizardStep, validate_step

router = APIRouter(prefix="/registration", tags=["registration"])


@router.post("/steps/{step}/validate", response_model=StepValidationResponse)
def validate_registration_step(
    step: int = Path(..., ge=1, le=len(WizardStep)),
    data: dict[str, Any] = Body(...),
    employee_id: str | None = Query(None, alias="employeeId"),
):
    errors = validate_step(step, data, store=employee_store, employee_id=employee_id)
    return StepValidationResponse(step=step, valid=not errors, errors=errors)
