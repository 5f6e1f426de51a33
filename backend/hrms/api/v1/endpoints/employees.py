from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status

from hrms.models.employee import DashboardSummary, Employee, EmployeeAvailability, EmployeeCreate
from hrms.services.employee_store import DuplicateEmailError, employee_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


def _conflict(err: DuplicateEmailError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Employee with email '{err.email}' already exists",
    )


@router.get("", response_model=list[Employee])
def list_employees():
    try:
        return employee_store.list_all()
    except Exception as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees",
        ) from err


@router.get("/summary", response_model=DashboardSummary)
def employee_summary():
    return employee_store.summary()


@router.get("/email-availability", response_model=EmployeeAvailability)
def email_availability(
    email: str = Query(..., min_length=1),
    exclude_id: str | None = Query(None, alias="excludeId"),
):
    return EmployeeAvailability(email=email, available=employee_store.is_email_unique(email, exclude_id=exclude_id))


@router.get("/{employee_id}", response_model=Employee)
def get_employee(employee_id: str):
    employee = employee_store.find_by_id(employee_id)
    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )
    return employee


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
def create_employee(payload: EmployeeCreate):
    try:
        return employee_store.create_employee(payload)
    except DuplicateEmailError as err:
        raise _conflict(err) from err
    except Exception as err:
        logger.exception("Failed to create employee")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create employee",
        ) from err


@router.put("/{employee_id}", response_model=Employee)
def update_employee(employee_id: str, payload: EmployeeCreate):
    employee = Employee.model_validate({**payload.model_dump(), "id": employee_id})
    try:
        updated = employee_store.update_employee(employee)
    except DuplicateEmailError as err:
        raise _conflict(err) from err
    except Exception as err:
        logger.exception("Failed to update employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update employee",
        ) from err

    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )
    return updated


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(employee_id: str):
    employee_store.remove(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
