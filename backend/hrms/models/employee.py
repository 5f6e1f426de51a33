"""Employee record models.

Field names are snake_case in Python and camelCase on the wire and in storage.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(CamelModel):
    """Step 1 of the registration form."""

    first_name: str = Field(min_length=2)
    surname: str = Field(min_length=2)
    date_of_birth: str = Field(min_length=1)
    gender: Gender


class JobDetails(CamelModel):
    """Step 2 of the registration form."""

    position: str = Field(min_length=2)
    department: str = Field(min_length=2)
    salary: float = Field(gt=0, allow_inf_nan=False)
    start_date: str = Field(min_length=1)


class ContactInfo(CamelModel):
    """Step 3 of the registration form."""

    email: str = Field(pattern=EMAIL_PATTERN)
    phone_number: str = Field(min_length=10)
    address: str = Field(min_length=5)
    emergency_contact_name: str = Field(min_length=2)
    emergency_contact_phone: str = Field(min_length=10)


class EmployeeCreate(ContactInfo, JobDetails, PersonalInfo):
    """An employee record before the store assigns its identifier."""


class Employee(EmployeeCreate):
    id: str


class EmployeeAvailability(CamelModel):
    email: str
    available: bool


class DashboardSummary(CamelModel):
    total: int
    by_department: dict[str, int] = Field(default_factory=dict)
