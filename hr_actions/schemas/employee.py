# ruff: noqa: TC001
from __future__ import annotations

from pydantic import Field

from hr_actions.models.enums import EmploymentType, MaritalStatus, PayFrequency
from hr_actions.schemas.request import WireModel
from hr_actions.services.employee import EmployeeSnapshot


class UpsertEmployeeRequest(WireModel):
    """Request body for upserting an employee in the stub provider."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    salary: float | None = Field(default=None, ge=0)
    hourly_rate: float | None = Field(default=None, ge=0)
    pay_frequency: PayFrequency = PayFrequency.SALARY
    job_title: str | None = None
    department: str | None = None
    department_id: int | None = None
    employment_type: EmploymentType | None = None
    marital_status: MaritalStatus | None = None
    supervisor: str | None = None
    location: str | None = None


class EmployeeListResponse(WireModel):
    """List of employees."""

    items: list[EmployeeSnapshot]
    total: int
