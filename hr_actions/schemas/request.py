# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hr_actions.models.enums import ActionTypeId, RequestStatus


class WireModel(BaseModel):
    """Base for everything that crosses the wire: camelCase on the outside."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Type-specific change fields (union over all action types)
# ---------------------------------------------------------------------------


class ChangeFields(WireModel):
    """Every old/new field any action type can carry. Unused ones stay None."""

    # Rate change / promotion
    old_rate: float | None = None
    new_rate: float | None = None
    old_rate_type: str | None = None
    new_rate_type: str | None = None
    premium_incentive: str | None = None
    old_job_title: str | None = None
    new_job_title: str | None = None
    new_responsibilities: str | None = None

    # Transfer
    old_department: str | None = None
    new_department_id: int | None = None
    new_department: str | None = None
    old_location: str | None = None
    new_location: str | None = None
    old_supervisor: str | None = None
    new_supervisor: str | None = None
    old_classification: str | None = None
    new_classification: str | None = None

    # Status change
    old_employment_type: str | None = None
    new_employment_type: str | None = None
    old_marital_status: str | None = None
    new_marital_status: str | None = None

    # Personal info
    old_first_name: str | None = None
    new_first_name: str | None = None
    old_last_name: str | None = None
    new_last_name: str | None = None
    old_address: str | None = None
    new_address: str | None = None
    old_city: str | None = None
    new_city: str | None = None
    old_state: str | None = None
    new_state: str | None = None
    old_zip_code: str | None = None
    new_zip_code: str | None = None
    old_phone: str | None = None
    new_phone: str | None = None
    old_email: str | None = None
    new_email: str | None = None

    # Insurance
    health_insurance_change: str | None = None
    health_insurance_plan: str | None = None
    health_insurance_deduction: float | None = None
    dental_insurance_change: str | None = None
    dental_insurance_plan: str | None = None
    dental_insurance_deduction: float | None = None
    retirement_403b_enroll: str | None = None
    retirement_403b_deduction: float | None = None
    retirement_403b_type: str | None = None

    # Payroll deduction
    deduction_type: str | None = None
    deduction_action: str | None = None
    payroll_deduction_description: str | None = None
    payroll_deduction_amount: float | None = None
    payroll_deduction_frequency: str | None = None
    deduction_end_date: date | None = None
    recipient_name: str | None = None
    recipient_account_number: str | None = None
    recipient_address: str | None = None
    court_order_number: str | None = None

    # Leave of absence
    leave_type: str | None = None
    leave_paid_status: str | None = None
    leave_end_date: date | None = None
    leave_days: float | None = None
    leave_return_date: date | None = None
    leave_last_day_worked: date | None = None
    leave_excused: bool | None = None
    leave_doctor_slip_received: bool | None = None
    leave_relation_to_deceased: str | None = None
    leave_accommodation: str | None = None
    work_coverage_plan: str | None = None


CHANGE_FIELD_NAMES: tuple[str, ...] = tuple(ChangeFields.model_fields)

NUMBER_FIELDS = frozenset(
    {
        "old_rate",
        "new_rate",
        "health_insurance_deduction",
        "dental_insurance_deduction",
        "retirement_403b_deduction",
        "payroll_deduction_amount",
        "leave_days",
    }
)
INTEGER_FIELDS = frozenset({"new_department_id"})
BOOLEAN_FIELDS = frozenset({"leave_excused", "leave_doctor_slip_received"})
DATE_FIELDS = frozenset(
    {"deduction_end_date", "leave_end_date", "leave_return_date", "leave_last_day_worked"}
)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitRequestPayload(ChangeFields):
    """Flat submission payload with the fixed key set for all action types."""

    action_type_id: ActionTypeId
    reason: str = Field(min_length=1)
    notes: str | None = None
    effective_date: date | None = None


class ApprovePayload(WireModel):
    """Request body for approving a request."""

    comments: str | None = Field(default=None, max_length=1000)
    expected_version: int | None = None


class RejectPayload(WireModel):
    """Request body for rejecting a request."""

    rejection_reason: str = Field(max_length=1000)
    expected_version: int | None = None


class AddNotesPayload(WireModel):
    """Request body for appending reviewer notes."""

    notes: str = Field(max_length=2000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class EmployeeSummary(WireModel):
    """Who the request is for."""

    employee_id: uuid.UUID
    full_name: str | None = None


class HRActionRequestResponse(ChangeFields):
    """A submitted request as HR views see it."""

    request_id: uuid.UUID
    request_number: str
    action_type_id: int
    action_type: str
    status: RequestStatus
    employee: EmployeeSummary
    reason: str
    notes: str | None = None
    effective_date: date | None = None
    request_date: datetime
    decided_at: datetime | None = None
    decided_by: uuid.UUID | None = None
    approval_comments: str | None = None
    rejection_reason: str | None = None
    review_notes: str | None = None
    version: int = 1


class RequestListResponse(WireModel):
    """Paginated list of HR action requests."""

    items: list[HRActionRequestResponse]
    total: int


class ActionTypeResponse(WireModel):
    """One catalog entry."""

    id: int
    name: str
    description: str
    effective_date_label: str
