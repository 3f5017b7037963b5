# ruff: noqa: TC003
"""In-progress request drafts, one variant per action type.

Form values are stored as entered, so numbers and dates may still be strings
here; the validator reports bad values and the payload assembler coerces them.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Tag
from pydantic.alias_generators import to_camel

from hr_actions.models.enums import ActionTypeId

NumberInput = float | str | None
DateInput = date | str | None


class DraftBase(BaseModel):
    """Fields every action type carries."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    action_type_id: ActionTypeId
    reason: str = ""
    notes: str | None = None
    effective_date: DateInput = None


class RateChangeDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.RATE_CHANGE] = ActionTypeId.RATE_CHANGE
    old_rate: NumberInput = None
    old_rate_type: str | None = None
    new_rate: NumberInput = None
    new_rate_type: str | None = None
    premium_incentive: str | None = None


class TransferDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.TRANSFER] = ActionTypeId.TRANSFER
    old_department: str | None = None
    new_department_id: int | str | None = None
    new_department: str | None = None
    old_location: str | None = None
    new_location: str | None = None
    old_supervisor: str | None = None
    new_supervisor: str | None = None
    old_classification: str | None = None
    new_classification: str | None = None


class PromotionDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.PROMOTION] = ActionTypeId.PROMOTION
    old_job_title: str | None = None
    new_job_title: str | None = None
    old_rate: NumberInput = None
    old_rate_type: str | None = None
    new_rate: NumberInput = None
    new_rate_type: str | None = None
    old_department: str | None = None
    new_department: str | None = None
    new_responsibilities: str | None = None


class StatusChangeDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.STATUS_CHANGE] = ActionTypeId.STATUS_CHANGE
    old_employment_type: str | None = None
    new_employment_type: str | None = None
    old_marital_status: str | None = None
    new_marital_status: str | None = None
    old_classification: str | None = None
    new_classification: str | None = None


class PersonalInfoDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.PERSONAL_INFO] = ActionTypeId.PERSONAL_INFO
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


class InsuranceDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.INSURANCE] = ActionTypeId.INSURANCE
    health_insurance_change: str | None = None  # Enroll / Change / Cancel
    health_insurance_plan: str | None = None
    health_insurance_deduction: NumberInput = None
    dental_insurance_change: str | None = None
    dental_insurance_plan: str | None = None
    dental_insurance_deduction: NumberInput = None
    retirement_403b_enroll: str | None = None
    retirement_403b_deduction: NumberInput = None
    retirement_403b_type: str | None = None  # Percentage / Fixed


class PayrollDeductionDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.PAYROLL_DEDUCTION] = ActionTypeId.PAYROLL_DEDUCTION
    deduction_type: str | None = None
    deduction_action: str | None = None  # New / Modify / Stop
    payroll_deduction_description: str | None = None
    payroll_deduction_amount: NumberInput = None
    payroll_deduction_frequency: str | None = None
    deduction_end_date: DateInput = None
    recipient_name: str | None = None
    recipient_account_number: str | None = None
    recipient_address: str | None = None
    court_order_number: str | None = None


class LeaveOfAbsenceDraft(DraftBase):
    action_type_id: Literal[ActionTypeId.LEAVE_OF_ABSENCE] = ActionTypeId.LEAVE_OF_ABSENCE
    leave_type: str | None = None
    leave_paid_status: str | None = None
    leave_end_date: DateInput = None
    leave_days: NumberInput = None
    leave_return_date: DateInput = None
    leave_last_day_worked: DateInput = None
    leave_excused: bool | None = None
    leave_doctor_slip_received: bool | None = None
    leave_relation_to_deceased: str | None = None
    leave_accommodation: str | None = None
    work_coverage_plan: str | None = None


DRAFT_MODELS: dict[ActionTypeId, type[DraftBase]] = {
    ActionTypeId.RATE_CHANGE: RateChangeDraft,
    ActionTypeId.TRANSFER: TransferDraft,
    ActionTypeId.PROMOTION: PromotionDraft,
    ActionTypeId.STATUS_CHANGE: StatusChangeDraft,
    ActionTypeId.PERSONAL_INFO: PersonalInfoDraft,
    ActionTypeId.INSURANCE: InsuranceDraft,
    ActionTypeId.PAYROLL_DEDUCTION: PayrollDeductionDraft,
    ActionTypeId.LEAVE_OF_ABSENCE: LeaveOfAbsenceDraft,
}

RATE_DRAFTS = (RateChangeDraft, PromotionDraft)


def _draft_discriminator(v: Any) -> str:
    """Discriminate drafts by action type id."""
    if isinstance(v, dict):
        raw = v.get("action_type_id", v.get("actionTypeId"))
    else:
        raw = getattr(v, "action_type_id", None)
    try:
        return str(ActionTypeId(int(raw)).value)
    except (TypeError, ValueError):
        return "unknown"


RequestDraft = Annotated[
    Annotated[RateChangeDraft, Tag("1")]
    | Annotated[TransferDraft, Tag("2")]
    | Annotated[PromotionDraft, Tag("3")]
    | Annotated[StatusChangeDraft, Tag("4")]
    | Annotated[PersonalInfoDraft, Tag("5")]
    | Annotated[InsuranceDraft, Tag("6")]
    | Annotated[PayrollDeductionDraft, Tag("7")]
    | Annotated[LeaveOfAbsenceDraft, Tag("8")],
    Discriminator(_draft_discriminator),
]
