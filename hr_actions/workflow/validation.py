"""Per-action-type field validation.

Every function here is pure and returns a ``{field: message}`` map; an empty
map means the draft may advance. Nothing is raised for bad input.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date
from typing import Any

from hr_actions.models.enums import ActionTypeId, PayFrequency
from hr_actions.schemas.draft import (
    DraftBase,
    LeaveOfAbsenceDraft,
    PayrollDeductionDraft,
    PersonalInfoDraft,
    PromotionDraft,
    RateChangeDraft,
    StatusChangeDraft,
    TransferDraft,
)
from hr_actions.workflow.catalog import by_id

REASON_MIN_LENGTH = 10
JOB_TITLE_MIN_LENGTH = 3

REASON_MESSAGE = f"Reason is required (minimum {REASON_MIN_LENGTH} characters)"
EFFECTIVE_DATE_MESSAGE = "Effective date is required"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ValidationErrors = dict[str, str]


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: Any) -> float | None:
    """Return ``value`` as a float, or None when it is blank or not numeric."""
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().replace(",", ""))
    except ValueError:
        return None


def parse_date(value: Any) -> date | None:
    """Return ``value`` as a date, or None when it is blank or malformed."""
    if is_blank(value):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value.strip()))


# ---------------------------------------------------------------------------
# Shared rules
# ---------------------------------------------------------------------------


def _check_reason(draft: DraftBase, errors: ValidationErrors) -> None:
    if is_blank(draft.reason) or len(draft.reason.strip()) < REASON_MIN_LENGTH:
        errors["reason"] = REASON_MESSAGE


def _check_effective_date(draft: DraftBase, errors: ValidationErrors, message: str = EFFECTIVE_DATE_MESSAGE) -> None:
    if is_blank(draft.effective_date):
        errors["effective_date"] = message
    elif parse_date(draft.effective_date) is None:
        errors["effective_date"] = "Effective date must be a valid date (YYYY-MM-DD)"


def _check_rate(draft: RateChangeDraft | PromotionDraft, errors: ValidationErrors, label: str) -> None:
    if is_blank(draft.new_rate):
        errors["new_rate"] = f"{label} is required and must be greater than 0"
        return
    amount = parse_number(draft.new_rate)
    if amount is None:
        errors["new_rate"] = f"{label} must be a number"
    elif amount <= 0:
        errors["new_rate"] = f"{label} is required and must be greater than 0"


def _check_rate_type(draft: RateChangeDraft | PromotionDraft, errors: ValidationErrors) -> None:
    if is_blank(draft.new_rate_type):
        errors["new_rate_type"] = "Rate type is required"
    elif draft.new_rate_type not in {f.value for f in PayFrequency}:
        errors["new_rate_type"] = "Rate type must be Salary or Hourly"


def _check_optional_dates(draft: DraftBase, errors: ValidationErrors, *fields: str) -> None:
    for field in fields:
        value = getattr(draft, field)
        if not is_blank(value) and parse_date(value) is None:
            errors[field] = "Must be a valid date (YYYY-MM-DD)"


# ---------------------------------------------------------------------------
# Per-type validators
# ---------------------------------------------------------------------------


def validate_rate_change(draft: RateChangeDraft) -> ValidationErrors:
    errors: ValidationErrors = {}
    _check_rate(draft, errors, "New rate")
    _check_rate_type(draft, errors)
    _check_effective_date(draft, errors)
    _check_reason(draft, errors)
    return errors


def validate_transfer(draft: TransferDraft) -> ValidationErrors:
    errors: ValidationErrors = {}
    if is_blank(draft.new_department_id):
        errors["new_department_id"] = "New department is required"
    else:
        number = parse_number(draft.new_department_id)
        if number is None or not number.is_integer():
            errors["new_department_id"] = "New department must be a valid department id"
    _check_effective_date(draft, errors)
    _check_reason(draft, errors)
    return errors


def validate_promotion(draft: PromotionDraft) -> ValidationErrors:
    errors: ValidationErrors = {}
    if is_blank(draft.new_job_title) or len(draft.new_job_title.strip()) < JOB_TITLE_MIN_LENGTH:
        errors["new_job_title"] = f"New job title is required (minimum {JOB_TITLE_MIN_LENGTH} characters)"
    _check_rate(draft, errors, "New salary")
    _check_rate_type(draft, errors)
    _check_effective_date(draft, errors)
    _check_reason(draft, errors)
    return errors


def validate_status_change(draft: StatusChangeDraft) -> ValidationErrors:
    errors: ValidationErrors = {}
    _check_effective_date(draft, errors)
    _check_reason(draft, errors)
    return errors


def validate_personal_info(draft: PersonalInfoDraft) -> ValidationErrors:
    errors: ValidationErrors = {}
    if not is_blank(draft.new_email) and not is_valid_email(draft.new_email):  # type: ignore[arg-type]
        errors["new_email"] = "Please enter a valid email address"
    _check_effective_date(draft, errors)
    _check_reason(draft, errors)
    return errors


def validate_default(draft: DraftBase) -> ValidationErrors:
    """Insurance, payroll deduction and leave of absence."""
    errors: ValidationErrors = {}
    _check_reason(draft, errors)
    label = by_id(draft.action_type_id).effective_date_label
    _check_effective_date(draft, errors, message=f"{label} is required")
    if isinstance(draft, PayrollDeductionDraft):
        _check_optional_dates(draft, errors, "deduction_end_date")
        if not is_blank(draft.payroll_deduction_amount) and parse_number(draft.payroll_deduction_amount) is None:
            errors["payroll_deduction_amount"] = "Deduction amount must be a number"
    elif isinstance(draft, LeaveOfAbsenceDraft):
        _check_optional_dates(draft, errors, "leave_end_date", "leave_return_date", "leave_last_day_worked")
    return errors


_VALIDATORS: dict[ActionTypeId, Callable[[Any], ValidationErrors]] = {
    ActionTypeId.RATE_CHANGE: validate_rate_change,
    ActionTypeId.TRANSFER: validate_transfer,
    ActionTypeId.PROMOTION: validate_promotion,
    ActionTypeId.STATUS_CHANGE: validate_status_change,
    ActionTypeId.PERSONAL_INFO: validate_personal_info,
}


def validate_draft(draft: DraftBase) -> ValidationErrors:
    """Validate ``draft`` with the rules of its action type."""
    validator = _VALIDATORS.get(draft.action_type_id, validate_default)
    return validator(draft)


def draft_warnings(draft: DraftBase) -> ValidationErrors:
    """Non-blocking notices shown next to the form."""
    warnings: ValidationErrors = {}
    if isinstance(draft, StatusChangeDraft):
        if is_blank(draft.new_employment_type) and is_blank(draft.new_marital_status):
            warnings["general"] = "No change selected: choose a new employment type or marital status"
    elif isinstance(draft, PersonalInfoDraft):
        changed = [
            name
            for name in PersonalInfoDraft.model_fields
            if name.startswith("new_") and not is_blank(getattr(draft, name))
        ]
        if not changed:
            warnings["general"] = "No personal information has been changed"
    return warnings


# ---------------------------------------------------------------------------
# Review decisions
# ---------------------------------------------------------------------------

REJECTION_REASON_MIN_LENGTH = 10
REJECTION_REASON_MESSAGE = (
    f"Please provide a detailed rejection reason (minimum {REJECTION_REASON_MIN_LENGTH} characters)"
)


def check_rejection_reason(reason: str | None) -> str | None:
    """Return the error message for ``reason``, or None when it is acceptable."""
    if reason is None or len(reason.strip()) < REJECTION_REASON_MIN_LENGTH:
        return REJECTION_REASON_MESSAGE
    return None
