"""Static registry of the supported HR action types."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from hr_actions.models.enums import ActionTypeId


class FieldPair(BaseModel):
    """A current/proposed field pair and the snapshot attribute that seeds it."""

    model_config = ConfigDict(frozen=True)

    old: str
    new: str
    snapshot_attr: str
    label: str


class ActionType(BaseModel):
    """One entry of the catalog. Never mutated."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    field_pairs: tuple[FieldPair, ...] = ()
    effective_date_field: str = "effectiveDate"
    effective_date_label: str = "Effective date"

    @property
    def has_rate_field(self) -> bool:
        return any(pair.new == "new_rate_type" for pair in self.field_pairs)

    @property
    def is_known(self) -> bool:
        return self.id in _BY_ID


_RATE_PAIRS = (
    FieldPair(old="old_rate", new="new_rate", snapshot_attr="current_rate", label="Rate"),
    FieldPair(old="old_rate_type", new="new_rate_type", snapshot_attr="pay_frequency", label="Rate type"),
)

_ACTION_TYPES: tuple[ActionType, ...] = (
    ActionType(
        id=ActionTypeId.RATE_CHANGE,
        name="Rate Change",
        description="Change employee salary or hourly rate",
        field_pairs=_RATE_PAIRS,
    ),
    ActionType(
        id=ActionTypeId.TRANSFER,
        name="Transfer",
        description="Transfer to new department or location",
        field_pairs=(
            FieldPair(old="old_department", new="new_department", snapshot_attr="department", label="Department"),
            FieldPair(old="old_location", new="new_location", snapshot_attr="location", label="Location"),
            FieldPair(old="old_supervisor", new="new_supervisor", snapshot_attr="supervisor", label="Supervisor"),
            FieldPair(
                old="old_classification",
                new="new_classification",
                snapshot_attr="employment_type",
                label="Classification",
            ),
        ),
    ),
    ActionType(
        id=ActionTypeId.PROMOTION,
        name="Promotion",
        description="Promote to new job title with salary increase",
        field_pairs=(
            FieldPair(old="old_job_title", new="new_job_title", snapshot_attr="job_title", label="Job title"),
            *_RATE_PAIRS,
            FieldPair(old="old_department", new="new_department", snapshot_attr="department", label="Department"),
        ),
    ),
    ActionType(
        id=ActionTypeId.STATUS_CHANGE,
        name="Status Change",
        description="Change employment status or marital status",
        field_pairs=(
            FieldPair(
                old="old_employment_type",
                new="new_employment_type",
                snapshot_attr="employment_type",
                label="Employment type",
            ),
            FieldPair(
                old="old_marital_status",
                new="new_marital_status",
                snapshot_attr="marital_status",
                label="Marital status",
            ),
            FieldPair(
                old="old_classification",
                new="new_classification",
                snapshot_attr="pay_frequency",
                label="Pay classification",
            ),
        ),
    ),
    ActionType(
        id=ActionTypeId.PERSONAL_INFO,
        name="Personal Info Change",
        description="Update name, address, phone, or email",
        field_pairs=(
            FieldPair(old="old_first_name", new="new_first_name", snapshot_attr="first_name", label="First name"),
            FieldPair(old="old_last_name", new="new_last_name", snapshot_attr="last_name", label="Last name"),
            FieldPair(old="old_address", new="new_address", snapshot_attr="address", label="Address"),
            FieldPair(old="old_city", new="new_city", snapshot_attr="city", label="City"),
            FieldPair(old="old_state", new="new_state", snapshot_attr="state", label="State"),
            FieldPair(old="old_zip_code", new="new_zip_code", snapshot_attr="zip_code", label="ZIP code"),
            FieldPair(old="old_phone", new="new_phone", snapshot_attr="phone", label="Phone"),
            FieldPair(old="old_email", new="new_email", snapshot_attr="email", label="Email"),
        ),
    ),
    ActionType(
        id=ActionTypeId.INSURANCE,
        name="Insurance Change",
        description="Modify health, dental, or retirement benefits",
        effective_date_field="insuranceEffectiveDate",
        effective_date_label="Insurance effective date",
    ),
    ActionType(
        id=ActionTypeId.PAYROLL_DEDUCTION,
        name="Payroll Deduction",
        description="Add or modify payroll deductions",
        effective_date_field="deductionStartDate",
        effective_date_label="Deduction start date",
    ),
    ActionType(
        id=ActionTypeId.LEAVE_OF_ABSENCE,
        name="Leave of Absence",
        description="Request extended leave from work",
        effective_date_field="leaveStartDate",
        effective_date_label="Leave start date",
    ),
)

_BY_ID: dict[int, ActionType] = {t.id: t for t in _ACTION_TYPES}
_BY_NAME: dict[str, ActionType] = {t.name: t for t in _ACTION_TYPES}

UNKNOWN_ACTION_TYPE = ActionType(id=0, name="Unknown", description="Unsupported action type")


def all_types() -> tuple[ActionType, ...]:
    """Return every action type in display order (1..8)."""
    return _ACTION_TYPES


def by_id(action_type_id: int | None) -> ActionType:
    """Look up an action type; unknown ids yield ``UNKNOWN_ACTION_TYPE``."""
    if action_type_id is None:
        return UNKNOWN_ACTION_TYPE
    return _BY_ID.get(action_type_id, UNKNOWN_ACTION_TYPE)


def by_name(name: str | None) -> ActionType:
    """Look up an action type by its display name."""
    if name is None:
        return UNKNOWN_ACTION_TYPE
    return _BY_NAME.get(name, UNKNOWN_ACTION_TYPE)


def has_rate_field(action_type_id: int) -> bool:
    return by_id(action_type_id).has_rate_field
