"""Tests for building and editing request drafts."""

from __future__ import annotations

import uuid

import pytest

from hr_actions.models.enums import ActionTypeId
from hr_actions.schemas.draft import (
    LeaveOfAbsenceDraft,
    PromotionDraft,
    RateChangeDraft,
    StatusChangeDraft,
    TransferDraft,
)
from hr_actions.services.employee import EmployeeSnapshot
from hr_actions.workflow.catalog import ActionType, all_types, by_id
from hr_actions.workflow.drafts import (
    apply_changes,
    build_draft,
    draft_from_mapping,
    ensure_rate_type,
    resolve_effective_date,
)


def _bare_snapshot(**values: object) -> EmployeeSnapshot:
    return EmployeeSnapshot(employee_id=uuid.uuid4(), **values)


# ---------------------------------------------------------------------------
# build_draft
# ---------------------------------------------------------------------------


def test_build_rate_change_copies_current_values(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.RATE_CHANGE, snapshot)
    assert isinstance(draft, RateChangeDraft)
    assert draft.old_rate == 50000.0
    assert draft.old_rate_type == "Salary"
    assert draft.new_rate is None


def test_build_hourly_employee_uses_hourly_rate() -> None:
    snapshot = _bare_snapshot(salary=40000.0, hourly_rate=21.5, pay_frequency="Hourly")
    draft = build_draft(ActionTypeId.RATE_CHANGE, snapshot)
    assert draft.old_rate == 21.5
    assert draft.new_rate_type == "Hourly"


@pytest.mark.parametrize("action_type", all_types(), ids=lambda t: t.name)
def test_rate_type_seeded_for_rate_types_only(action_type: ActionType, snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(action_type, snapshot)
    if action_type.has_rate_field:
        assert draft.new_rate_type == "Salary"
    else:
        assert not hasattr(draft, "new_rate_type")


def test_rate_type_defaults_to_salary_without_pay_frequency() -> None:
    draft = build_draft(ActionTypeId.PROMOTION, _bare_snapshot())
    assert isinstance(draft, PromotionDraft)
    assert draft.new_rate_type == "Salary"
    assert draft.old_rate_type is None


def test_missing_snapshot_fields_stay_none() -> None:
    draft = build_draft(ActionTypeId.TRANSFER, _bare_snapshot(department="Nursing"))
    assert isinstance(draft, TransferDraft)
    assert draft.old_department == "Nursing"
    assert draft.old_location is None
    assert draft.old_supervisor is None


def test_build_status_change(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(by_id(ActionTypeId.STATUS_CHANGE), snapshot)
    assert isinstance(draft, StatusChangeDraft)
    assert draft.old_employment_type == "FT"
    assert draft.old_marital_status == "Single"


def test_build_unknown_type_raises(snapshot: EmployeeSnapshot) -> None:
    with pytest.raises(ValueError, match="Unsupported action type"):
        build_draft(42, snapshot)


def test_build_does_not_touch_snapshot(snapshot: EmployeeSnapshot) -> None:
    before = snapshot.model_dump()
    build_draft(ActionTypeId.PERSONAL_INFO, snapshot)
    assert snapshot.model_dump() == before


# ---------------------------------------------------------------------------
# apply_changes
# ---------------------------------------------------------------------------


def test_apply_changes_accepts_snake_and_camel(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.RATE_CHANGE, snapshot)
    updated = apply_changes(draft, {"newRate": "55000", "premium_incentive": "Shift lead"})
    assert updated.new_rate == "55000"
    assert updated.premium_incentive == "Shift lead"


def test_apply_changes_returns_copy(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.RATE_CHANGE, snapshot)
    apply_changes(draft, {"new_rate": 1})
    assert draft.new_rate is None


def test_apply_changes_maps_type_specific_date_key(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.LEAVE_OF_ABSENCE, snapshot)
    updated = apply_changes(draft, {"leaveStartDate": "2025-03-10"})
    assert isinstance(updated, LeaveOfAbsenceDraft)
    assert updated.effective_date == "2025-03-10"


def test_apply_changes_date_priority(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.INSURANCE, snapshot)
    updated = apply_changes(draft, {"leaveStartDate": "2025-03-01", "effectiveDate": "2025-02-01"})
    assert updated.effective_date == "2025-02-01"


def test_apply_changes_clears_date(snapshot: EmployeeSnapshot) -> None:
    draft = apply_changes(build_draft(ActionTypeId.TRANSFER, snapshot), {"effectiveDate": "2025-02-01"})
    cleared = apply_changes(draft, {"effectiveDate": ""})
    assert cleared.effective_date is None


def test_apply_changes_rejects_unknown_field(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.TRANSFER, snapshot)
    with pytest.raises(ValueError, match="Unknown field"):
        apply_changes(draft, {"newRate": 10})


def test_apply_changes_rejects_type_change(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.TRANSFER, snapshot)
    with pytest.raises(ValueError, match="cannot be changed"):
        apply_changes(draft, {"actionTypeId": ActionTypeId.PROMOTION})


def test_apply_changes_non_strict_skips_unknown(snapshot: EmployeeSnapshot) -> None:
    draft = build_draft(ActionTypeId.TRANSFER, snapshot)
    updated = apply_changes(draft, {"newRate": 10, "newLocation": "North"}, strict=False)
    assert updated.new_location == "North"


# ---------------------------------------------------------------------------
# ensure_rate_type / resolve_effective_date / draft_from_mapping
# ---------------------------------------------------------------------------


def test_ensure_rate_type_uses_snapshot() -> None:
    draft = RateChangeDraft(new_rate=20)
    result = ensure_rate_type(draft, _bare_snapshot(pay_frequency="Hourly"))
    assert result.new_rate_type == "Hourly"


def test_ensure_rate_type_falls_back_to_old_rate_type() -> None:
    draft = PromotionDraft(old_rate_type="Hourly", new_rate_type="  ")
    assert ensure_rate_type(draft).new_rate_type == "Hourly"


def test_ensure_rate_type_defaults_to_salary() -> None:
    assert ensure_rate_type(RateChangeDraft()).new_rate_type == "Salary"


def test_ensure_rate_type_keeps_chosen_value() -> None:
    draft = RateChangeDraft(new_rate_type="Hourly")
    assert ensure_rate_type(draft, _bare_snapshot(pay_frequency="Salary")) is draft


def test_ensure_rate_type_ignores_other_types() -> None:
    draft = TransferDraft()
    assert ensure_rate_type(draft) is draft


def test_resolve_effective_date_priority_and_blanks() -> None:
    assert resolve_effective_date({"deductionStartDate": "2025-05-01", "insuranceEffectiveDate": "2025-04-01"}) == (
        "2025-04-01"
    )
    assert resolve_effective_date({"effectiveDate": " ", "leaveStartDate": "2025-06-01"}) == "2025-06-01"
    assert resolve_effective_date({"leave_start_date": "2025-06-02"}) == "2025-06-02"
    assert resolve_effective_date({"reason": "x"}) is None


def test_draft_from_mapping_ignores_foreign_keys() -> None:
    draft = draft_from_mapping(
        ActionTypeId.STATUS_CHANGE,
        {"action_type_id": 4, "new_employment_type": "PT", "new_rate": 10.0, "reason": "Reduced hours"},
    )
    assert isinstance(draft, StatusChangeDraft)
    assert draft.new_employment_type == "PT"
    assert draft.reason == "Reduced hours"
