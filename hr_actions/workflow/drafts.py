"""Building and mutating request drafts.

A draft stores a single canonical ``effective_date``. The per-type form names
for that date are accepted here, at the model boundary, and resolved in a
fixed priority order so nothing downstream needs to know about them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from hr_actions.models.enums import ActionTypeId, PayFrequency
from hr_actions.schemas.draft import DRAFT_MODELS, RATE_DRAFTS, DraftBase
from hr_actions.workflow.catalog import ActionType, by_id

if TYPE_CHECKING:
    from hr_actions.schemas.draft import RequestDraft
    from hr_actions.services.employee import EmployeeSnapshot

# Priority order when more than one is populated.
EFFECTIVE_DATE_KEYS = ("effectiveDate", "insuranceEffectiveDate", "deductionStartDate", "leaveStartDate")

_EFFECTIVE_DATE_ALIASES = {
    "effective_date": "effectiveDate",
    "insurance_effective_date": "insuranceEffectiveDate",
    "deduction_start_date": "deductionStartDate",
    "leave_start_date": "leaveStartDate",
    **{key: key for key in EFFECTIVE_DATE_KEYS},
}

_ACTION_TYPE_KEYS = frozenset({"action_type_id", "actionTypeId"})


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_effective_date(values: Mapping[str, Any]) -> Any:
    """Pick the effective date from whichever date key is populated.

    Keys may be given in camelCase or snake_case. Returns None when none of
    them carries a value.
    """
    found: dict[str, Any] = {}
    for key, value in values.items():
        canonical = _EFFECTIVE_DATE_ALIASES.get(key)
        if canonical is not None and not _is_blank(value):
            found.setdefault(canonical, value)
    for key in EFFECTIVE_DATE_KEYS:
        if key in found:
            return found[key]
    return None


def default_rate_type(snapshot: EmployeeSnapshot | None) -> str:
    """Rate type used when the requester has not chosen one."""
    if snapshot is not None and snapshot.pay_frequency:
        return snapshot.pay_frequency
    return PayFrequency.SALARY.value


def build_draft(action_type: ActionType | int, snapshot: EmployeeSnapshot) -> RequestDraft:
    """Create the initial draft for ``action_type`` seeded from ``snapshot``.

    Every ``old_*`` field is copied as-is (missing values stay None). Types
    with a rate field get ``new_rate_type`` seeded immediately.
    """
    if not isinstance(action_type, ActionType):
        action_type = by_id(action_type)
    if not action_type.is_known:
        msg = f"Unsupported action type: {action_type.id}"
        raise ValueError(msg)

    values: dict[str, Any] = {pair.old: getattr(snapshot, pair.snapshot_attr) for pair in action_type.field_pairs}
    if action_type.has_rate_field:
        values["new_rate_type"] = default_rate_type(snapshot)

    model = DRAFT_MODELS[ActionTypeId(action_type.id)]
    return model(**values)  # type: ignore[return-value]


def _field_lookup(model: type[DraftBase]) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for name, info in model.model_fields.items():
        lookup[name] = name
        if info.alias:
            lookup[info.alias] = name
    return lookup


def apply_changes(draft: RequestDraft, changes: Mapping[str, Any], *, strict: bool = True) -> RequestDraft:
    """Return a copy of ``draft`` with ``changes`` applied.

    Keys may be field names or their camelCase aliases; any of the effective
    date names map onto ``effective_date``. With ``strict`` set, unknown keys
    raise ValueError; otherwise they are skipped. The action type itself can
    never change through this path.
    """
    lookup = _field_lookup(type(draft))
    updates: dict[str, Any] = {}
    date_values: dict[str, Any] = {}

    for key, value in changes.items():
        if key in _ACTION_TYPE_KEYS:
            if strict and value is not None and int(value) != draft.action_type_id:
                msg = "The action type of a draft cannot be changed"
                raise ValueError(msg)
            continue
        if key in _EFFECTIVE_DATE_ALIASES:
            date_values[key] = value
            continue
        name = lookup.get(key)
        if name is None:
            if strict:
                msg = f"Unknown field {key!r} for {type(draft).__name__}"
                raise ValueError(msg)
            continue
        updates[name] = value

    if date_values:
        resolved = resolve_effective_date(date_values)
        # An explicit clear (all provided date keys blank) empties the date.
        updates["effective_date"] = resolved

    return draft.model_copy(update=updates)


def ensure_rate_type(draft: RequestDraft, snapshot: EmployeeSnapshot | None = None) -> RequestDraft:
    """Default a missing ``new_rate_type`` on rate-bearing drafts.

    The default is the snapshot's ``pay_frequency``, else ``"Salary"``. Without
    a snapshot the draft's ``old_rate_type`` is used first; ``build_draft``
    seeds that from the same ``pay_frequency``, so the result matches.
    """
    if not isinstance(draft, RATE_DRAFTS) or not _is_blank(draft.new_rate_type):
        return draft
    fallback = default_rate_type(snapshot)
    if (snapshot is None or not snapshot.pay_frequency) and not _is_blank(draft.old_rate_type):
        fallback = draft.old_rate_type  # type: ignore[assignment]
    return draft.model_copy(update={"new_rate_type": fallback})


def draft_from_mapping(action_type_id: int, values: Mapping[str, Any]) -> RequestDraft:
    """Rebuild a draft from a flat mapping such as a submission payload.

    Keys that do not belong to the variant are ignored.
    """
    model = DRAFT_MODELS[ActionTypeId(action_type_id)]
    return apply_changes(model(), values, strict=False)  # type: ignore[arg-type]
