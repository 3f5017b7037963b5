"""Turn a validated draft into the canonical submission payload."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hr_actions.exceptions import AssemblyError
from hr_actions.schemas.draft import RATE_DRAFTS
from hr_actions.schemas.request import (
    BOOLEAN_FIELDS,
    CHANGE_FIELD_NAMES,
    DATE_FIELDS,
    INTEGER_FIELDS,
    NUMBER_FIELDS,
    SubmitRequestPayload,
)
from hr_actions.workflow.drafts import ensure_rate_type, resolve_effective_date
from hr_actions.workflow.validation import is_blank, parse_date, parse_number

if TYPE_CHECKING:
    from hr_actions.schemas.draft import DraftBase
    from hr_actions.services.employee import EmployeeSnapshot

logger = logging.getLogger(__name__)

EMPTY_REASON_MESSAGE = "Reason is required and cannot be empty"

__all__ = ["EMPTY_REASON_MESSAGE", "assemble_payload", "payload_to_wire", "resolve_effective_date"]


def _coerce(name: str, value: Any) -> Any:
    """Normalize one change field to its wire type; blanks become None."""
    if is_blank(value):
        return None
    if name in NUMBER_FIELDS:
        return parse_number(value)
    if name in INTEGER_FIELDS:
        number = parse_number(value)
        return int(number) if number is not None and number.is_integer() else None
    if name in BOOLEAN_FIELDS:
        if isinstance(value, str):
            return value.strip().lower() in {"true", "yes", "1", "on"}
        return bool(value)
    if name in DATE_FIELDS:
        return parse_date(value)
    return value.strip() if isinstance(value, str) else str(value)


def assemble_payload(draft: DraftBase, snapshot: EmployeeSnapshot | None = None) -> SubmitRequestPayload:
    """Build the flat payload for ``draft``.

    Raises AssemblyError when the reason is blank after trimming; every other
    problem is left to the validator.
    """
    reason = (draft.reason or "").strip()
    if not reason:
        raise AssemblyError(EMPTY_REASON_MESSAGE)

    if isinstance(draft, RATE_DRAFTS):
        draft = ensure_rate_type(draft, snapshot)

    values = draft.model_dump(exclude={"action_type_id", "reason", "notes", "effective_date"})
    changes = {name: _coerce(name, values.get(name)) for name in CHANGE_FIELD_NAMES}

    notes = draft.notes.strip() if isinstance(draft.notes, str) and draft.notes.strip() else None
    payload = SubmitRequestPayload(
        action_type_id=draft.action_type_id,
        reason=reason,
        notes=notes,
        effective_date=parse_date(draft.effective_date),
        **changes,
    )
    logger.debug("Assembled payload for action type %s", int(draft.action_type_id))
    return payload


def payload_to_wire(payload: SubmitRequestPayload) -> dict[str, Any]:
    """JSON body with the full camelCase key set; unused fields are null."""
    return payload.model_dump(mode="json", by_alias=True, exclude_none=False)
