# ruff: noqa: TC003
"""Three-step request wizard: select a type, fill in the details, review and submit.

The controller holds the draft for one wizard session. Forward navigation out
of the details step is gated on the per-type validator; submission goes
through the payload assembler and the injected ``RequestRepository``.
"""

from __future__ import annotations

import enum
import logging
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from hr_actions.exceptions import AssemblyError, TransportError, WizardStateError
from hr_actions.services.employee import EmployeeSnapshot
from hr_actions.workflow.catalog import by_id
from hr_actions.workflow.drafts import apply_changes, build_draft, ensure_rate_type
from hr_actions.workflow.payload import assemble_payload
from hr_actions.workflow.validation import ValidationErrors, draft_warnings, is_blank, validate_draft

if TYPE_CHECKING:
    from hr_actions.schemas.draft import RequestDraft
    from hr_actions.schemas.request import HRActionRequestResponse
    from hr_actions.services.employee import EmployeeSnapshotProvider
    from hr_actions.workflow.catalog import ActionType
    from hr_actions.workflow.repository import RequestRepository

logger = logging.getLogger(__name__)

SUBMIT_FAILED_MESSAGE = "Failed to submit request"
STEP_LABELS = ("Select Action Type", "Fill Details", "Review & Submit")


class WizardStep(enum.StrEnum):
    SELECT_TYPE = "select_type"
    FILL_DETAILS = "fill_details"
    REVIEW = "review"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


# Index into STEP_LABELS for the step indicator.
_STEP_INDEX = {
    WizardStep.SELECT_TYPE: 0,
    WizardStep.FILL_DETAILS: 1,
    WizardStep.REVIEW: 2,
    WizardStep.SUBMITTING: 2,
    WizardStep.FAILED: 2,
    WizardStep.SUBMITTED: 2,
}


def _humanize(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value).strip()


class WizardController:
    """State machine for one request wizard session."""

    def __init__(self, repository: RequestRepository, snapshot: EmployeeSnapshot) -> None:
        self._repository = repository
        self.snapshot = snapshot
        self.step = WizardStep.SELECT_TYPE
        self.action_type: ActionType | None = None
        self.draft: RequestDraft | None = None
        self.errors: ValidationErrors = {}
        self.error: str | None = None
        self.submitted: HRActionRequestResponse | None = None
        # Bumped on discard so a late submit result is dropped.
        self._generation = 0

    @classmethod
    async def start(
        cls,
        repository: RequestRepository,
        provider: EmployeeSnapshotProvider,
        employee_id: uuid.UUID,
    ) -> WizardController:
        """Load the requester's snapshot once and open a new wizard session."""
        snapshot = await provider.get_snapshot(employee_id)
        if snapshot is None:
            logger.warning("No employee record for %s, starting wizard with an empty snapshot", employee_id)
            snapshot = EmployeeSnapshot(employee_id=employee_id)
        return cls(repository, snapshot)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def is_busy(self) -> bool:
        return self.step is WizardStep.SUBMITTING

    @property
    def step_index(self) -> int:
        return _STEP_INDEX[self.step]

    @property
    def warnings(self) -> ValidationErrors:
        if self.draft is None:
            return {}
        return draft_warnings(self.draft)

    @property
    def can_go_next(self) -> bool:
        if self.step is WizardStep.SELECT_TYPE:
            return self.draft is not None
        return self.step is WizardStep.FILL_DETAILS

    @property
    def can_go_back(self) -> bool:
        return self.step in {WizardStep.FILL_DETAILS, WizardStep.REVIEW, WizardStep.FAILED}

    @property
    def can_submit(self) -> bool:
        return self.step in {WizardStep.REVIEW, WizardStep.FAILED} and self.draft is not None

    def _require_idle(self, operation: str) -> None:
        if self.is_busy:
            msg = f"Cannot {operation} while a submission is in progress"
            raise WizardStateError(msg)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def select_type(self, action_type_id: int) -> RequestDraft:
        """Choose the action type and seed a fresh draft from the snapshot.

        Raises ValueError for ids outside the catalog; the wizard stays on the
        selection step in that case.
        """
        self._require_idle("select an action type")
        if self.step is not WizardStep.SELECT_TYPE:
            msg = f"Action type can only be selected on the first step, not {self.step}"
            raise WizardStateError(msg)
        action_type = by_id(action_type_id)
        self.draft = build_draft(action_type, self.snapshot)
        self.action_type = action_type
        self.errors = {}
        self.error = None
        self.step = WizardStep.FILL_DETAILS
        return self.draft

    def on_change(self, changes: Mapping[str, Any] | None = None, /, **fields: Any) -> RequestDraft:
        """Apply field edits to the draft. Clears the current error map."""
        self._require_idle("edit the request")
        if self.step is not WizardStep.FILL_DETAILS or self.draft is None:
            msg = f"Fields can only be edited on the details step, not {self.step}"
            raise WizardStateError(msg)
        updates = {**(changes or {}), **fields}
        self.draft = apply_changes(self.draft, updates)
        self.errors = {}
        return self.draft

    def next(self) -> bool:
        """Advance one step. Returns False when validation keeps the wizard in place."""
        self._require_idle("move forward")
        if self.step is WizardStep.SELECT_TYPE:
            if self.draft is None:
                return False
            self.step = WizardStep.FILL_DETAILS
            return True
        if self.step is not WizardStep.FILL_DETAILS or self.draft is None:
            msg = f"Cannot move forward from {self.step}"
            raise WizardStateError(msg)

        self.draft = ensure_rate_type(self.draft, self.snapshot)
        self.errors = validate_draft(self.draft)
        if self.errors:
            logger.debug("Draft for action type %s has %d errors", self.draft.action_type_id, len(self.errors))
            return False
        self.error = None
        self.step = WizardStep.REVIEW
        return True

    def back(self) -> None:
        """Go back one step, keeping entered values and clearing errors."""
        self._require_idle("go back")
        if self.step in {WizardStep.REVIEW, WizardStep.FAILED}:
            self.step = WizardStep.FILL_DETAILS
        elif self.step is WizardStep.FILL_DETAILS:
            self.step = WizardStep.SELECT_TYPE
        else:
            msg = f"Cannot go back from {self.step}"
            raise WizardStateError(msg)
        self.errors = {}
        self.error = None

    async def submit(self) -> HRActionRequestResponse | None:
        """Assemble the payload and send it.

        Returns the created request, or None when assembly or the backend call
        failed (see ``error``) or the wizard was discarded meanwhile.
        """
        self._require_idle("submit")
        if not self.can_submit or self.draft is None:
            msg = f"Cannot submit from {self.step}"
            raise WizardStateError(msg)

        try:
            payload = assemble_payload(self.draft, self.snapshot)
        except AssemblyError as exc:
            self.error = exc.message
            self.step = WizardStep.REVIEW
            return None

        generation = self._generation
        self.error = None
        self.step = WizardStep.SUBMITTING
        try:
            response = await self._repository.submit_request(payload)
        except TransportError as exc:
            if generation != self._generation:
                return None
            logger.warning("Submitting %s request failed: %s", payload.action_type_id.name, exc.message)
            self.error = exc.message or SUBMIT_FAILED_MESSAGE
            self.step = WizardStep.FAILED
            return None
        except Exception:
            if generation != self._generation:
                return None
            logger.exception("Unexpected error submitting %s request", payload.action_type_id.name)
            self.error = SUBMIT_FAILED_MESSAGE
            self.step = WizardStep.FAILED
            return None

        if generation != self._generation:
            logger.info("Ignoring result for discarded wizard: %s", response.request_number)
            return None
        logger.info("Submitted HR action request %s", response.request_number)
        self.submitted = response
        self.draft = None
        self.step = WizardStep.SUBMITTED
        return response

    def dismiss_error(self) -> None:
        """Clear the form-level error; a failed submit returns to review."""
        self.error = None
        if self.step is WizardStep.FAILED:
            self.step = WizardStep.REVIEW

    def discard(self) -> None:
        """Abandon the draft. Nothing is persisted."""
        self._generation += 1
        self.step = WizardStep.SELECT_TYPE
        self.action_type = None
        self.draft = None
        self.errors = {}
        self.error = None

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    def review_rows(self) -> list[tuple[str, str]]:
        """Label/value rows summarizing the draft for the review step."""
        if self.draft is None:
            return []
        draft = self.draft
        action_type = by_id(draft.action_type_id)
        rows = [("Action type", action_type.name)]

        pairs = {pair.new: pair for pair in action_type.field_pairs}
        paired_old = {pair.old for pair in action_type.field_pairs}
        values = draft.model_dump(exclude={"action_type_id", "reason", "notes", "effective_date"})
        for name, value in values.items():
            if name in paired_old or is_blank(value):
                continue
            pair = pairs.get(name)
            if pair is None:
                rows.append((_humanize(name), _format_value(value)))
                continue
            old = values.get(pair.old)
            current = "N/A" if is_blank(old) else _format_value(old)
            rows.append((pair.label, f"{current} → {_format_value(value)}"))

        rows.append((action_type.effective_date_label, _format_value(draft.effective_date or "")))
        rows.append(("Reason", draft.reason.strip()))
        if not is_blank(draft.notes):
            rows.append(("Notes", _format_value(draft.notes)))
        return rows
