# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_actions.exceptions import AppError, RequestValidationFailed
from hr_actions.models.enums import AuditAction, AuditEntityType, RequestStatus
from hr_actions.models.request import HRActionRequest
from hr_actions.schemas.request import (
    CHANGE_FIELD_NAMES,
    EmployeeSummary,
    HRActionRequestResponse,
    RequestListResponse,
)
from hr_actions.services.audit import model_to_audit_dict, write_audit_log
from hr_actions.services.notes import append_note, check_notes
from hr_actions.workflow.catalog import by_id
from hr_actions.workflow.drafts import draft_from_mapping, ensure_rate_type
from hr_actions.workflow.validation import check_rejection_reason, validate_draft

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_actions.schemas.auth import AuthContext
    from hr_actions.schemas.request import (
        AddNotesPayload,
        ApprovePayload,
        RejectPayload,
        SubmitRequestPayload,
    )
    from hr_actions.services.employee import EmployeeSnapshotProvider

logger = logging.getLogger(__name__)

STALE_VERSION_MESSAGE = "Request was modified by another reviewer; reload and try again"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_request_response(request: HRActionRequest) -> HRActionRequestResponse:
    """Map a request model to its response schema."""
    return HRActionRequestResponse(
        request_id=request.id,
        request_number=request.request_number,
        action_type_id=request.action_type_id,
        action_type=request.action_type,
        status=RequestStatus(request.status),
        employee=EmployeeSummary(employee_id=request.employee_id, full_name=request.employee_name),
        reason=request.reason,
        notes=request.notes,
        effective_date=request.effective_date,
        request_date=request.created_at,
        decided_at=request.decided_at,
        decided_by=request.decided_by,
        approval_comments=request.approval_comments,
        rejection_reason=request.rejection_reason,
        review_notes=request.review_notes,
        version=request.version,
        **{name: value for name, value in (request.details or {}).items() if name in CHANGE_FIELD_NAMES},
    )


def _new_request_number(today: date) -> str:
    return f"HRA-{today:%Y%m%d}-{uuid.uuid4().hex[:6].upper()}"


async def _get_request_or_404(
    session: AsyncSession,
    request_id: uuid.UUID,
    *,
    for_update: bool = False,
) -> HRActionRequest:
    """Fetch a request by ID. Raises 404 if not found."""
    query = select(HRActionRequest).where(col(HRActionRequest.id) == request_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await session.execute(query)
    request = result.scalar_one_or_none()
    if request is None:
        raise AppError("Request not found", status_code=404)
    return request


def _check_decidable(request: HRActionRequest, expected_version: int | None, verb: str) -> None:
    """Only Pending requests can be decided, and only from the version the reviewer saw."""
    if request.status != RequestStatus.PENDING:
        raise AppError(f"Only pending requests can be {verb}", status_code=400)
    if expected_version is not None and expected_version != request.version:
        raise AppError(STALE_VERSION_MESSAGE, status_code=409)


async def _list(
    session: AsyncSession,
    filters: list,
    *,
    offset: int = 0,
    limit: int | None = None,
    oldest_first: bool = False,
) -> RequestListResponse:
    count_result = await session.execute(select(func.count()).select_from(HRActionRequest).where(*filters))
    total = count_result.scalar_one()

    order = col(HRActionRequest.created_at).asc() if oldest_first else col(HRActionRequest.created_at).desc()
    query = select(HRActionRequest).where(*filters).order_by(order).offset(offset)
    if limit is not None:
        query = query.limit(limit)
    result = await session.execute(query)
    requests = list(result.scalars().all())

    return RequestListResponse(
        items=[_build_request_response(r) for r in requests],
        total=total,
    )


async def _save_change(
    session: AsyncSession,
    auth: AuthContext,
    request: HRActionRequest,
    action: AuditAction,
    before: dict,
) -> HRActionRequestResponse:
    request.version += 1
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HR_ACTION_REQUEST,
        entity_id=request.id,
        action=action,
        before_json=before,
        after_json=model_to_audit_dict(request),
    )

    await session.commit()
    await session.refresh(request)
    return _build_request_response(request)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def submit_request(
    session: AsyncSession,
    auth: AuthContext,
    payload: SubmitRequestPayload,
    provider: EmployeeSnapshotProvider,
) -> HRActionRequestResponse:
    """Create a Pending request for the calling employee.

    The payload is checked with the same per-type rules the wizard applies, so
    a client that skips the wizard still cannot store an invalid request.
    """
    snapshot = await provider.get_snapshot(auth.user_id)
    if snapshot is None:
        raise AppError("Employee not found", status_code=404)

    draft = ensure_rate_type(draft_from_mapping(payload.action_type_id, payload.model_dump()), snapshot)
    errors = validate_draft(draft)
    if errors:
        logger.info("Rejected %s submission from %s: %s", payload.action_type_id.name, auth.user_id, sorted(errors))
        raise RequestValidationFailed(errors)

    if payload.new_rate_type is None and getattr(draft, "new_rate_type", None):
        payload = payload.model_copy(update={"new_rate_type": draft.new_rate_type})

    action_type = by_id(payload.action_type_id)
    details = payload.model_dump(mode="json", include=set(CHANGE_FIELD_NAMES), exclude_none=True)
    hr_request = HRActionRequest(
        request_number=_new_request_number(date.today()),
        action_type_id=action_type.id,
        action_type=action_type.name,
        status=RequestStatus.PENDING.value,
        employee_id=auth.user_id,
        employee_name=snapshot.full_name,
        reason=payload.reason.strip(),
        notes=payload.notes,
        effective_date=payload.effective_date,
        details=details,
    )
    session.add(hr_request)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.HR_ACTION_REQUEST,
        entity_id=hr_request.id,
        action=AuditAction.SUBMIT,
        after_json=model_to_audit_dict(hr_request),
    )

    await session.commit()
    await session.refresh(hr_request)
    logger.info("Submitted %s request %s for %s", action_type.name, hr_request.request_number, auth.user_id)
    return _build_request_response(hr_request)


async def get_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
) -> HRActionRequestResponse:
    """Get a single request. Employees may only see their own."""
    hr_request = await _get_request_or_404(session, request_id)
    if not auth.is_reviewer and hr_request.employee_id != auth.user_id:
        raise AppError("Not authorized to view this request", status_code=403)
    return _build_request_response(hr_request)


async def list_my_requests(session: AsyncSession, auth: AuthContext) -> RequestListResponse:
    """The caller's own requests, newest first."""
    return await _list(session, [col(HRActionRequest.employee_id) == auth.user_id])


async def list_requests(
    session: AsyncSession,
    status_filter: RequestStatus | None = None,
    action_type_id: int | None = None,
    offset: int = 0,
    limit: int = 50,
) -> RequestListResponse:
    """List requests with optional filters, ordered by created_at DESC."""
    filters = []
    if status_filter is not None:
        filters.append(col(HRActionRequest.status) == status_filter.value)
    if action_type_id is not None:
        filters.append(col(HRActionRequest.action_type_id) == action_type_id)
    return await _list(session, filters, offset=offset, limit=limit)


async def list_pending_review(session: AsyncSession) -> RequestListResponse:
    """Every Pending request, oldest first."""
    return await _list(session, [col(HRActionRequest.status) == RequestStatus.PENDING.value], oldest_first=True)


async def approve_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: ApprovePayload | None = None,
) -> HRActionRequestResponse:
    """Pending → Approved."""
    hr_request = await _get_request_or_404(session, request_id, for_update=True)
    _check_decidable(hr_request, payload.expected_version if payload else None, "approved")

    before = model_to_audit_dict(hr_request)
    comments = payload.comments.strip() if payload and payload.comments and payload.comments.strip() else None
    hr_request.status = RequestStatus.APPROVED.value
    hr_request.decided_at = datetime.now(UTC)
    hr_request.decided_by = auth.user_id
    hr_request.approval_comments = comments

    response = await _save_change(session, auth, hr_request, AuditAction.APPROVE, before)
    logger.info("Request %s approved by %s", hr_request.request_number, auth.user_id)
    return response


async def reject_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: RejectPayload,
) -> HRActionRequestResponse:
    """Pending → Rejected. The rejection reason is stored once and never changed."""
    problem = check_rejection_reason(payload.rejection_reason)
    if problem is not None:
        raise AppError(problem, status_code=400)

    hr_request = await _get_request_or_404(session, request_id, for_update=True)
    _check_decidable(hr_request, payload.expected_version, "rejected")

    before = model_to_audit_dict(hr_request)
    hr_request.status = RequestStatus.REJECTED.value
    hr_request.decided_at = datetime.now(UTC)
    hr_request.decided_by = auth.user_id
    hr_request.rejection_reason = payload.rejection_reason.strip()

    response = await _save_change(session, auth, hr_request, AuditAction.REJECT, before)
    logger.info("Request %s rejected by %s", hr_request.request_number, auth.user_id)
    return response


async def add_review_notes(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: AddNotesPayload,
) -> HRActionRequestResponse:
    """Append a timestamped block to the review notes. Status is untouched."""
    problem = check_notes(payload.notes)
    if problem is not None:
        raise AppError(problem, status_code=400)

    hr_request = await _get_request_or_404(session, request_id, for_update=True)
    before = model_to_audit_dict(hr_request)
    hr_request.review_notes = append_note(hr_request.review_notes, payload.notes)

    response = await _save_change(session, auth, hr_request, AuditAction.ANNOTATE, before)
    logger.info("Notes added to request %s by %s", hr_request.request_number, auth.user_id)
    return response
