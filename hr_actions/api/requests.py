# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from hr_actions.api.deps import AuthDep, ReviewerDep
from hr_actions.db import SessionDep
from hr_actions.models.enums import ActionTypeId, RequestStatus
from hr_actions.schemas.request import (
    ActionTypeResponse,
    AddNotesPayload,
    ApprovePayload,
    HRActionRequestResponse,
    RejectPayload,
    RequestListResponse,
    SubmitRequestPayload,
)
from hr_actions.services import request as request_service
from hr_actions.services.employee import EmployeeSnapshotProvider, get_employee_provider
from hr_actions.workflow.catalog import all_types

requests_router = APIRouter(prefix="/hr-actions", tags=["hr-actions"])

ProviderDep = Annotated[EmployeeSnapshotProvider, Depends(get_employee_provider)]


@requests_router.get("/action-types", response_model=list[ActionTypeResponse])
async def list_action_types(auth: AuthDep) -> list[ActionTypeResponse]:
    """The fixed catalog of action types, in display order."""
    return [
        ActionTypeResponse(
            id=t.id,
            name=t.name,
            description=t.description,
            effective_date_label=t.effective_date_label,
        )
        for t in all_types()
    ]


@requests_router.post("", response_model=HRActionRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    payload: SubmitRequestPayload,
    session: SessionDep,
    auth: AuthDep,
    provider: ProviderDep,
) -> HRActionRequestResponse:
    """Submit a new HR action request for the calling employee."""
    return await request_service.submit_request(session, auth, payload, provider)


@requests_router.get("/mine", response_model=RequestListResponse)
async def list_my_requests(session: SessionDep, auth: AuthDep) -> RequestListResponse:
    """The caller's own requests."""
    return await request_service.list_my_requests(session, auth)


@requests_router.get("/pending-review", response_model=RequestListResponse)
async def list_pending_review(session: SessionDep, auth: ReviewerDep) -> RequestListResponse:
    """Requests still waiting for a decision (HR only)."""
    return await request_service.list_pending_review(session)


@requests_router.get("", response_model=RequestListResponse)
async def list_requests(
    session: SessionDep,
    auth: ReviewerDep,
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    action_type_id: ActionTypeId | None = Query(default=None, alias="actionTypeId"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> RequestListResponse:
    """List all requests with optional filters (HR only)."""
    return await request_service.list_requests(session, status_filter, action_type_id, offset, limit)


@requests_router.get("/{request_id}", response_model=HRActionRequestResponse)
async def get_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> HRActionRequestResponse:
    """Get a single request (its owner or HR)."""
    return await request_service.get_request(session, auth, request_id)


@requests_router.post("/{request_id}/approve", response_model=HRActionRequestResponse)
async def approve_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: ReviewerDep,
    payload: ApprovePayload | None = None,
) -> HRActionRequestResponse:
    """Approve a pending request (HR only)."""
    return await request_service.approve_request(session, auth, request_id, payload)


@requests_router.post("/{request_id}/reject", response_model=HRActionRequestResponse)
async def reject_request(
    request_id: uuid.UUID,
    payload: RejectPayload,
    session: SessionDep,
    auth: ReviewerDep,
) -> HRActionRequestResponse:
    """Reject a pending request with a reason (HR only)."""
    return await request_service.reject_request(session, auth, request_id, payload)


@requests_router.post("/{request_id}/notes", response_model=HRActionRequestResponse)
async def add_review_notes(
    request_id: uuid.UUID,
    payload: AddNotesPayload,
    session: SessionDep,
    auth: ReviewerDep,
) -> HRActionRequestResponse:
    """Append reviewer notes without changing the status (HR only)."""
    return await request_service.add_review_notes(session, auth, request_id, payload)
