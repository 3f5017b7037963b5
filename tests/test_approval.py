"""Tests for the HR review controller."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest

from hr_actions.exceptions import AuthorizationError, AuthorizationReason, TransportError
from hr_actions.models.enums import RequestStatus
from hr_actions.workflow.approval import BUSY_MESSAGE, NOT_FOUND_MESSAGE, ApprovalController, ReviewScope
from hr_actions.workflow.filters import RequestFilter
from hr_actions.workflow.repository import RequestRepository
from hr_actions.workflow.validation import REJECTION_REASON_MESSAGE

if TYPE_CHECKING:
    from collections.abc import Callable

    from hr_actions.schemas.request import HRActionRequestResponse

    RequestFactory = Callable[..., HRActionRequestResponse]


@pytest.fixture
def pending(make_request: RequestFactory) -> list[HRActionRequestResponse]:
    return [make_request(version=1), make_request(version=3)]


@pytest.fixture
def repository(pending: list[HRActionRequestResponse]) -> AsyncMock:
    repo = AsyncMock(spec=RequestRepository)
    repo.get_pending_review.return_value = pending
    return repo


@pytest.fixture
async def controller(repository: AsyncMock) -> ApprovalController:
    ctrl = ApprovalController(repository)
    assert await ctrl.load() is True
    repository.get_pending_review.reset_mock()
    return ctrl


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


async def test_load_pending_scope(controller: ApprovalController, pending: list[HRActionRequestResponse]) -> None:
    assert controller.requests == pending
    assert controller.error is None


async def test_load_all_scope(repository: AsyncMock, make_request: RequestFactory) -> None:
    everything = [make_request(RequestStatus.APPROVED)]
    repository.get_all_requests.return_value = everything
    ctrl = ApprovalController(repository, scope=ReviewScope.ALL)

    assert await ctrl.load() is True
    assert ctrl.requests == everything
    repository.get_pending_review.assert_not_awaited()


async def test_load_failure_keeps_list(controller: ApprovalController, repository: AsyncMock) -> None:
    before = list(controller.requests)
    repository.get_pending_review.side_effect = TransportError("Failed to load requests", status_code=500)

    assert await controller.load() is False
    assert controller.requests == before
    assert controller.error == "Failed to load requests"
    assert controller.processing is False


async def test_load_forbidden_sets_auth_failure(repository: AsyncMock) -> None:
    repository.get_pending_review.side_effect = AuthorizationError(
        "Insufficient role: HR reviewer access required", AuthorizationReason.FORBIDDEN
    )
    ctrl = ApprovalController(repository)

    assert await ctrl.load() is False
    assert ctrl.auth_failure is AuthorizationReason.FORBIDDEN
    assert ctrl.requests == []


# ---------------------------------------------------------------------------
# Approve
# ---------------------------------------------------------------------------


async def test_approve_reloads_list(
    controller: ApprovalController,
    repository: AsyncMock,
    pending: list[HRActionRequestResponse],
) -> None:
    target = pending[1]
    repository.get_pending_review.return_value = [pending[0]]

    assert await controller.approve(target.request_id, "  Looks good  ") is True

    repository.approve_request.assert_awaited_once_with(target.request_id, "Looks good", expected_version=3)
    assert controller.requests == [pending[0]]
    assert controller.success_message == f"Request {target.request_number} approved successfully"
    assert controller.processing is False


async def test_approve_blank_comments_sent_as_none(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    await controller.approve(pending[0].request_id, "   ")
    repository.approve_request.assert_awaited_once_with(pending[0].request_id, None, expected_version=1)


async def test_approve_failure_leaves_list(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    repository.approve_request.side_effect = TransportError("Only pending requests can be approved", status_code=400)

    assert await controller.approve(pending[0].request_id) is False
    assert controller.requests == pending
    assert controller.error == "Only pending requests can be approved"
    assert controller.success_message is None
    repository.get_pending_review.assert_not_awaited()


async def test_approve_unknown_request(controller: ApprovalController, repository: AsyncMock) -> None:
    assert await controller.approve(uuid.uuid4()) is False
    assert controller.error == NOT_FOUND_MESSAGE
    repository.approve_request.assert_not_awaited()


async def test_approve_non_pending_is_guarded(repository: AsyncMock, make_request: RequestFactory) -> None:
    approved = make_request(RequestStatus.APPROVED)
    repository.get_pending_review.return_value = [approved]
    ctrl = ApprovalController(repository)
    await ctrl.load()

    assert ctrl.can_decide(approved) is False
    assert await ctrl.approve(approved.request_id) is False
    assert "Only pending requests can be approved" in (ctrl.error or "")
    repository.approve_request.assert_not_awaited()


async def test_busy_controller_refuses(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    controller.processing = True
    assert await controller.approve(pending[0].request_id) is False
    assert controller.error == BUSY_MESSAGE
    assert controller.can_decide(pending[0]) is False
    repository.approve_request.assert_not_awaited()


async def test_unauthenticated_decision(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    repository.approve_request.side_effect = AuthorizationError(
        "Not logged in: missing X-User-Id header", AuthorizationReason.NOT_AUTHENTICATED
    )
    assert await controller.approve(pending[0].request_id) is False
    assert controller.auth_failure is AuthorizationReason.NOT_AUTHENTICATED
    controller.clear_messages()
    assert controller.error is None
    assert controller.auth_failure is None


# ---------------------------------------------------------------------------
# Reject
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("reason", ["", "   ", "too short", None])
async def test_scenario_d_reject_guarded_before_network(
    controller: ApprovalController,
    repository: AsyncMock,
    pending: list[HRActionRequestResponse],
    reason: str | None,
) -> None:
    assert await controller.reject(pending[0].request_id, reason) is False
    assert controller.error == REJECTION_REASON_MESSAGE
    repository.reject_request.assert_not_awaited()
    repository.get_pending_review.assert_not_awaited()


async def test_reject_success(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    repository.get_pending_review.return_value = [pending[1]]

    assert await controller.reject(pending[0].request_id, "  Missing supporting documents ") is True

    repository.reject_request.assert_awaited_once_with(
        pending[0].request_id, "Missing supporting documents", expected_version=1
    )
    assert controller.requests == [pending[1]]
    assert controller.success_message == f"Request {pending[0].request_number} rejected"


async def test_reject_stale_version(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    repository.reject_request.side_effect = TransportError("Request was modified by another reviewer", status_code=409)
    assert await controller.reject(pending[0].request_id, "Missing supporting documents") is False
    assert controller.requests == pending


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


async def test_add_notes_validates_first(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    assert await controller.add_notes(pending[0].request_id, "hey") is False
    assert controller.error == "Notes must be at least 5 characters"
    repository.add_notes.assert_not_awaited()


async def test_add_notes_success(
    controller: ApprovalController, repository: AsyncMock, pending: list[HRActionRequestResponse]
) -> None:
    assert await controller.add_notes(pending[0].request_id, " Called the manager ") is True
    repository.add_notes.assert_awaited_once_with(pending[0].request_id, "Called the manager")
    repository.get_pending_review.assert_awaited_once()
    assert controller.success_message == f"Notes added to request {pending[0].request_number}"


async def test_notes_allowed_on_decided_request(repository: AsyncMock, make_request: RequestFactory) -> None:
    rejected = make_request(RequestStatus.REJECTED)
    repository.get_all_requests.return_value = [rejected]
    ctrl = ApprovalController(repository, scope=ReviewScope.ALL)
    await ctrl.load()

    assert await ctrl.add_notes(rejected.request_id, "Employee was informed") is True


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


async def test_visible_and_display(repository: AsyncMock, make_request: RequestFactory) -> None:
    items = [make_request(RequestStatus.PENDING), make_request(RequestStatus.APPROVED)]
    repository.get_all_requests.return_value = items
    ctrl = ApprovalController(repository, scope=ReviewScope.ALL, color_map={"Approved": "info"})
    await ctrl.load()

    assert ctrl.visible(RequestFilter(status=RequestStatus.APPROVED)) == [items[1]]
    assert ctrl.display_status(items[1]).variant == "info"
    assert ctrl.display_status(items[0]).variant == "default"
