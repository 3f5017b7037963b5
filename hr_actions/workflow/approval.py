# ruff: noqa: TC003
"""HR review of submitted requests: approve, reject, annotate.

Every mutating call is guarded client-side first (nothing else in flight,
request known and still Pending, reason or notes long enough) and only then
reaches the repository. After a successful call the in-memory list is reloaded
and replaced as a whole; after a failure it is left untouched.
"""

from __future__ import annotations

import enum
import logging
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING

from hr_actions.exceptions import AuthorizationError, TransportError
from hr_actions.models.enums import RequestStatus
from hr_actions.services.notes import check_notes
from hr_actions.workflow.display import status_display
from hr_actions.workflow.filters import filter_requests
from hr_actions.workflow.validation import check_rejection_reason

if TYPE_CHECKING:
    from hr_actions.exceptions import AuthorizationReason
    from hr_actions.schemas.request import HRActionRequestResponse
    from hr_actions.workflow.display import StatusDisplay
    from hr_actions.workflow.filters import RequestFilter
    from hr_actions.workflow.repository import RequestRepository

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Another action is still in progress"
NOT_FOUND_MESSAGE = "Request not found"


class ReviewScope(enum.StrEnum):
    PENDING = "pending"
    ALL = "all"


class ApprovalController:
    """Holds the reviewer's request list and applies decisions to it."""

    def __init__(
        self,
        repository: RequestRepository,
        scope: ReviewScope = ReviewScope.PENDING,
        color_map: Mapping[str, str] | None = None,
    ) -> None:
        self._repository = repository
        self.scope = scope
        self.color_map = color_map
        self.requests: list[HRActionRequestResponse] = []
        self.error: str | None = None
        self.auth_failure: AuthorizationReason | None = None
        self.success_message: str | None = None
        self.processing = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find(self, request_id: uuid.UUID) -> HRActionRequestResponse | None:
        return next((r for r in self.requests if r.request_id == request_id), None)

    def can_decide(self, request: HRActionRequestResponse) -> bool:
        return request.status == RequestStatus.PENDING and not self.processing

    def display_status(self, request: HRActionRequestResponse) -> StatusDisplay:
        return status_display(request.status, self.color_map)

    def visible(self, request_filter: RequestFilter) -> list[HRActionRequestResponse]:
        return filter_requests(self.requests, request_filter)

    def clear_messages(self) -> None:
        self.error = None
        self.auth_failure = None
        self.success_message = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fail(self, message: str) -> bool:
        self.error = message
        self.success_message = None
        return False

    def _record_transport_error(self, exc: TransportError, action: str) -> bool:
        if isinstance(exc, AuthorizationError):
            self.auth_failure = exc.reason
        logger.warning("Failed to %s: %s", action, exc.message)
        return self._fail(exc.message)

    async def _fetch(self) -> list[HRActionRequestResponse]:
        if self.scope is ReviewScope.PENDING:
            return await self._repository.get_pending_review()
        return await self._repository.get_all_requests()

    def _decidable(self, request_id: uuid.UUID, verb: str) -> HRActionRequestResponse | None:
        if self.processing:
            self._fail(BUSY_MESSAGE)
            return None
        request = self.find(request_id)
        if request is None:
            self._fail(NOT_FOUND_MESSAGE)
            return None
        if request.status != RequestStatus.PENDING:
            self._fail(f"Only pending requests can be {verb} (request is {request.status})")
            return None
        return request

    async def _after_success(self, message: str) -> None:
        self.error = None
        self.auth_failure = None
        self.success_message = message
        try:
            self.requests = list(await self._fetch())
        except TransportError as exc:
            self._record_transport_error(exc, "reload requests")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch the list for the current scope and replace ``requests``."""
        if self.processing:
            return self._fail(BUSY_MESSAGE)
        self.processing = True
        try:
            items = await self._fetch()
        except TransportError as exc:
            return self._record_transport_error(exc, "load requests")
        finally:
            self.processing = False
        self.requests = list(items)
        self.error = None
        self.auth_failure = None
        return True

    async def approve(self, request_id: uuid.UUID, comments: str | None = None) -> bool:
        request = self._decidable(request_id, "approved")
        if request is None:
            return False
        comments = comments.strip() if comments and comments.strip() else None

        self.processing = True
        try:
            await self._repository.approve_request(request.request_id, comments, expected_version=request.version)
            await self._after_success(f"Request {request.request_number} approved successfully")
        except TransportError as exc:
            return self._record_transport_error(exc, f"approve {request.request_number}")
        finally:
            self.processing = False
        return True

    async def reject(self, request_id: uuid.UUID, rejection_reason: str | None) -> bool:
        problem = check_rejection_reason(rejection_reason)
        if problem is not None:
            return self._fail(problem)
        reason = (rejection_reason or "").strip()
        request = self._decidable(request_id, "rejected")
        if request is None:
            return False

        self.processing = True
        try:
            await self._repository.reject_request(request.request_id, reason, expected_version=request.version)
            await self._after_success(f"Request {request.request_number} rejected")
        except TransportError as exc:
            return self._record_transport_error(exc, f"reject {request.request_number}")
        finally:
            self.processing = False
        return True

    async def add_notes(self, request_id: uuid.UUID, notes: str | None) -> bool:
        """Append reviewer notes; the request's status is not touched."""
        problem = check_notes(notes)
        if problem is not None:
            return self._fail(problem)
        if self.processing:
            return self._fail(BUSY_MESSAGE)
        request = self.find(request_id)
        if request is None:
            return self._fail(NOT_FOUND_MESSAGE)

        self.processing = True
        try:
            await self._repository.add_notes(request.request_id, (notes or "").strip())
            await self._after_success(f"Notes added to request {request.request_number}")
        except TransportError as exc:
            return self._record_transport_error(exc, f"add notes to {request.request_number}")
        finally:
            self.processing = False
        return True
