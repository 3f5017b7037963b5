# ruff: noqa: TC003
"""Client access to the HR action request backend.

``RequestRepository`` is what the controllers depend on; ``HttpRequestRepository``
implements it over httpx against the ``/hr-actions`` API. Every non-2xx answer
becomes a ``TransportError`` (or ``AuthorizationError`` for 401/403) carrying
the backend's message when it sent one.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

import httpx
from pydantic import ValidationError

from hr_actions.config import get_settings
from hr_actions.exceptions import AuthorizationError, AuthorizationReason, TransportError
from hr_actions.models.enums import Role
from hr_actions.schemas.request import (
    AddNotesPayload,
    ApprovePayload,
    HRActionRequestResponse,
    RejectPayload,
    RequestListResponse,
)
from hr_actions.services.employee import EmployeeSnapshot
from hr_actions.workflow.payload import payload_to_wire

if TYPE_CHECKING:
    from hr_actions.config import Settings
    from hr_actions.schemas.request import SubmitRequestPayload

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Unable to reach the HR service"
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from the HR service"
NOT_LOGGED_IN_MESSAGE = "You are not logged in. Please sign in and try again."
FORBIDDEN_MESSAGE = "You do not have permission to perform this action."

PAGE_SIZE = 100


@runtime_checkable
class RequestRepository(Protocol):
    """Backend operations used by the wizard and the approval controller."""

    async def submit_request(self, payload: SubmitRequestPayload) -> HRActionRequestResponse: ...

    async def get_my_requests(self) -> list[HRActionRequestResponse]: ...

    async def get_all_requests(self) -> list[HRActionRequestResponse]: ...

    async def get_pending_review(self) -> list[HRActionRequestResponse]: ...

    async def approve_request(
        self, request_id: uuid.UUID, comments: str | None = None, expected_version: int | None = None
    ) -> HRActionRequestResponse: ...

    async def reject_request(
        self, request_id: uuid.UUID, rejection_reason: str, expected_version: int | None = None
    ) -> HRActionRequestResponse: ...

    async def add_notes(self, request_id: uuid.UUID, notes: str) -> HRActionRequestResponse: ...

    async def get_request_details(self, request_id: uuid.UUID) -> HRActionRequestResponse: ...


# ---------------------------------------------------------------------------
# httpx plumbing
# ---------------------------------------------------------------------------


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def raise_for_response(response: httpx.Response, fallback: str) -> None:
    """Translate a non-2xx response into the client error taxonomy."""
    if response.is_success:
        return
    body = _error_body(response)
    detail = body.get("detail") if isinstance(body.get("detail"), str) else None

    if response.status_code == httpx.codes.UNAUTHORIZED:
        raise AuthorizationError(detail or NOT_LOGGED_IN_MESSAGE, AuthorizationReason.NOT_AUTHENTICATED)
    if response.status_code == httpx.codes.FORBIDDEN:
        raise AuthorizationError(detail or FORBIDDEN_MESSAGE, AuthorizationReason.FORBIDDEN)

    errors = body.get("errors") if isinstance(body.get("errors"), dict) else None
    raise TransportError(detail or fallback, status_code=response.status_code, errors=errors)


class _HttpBase:
    def __init__(self, client: httpx.AsyncClient, *, user_id: uuid.UUID, role: Role | str = Role.EMPLOYEE) -> None:
        self._client = client
        self._headers = {"X-User-Id": str(user_id), "X-Role": str(role)}

    @classmethod
    def from_settings(
        cls, *, user_id: uuid.UUID, role: Role | str = Role.EMPLOYEE, settings: Settings | None = None
    ) -> Self:
        """Build an instance with its own client pointed at ``api_base_url``."""
        settings = settings or get_settings()
        client = httpx.AsyncClient(base_url=settings.api_base_url, timeout=settings.request_timeout_seconds)
        return cls(client, user_id=user_id, role=role)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, url: str, fallback: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(UNREACHABLE_MESSAGE) from exc
        raise_for_response(response, fallback)
        return response


def _parse(model: type[Any], response: httpx.Response) -> Any:
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        logger.warning("Could not parse %s from %s", model.__name__, response.request.url)
        raise TransportError(UNEXPECTED_RESPONSE_MESSAGE, status_code=response.status_code) from exc


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------


class HttpRequestRepository(_HttpBase):
    """``RequestRepository`` over the ``/hr-actions`` REST API."""

    async def submit_request(self, payload: SubmitRequestPayload) -> HRActionRequestResponse:
        response = await self._send("POST", "/hr-actions", "Failed to submit request", json=payload_to_wire(payload))
        return _parse(HRActionRequestResponse, response)

    async def get_my_requests(self) -> list[HRActionRequestResponse]:
        response = await self._send("GET", "/hr-actions/mine", "Failed to load requests")
        return _parse(RequestListResponse, response).items

    async def get_all_requests(self) -> list[HRActionRequestResponse]:
        items: list[HRActionRequestResponse] = []
        offset = 0
        while True:
            response = await self._send(
                "GET", "/hr-actions", "Failed to load requests", params={"offset": offset, "limit": PAGE_SIZE}
            )
            page: RequestListResponse = _parse(RequestListResponse, response)
            items.extend(page.items)
            offset += len(page.items)
            if not page.items or offset >= page.total:
                return items

    async def get_pending_review(self) -> list[HRActionRequestResponse]:
        response = await self._send("GET", "/hr-actions/pending-review", "Failed to load requests")
        return _parse(RequestListResponse, response).items

    async def approve_request(
        self, request_id: uuid.UUID, comments: str | None = None, expected_version: int | None = None
    ) -> HRActionRequestResponse:
        body = ApprovePayload(comments=comments, expected_version=expected_version)
        response = await self._send(
            "POST",
            f"/hr-actions/{request_id}/approve",
            "Failed to approve request",
            json=body.model_dump(mode="json", by_alias=True),
        )
        return _parse(HRActionRequestResponse, response)

    async def reject_request(
        self, request_id: uuid.UUID, rejection_reason: str, expected_version: int | None = None
    ) -> HRActionRequestResponse:
        body = RejectPayload(rejection_reason=rejection_reason, expected_version=expected_version)
        response = await self._send(
            "POST",
            f"/hr-actions/{request_id}/reject",
            "Failed to reject request",
            json=body.model_dump(mode="json", by_alias=True),
        )
        return _parse(HRActionRequestResponse, response)

    async def add_notes(self, request_id: uuid.UUID, notes: str) -> HRActionRequestResponse:
        response = await self._send(
            "POST",
            f"/hr-actions/{request_id}/notes",
            "Failed to add notes",
            json=AddNotesPayload(notes=notes).model_dump(mode="json", by_alias=True),
        )
        return _parse(HRActionRequestResponse, response)

    async def get_request_details(self, request_id: uuid.UUID) -> HRActionRequestResponse:
        response = await self._send("GET", f"/hr-actions/{request_id}", "Failed to load request details")
        return _parse(HRActionRequestResponse, response)


class HttpEmployeeSnapshotProvider(_HttpBase):
    """``EmployeeSnapshotProvider`` over ``GET /employees/{id}``."""

    async def get_snapshot(self, employee_id: uuid.UUID) -> EmployeeSnapshot | None:
        try:
            response = await self._send("GET", f"/employees/{employee_id}", "Failed to load employee information")
        except TransportError as exc:
            if exc.status_code == httpx.codes.NOT_FOUND:
                return None
            raise
        return _parse(EmployeeSnapshot, response)
