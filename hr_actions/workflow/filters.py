"""Status tab x action-type tab x search filtering over a loaded request list.

Every stage is a pure predicate filter, so the stages commute and the result
can simply be recomputed whenever the list or a control changes.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from hr_actions.models.enums import RequestStatus
from hr_actions.workflow.catalog import all_types

if TYPE_CHECKING:
    from hr_actions.schemas.request import HRActionRequestResponse

ALL_TYPES = "All"


class RequestFilter(BaseModel):
    """Current filter controls. Exactly one status tab is active."""

    model_config = ConfigDict(frozen=True)

    status: RequestStatus = RequestStatus.PENDING
    action_type: str = ALL_TYPES
    search: str = ""


def filter_by_status(
    requests: Iterable[HRActionRequestResponse], status: RequestStatus | str
) -> list[HRActionRequestResponse]:
    return [r for r in requests if r.status == status]


def filter_by_action_type(
    requests: Iterable[HRActionRequestResponse], action_type: str
) -> list[HRActionRequestResponse]:
    if not action_type or action_type == ALL_TYPES:
        return list(requests)
    return [r for r in requests if r.action_type == action_type]


def _matches(request: HRActionRequestResponse, needle: str) -> bool:
    haystacks = (request.request_number, request.action_type, request.reason, request.employee.full_name)
    return any(needle in value.lower() for value in haystacks if value)


def filter_by_search(requests: Iterable[HRActionRequestResponse], search: str) -> list[HRActionRequestResponse]:
    """Case-insensitive substring match on number, type, reason and employee name."""
    needle = search.strip().lower()
    if not needle:
        return list(requests)
    return [r for r in requests if _matches(r, needle)]


def filter_requests(
    requests: Iterable[HRActionRequestResponse], request_filter: RequestFilter
) -> list[HRActionRequestResponse]:
    filtered = filter_by_status(requests, request_filter.status)
    filtered = filter_by_action_type(filtered, request_filter.action_type)
    return filter_by_search(filtered, request_filter.search)


def count_by_status(requests: Iterable[HRActionRequestResponse]) -> dict[RequestStatus, int]:
    """Badge counts for the status tabs; every status is present."""
    counts = Counter(r.status for r in requests)
    return {status: counts.get(status, 0) for status in RequestStatus}


def count_by_action_type(requests: Iterable[HRActionRequestResponse]) -> dict[str, int]:
    """Badge counts for the type tabs, including the ``All`` tab."""
    items = list(requests)
    counts = Counter(r.action_type for r in items)
    result = {ALL_TYPES: len(items)}
    for action_type in all_types():
        result[action_type.name] = counts.get(action_type.name, 0)
    return result


def action_type_tabs() -> list[str]:
    """Type tab labels in display order."""
    return [ALL_TYPES, *(t.name for t in all_types())]
