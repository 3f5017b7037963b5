"""Tests for review list filtering."""

from __future__ import annotations

import itertools
import uuid
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from hr_actions.models.enums import RequestStatus
from hr_actions.schemas.request import EmployeeSummary
from hr_actions.workflow.filters import (
    ALL_TYPES,
    RequestFilter,
    action_type_tabs,
    count_by_action_type,
    count_by_status,
    filter_by_action_type,
    filter_by_search,
    filter_by_status,
    filter_requests,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from hr_actions.schemas.request import HRActionRequestResponse

    RequestFactory = Callable[..., HRActionRequestResponse]


@pytest.fixture
def requests(make_request: RequestFactory) -> list[HRActionRequestResponse]:
    """Two Pending, one Approved, one Rejected."""
    return [
        make_request(RequestStatus.PENDING, "Transfer", reason="Relocating to the north clinic"),
        make_request(RequestStatus.PENDING, "Rate Change", action_type_id=1, reason="Merit increase"),
        make_request(
            RequestStatus.APPROVED,
            "Promotion",
            action_type_id=3,
            employee=EmployeeSummary(employee_id=uuid.uuid4(), full_name="Grace Hopper"),
        ),
        make_request(RequestStatus.REJECTED, "Transfer", reason="Duplicate submission"),
    ]


def test_scenario_c_approved_tab(requests: list[HRActionRequestResponse]) -> None:
    result = filter_requests(requests, RequestFilter(status=RequestStatus.APPROVED, action_type=ALL_TYPES, search=""))
    assert result == [requests[2]]


def test_default_filter_shows_pending(requests: list[HRActionRequestResponse]) -> None:
    assert filter_requests(requests, RequestFilter()) == requests[:2]


def test_status_tabs_partition_requests(requests: list[HRActionRequestResponse]) -> None:
    tabs = [filter_by_status(requests, status) for status in RequestStatus]
    assert sorted(len(tab) for tab in tabs) == [1, 1, 2]
    assert {r.request_id for tab in tabs for r in tab} == {r.request_id for r in requests}


def test_filter_requires_a_status_tab() -> None:
    with pytest.raises(ValidationError):
        RequestFilter(status=None)


def test_action_type_tab(requests: list[HRActionRequestResponse]) -> None:
    assert filter_by_action_type(requests, "Transfer") == [requests[0], requests[3]]
    assert filter_by_action_type(requests, ALL_TYPES) == requests
    assert filter_by_action_type(requests, "Insurance Change") == []


@pytest.mark.parametrize(
    ("search", "indexes"),
    [
        ("", [0, 1, 2, 3]),
        ("  ", [0, 1, 2, 3]),
        ("NORTH", [0]),
        ("grace", [2]),
        ("rate change", [1]),
        ("000003", [2]),
        ("nothing matches", []),
    ],
)
def test_search(requests: list[HRActionRequestResponse], search: str, indexes: list[int]) -> None:
    assert filter_by_search(requests, search) == [requests[i] for i in indexes]


def test_stages_commute(requests: list[HRActionRequestResponse]) -> None:
    stages = [
        lambda items: filter_by_status(items, RequestStatus.PENDING),
        lambda items: filter_by_action_type(items, "Transfer"),
        lambda items: filter_by_search(items, "clinic"),
    ]
    results = []
    for order in itertools.permutations(stages):
        items = requests
        for stage in order:
            items = stage(items)
        results.append(items)
    assert all(result == [requests[0]] for result in results)


def test_filtering_keeps_input(requests: list[HRActionRequestResponse]) -> None:
    before = list(requests)
    filter_requests(requests, RequestFilter(status=RequestStatus.REJECTED, search="dup"))
    assert requests == before


def test_count_by_status(requests: list[HRActionRequestResponse]) -> None:
    assert count_by_status(requests) == {
        RequestStatus.PENDING: 2,
        RequestStatus.APPROVED: 1,
        RequestStatus.REJECTED: 1,
    }
    assert count_by_status([]) == dict.fromkeys(RequestStatus, 0)


def test_count_by_action_type(requests: list[HRActionRequestResponse]) -> None:
    counts = count_by_action_type(requests)
    assert counts[ALL_TYPES] == 4
    assert counts["Transfer"] == 2
    assert counts["Rate Change"] == 1
    assert counts["Leave of Absence"] == 0
    assert list(counts) == action_type_tabs()


def test_action_type_tabs() -> None:
    tabs = action_type_tabs()
    assert tabs[0] == ALL_TYPES
    assert len(tabs) == 9
