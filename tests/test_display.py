"""Tests for presentation helpers."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

import pytest

from hr_actions.models.enums import RequestStatus
from hr_actions.workflow.display import (
    format_currency,
    format_date,
    status_display,
    status_variant,
    summarize_request,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from hr_actions.schemas.request import HRActionRequestResponse

    RequestFactory = Callable[..., HRActionRequestResponse]


@pytest.mark.parametrize(
    ("status", "variant"),
    [
        (RequestStatus.PENDING, "warning"),
        (RequestStatus.APPROVED, "success"),
        (RequestStatus.REJECTED, "error"),
        ("Cancelled", "default"),
    ],
)
def test_status_variant(status: str, variant: str) -> None:
    assert status_variant(status) == variant


def test_status_variant_custom_map() -> None:
    colors = {"Pending": "info"}
    assert status_variant("Pending", colors) == "info"
    assert status_variant("Approved", colors) == "default"


def test_status_display() -> None:
    badge = status_display(RequestStatus.APPROVED)
    assert badge.label == "Approved"
    assert badge.variant == "success"


def test_format_currency() -> None:
    assert format_currency(50000) == "$50,000"
    assert format_currency(1234.6) == "$1,235"
    assert format_currency(None) == "N/A"
    assert format_currency(0) == "N/A"


def test_format_date() -> None:
    assert format_date(date(2025, 1, 5)) == "Jan 5, 2025"
    assert format_date(datetime(2024, 12, 31, 23, 59)) == "Dec 31, 2024"
    assert format_date(None) == "N/A"


def test_summary_rate_change(make_request: RequestFactory) -> None:
    request = make_request(action_type="Rate Change", action_type_id=1, old_rate=50000, new_rate=55000)
    assert summarize_request(request) == "$50,000 → $55,000"


def test_summary_promotion(make_request: RequestFactory) -> None:
    request = make_request(action_type="Promotion", action_type_id=3, old_job_title="RN", new_job_title="Charge RN")
    assert summarize_request(request) == "RN → Charge RN"


def test_summary_transfer(make_request: RequestFactory) -> None:
    assert summarize_request(make_request(new_location="North Clinic")) == "Transfer to North Clinic"


def test_summary_falls_back_to_reason(make_request: RequestFactory) -> None:
    assert summarize_request(make_request(reason="Short reason here")) == "Short reason here"


def test_summary_truncates_long_reason(make_request: RequestFactory) -> None:
    reason = "x" * 60
    assert summarize_request(make_request(reason=reason)) == "x" * 50 + "..."
    assert summarize_request(make_request(reason="y" * 50)) == "y" * 50


def test_summary_without_details(make_request: RequestFactory) -> None:
    assert summarize_request(make_request(reason="")) == "No details"
