"""Presentation helpers shared by request lists and review screens."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from hr_actions.models.enums import RequestStatus

if TYPE_CHECKING:
    from hr_actions.schemas.request import HRActionRequestResponse

NOT_AVAILABLE = "N/A"
SUMMARY_LENGTH = 50

DEFAULT_STATUS_VARIANTS: Mapping[str, str] = {
    RequestStatus.PENDING: "warning",
    RequestStatus.APPROVED: "success",
    RequestStatus.REJECTED: "error",
}


class StatusDisplay(BaseModel):
    """Badge for a request status."""

    model_config = ConfigDict(frozen=True)

    label: str
    variant: str


def status_variant(status: str, color_map: Mapping[str, str] | None = None) -> str:
    """Map a status to a badge variant; unknown statuses get ``default``."""
    variants = DEFAULT_STATUS_VARIANTS if color_map is None else color_map
    return variants.get(status, "default")


def status_display(status: str, color_map: Mapping[str, str] | None = None) -> StatusDisplay:
    return StatusDisplay(label=str(status), variant=status_variant(status, color_map))


def format_currency(amount: float | None) -> str:
    """Whole-dollar USD amount, e.g. ``$50,000``."""
    if not amount:
        return NOT_AVAILABLE
    return f"${amount:,.0f}"


def format_date(value: date | datetime | None) -> str:
    """``Jan 5, 2025`` style date."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:%b} {value.day}, {value.year}"


def summarize_request(request: HRActionRequestResponse) -> str:
    """One-line summary shown on request cards."""
    if request.action_type == "Rate Change" and request.old_rate and request.new_rate:
        return f"{format_currency(request.old_rate)} → {format_currency(request.new_rate)}"
    if request.action_type == "Promotion" and request.old_job_title and request.new_job_title:
        return f"{request.old_job_title} → {request.new_job_title}"
    if request.action_type == "Transfer" and request.new_location:
        return f"Transfer to {request.new_location}"
    if not request.reason:
        return "No details"
    if len(request.reason) <= SUMMARY_LENGTH:
        return request.reason
    return request.reason[:SUMMARY_LENGTH] + "..."
