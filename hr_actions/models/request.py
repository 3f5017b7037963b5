# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from hr_actions.models.base import TimestampMixin, UUIDBase
from hr_actions.models.enums import RequestStatus


class HRActionRequest(UUIDBase, TimestampMixin, table=True):
    """A submitted HR action request and its approval state.

    The envelope fields are columns; the type-specific old/new values are kept
    in ``details`` because their shape depends on ``action_type_id``.
    """

    __tablename__ = "hr_action_request"
    __table_args__ = (
        sa.Index("ix_hr_action_request_status_type", "status", "action_type_id"),
        sa.UniqueConstraint("request_number", name="uq_hr_action_request_number"),
    )

    request_number: str = Field(max_length=32)
    action_type_id: int = Field(index=True)
    action_type: str = Field(max_length=100)
    status: str = Field(
        default=RequestStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "Pending"}
    )
    employee_id: uuid.UUID = Field(index=True)
    employee_name: str | None = Field(default=None, max_length=255)
    reason: str
    notes: str | None = None
    effective_date: date | None = None
    details: dict[str, Any] = Field(default_factory=dict, sa_type=sa.JSON)
    decided_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
    )
    decided_by: uuid.UUID | None = None
    approval_comments: str | None = None
    rejection_reason: str | None = None
    review_notes: str | None = None
    version: int = Field(default=1, sa_column_kwargs={"server_default": "1"})
