from sqlmodel import SQLModel

from hr_actions.models.audit import AuditLog
from hr_actions.models.base import TimestampMixin, UUIDBase
from hr_actions.models.enums import (
    ActionTypeId,
    AuditAction,
    AuditEntityType,
    EmploymentType,
    MaritalStatus,
    PayFrequency,
    RequestStatus,
    Role,
)
from hr_actions.models.request import HRActionRequest

__all__ = [
    "ActionTypeId",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "EmploymentType",
    "HRActionRequest",
    "MaritalStatus",
    "PayFrequency",
    "RequestStatus",
    "Role",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
