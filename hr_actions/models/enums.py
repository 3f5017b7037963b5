from __future__ import annotations

import enum


class ActionTypeId(enum.IntEnum):
    """The eight kinds of HR change a request can carry."""

    RATE_CHANGE = 1
    TRANSFER = 2
    PROMOTION = 3
    STATUS_CHANGE = 4
    PERSONAL_INFO = 5
    INSURANCE = 6
    PAYROLL_DEDUCTION = 7
    LEAVE_OF_ABSENCE = 8


class RequestStatus(enum.StrEnum):
    """Approval lifecycle of a submitted HR action request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayFrequency(enum.StrEnum):
    """How an employee is paid; doubles as the rate type of a rate change."""

    SALARY = "Salary"
    HOURLY = "Hourly"


class EmploymentType(enum.StrEnum):
    """Employment classification."""

    FULL_TIME = "FT"
    PART_TIME = "PT"
    PRN = "PRN"


class MaritalStatus(enum.StrEnum):
    """Marital status values accepted on a status change."""

    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    WIDOWED = "Widowed"
    SEPARATED = "Separated"


class Role(enum.StrEnum):
    """Caller role carried in the auth context."""

    EMPLOYEE = "employee"
    HR = "hr"
    ADMIN = "admin"


REVIEWER_ROLES = frozenset({Role.HR, Role.ADMIN})


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    HR_ACTION_REQUEST = "HR_ACTION_REQUEST"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    ANNOTATE = "ANNOTATE"
