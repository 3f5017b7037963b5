# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hr_actions.models.enums import PayFrequency


class EmployeeSnapshot(BaseModel):
    """Read-only view of the requester's current record at request time."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    employee_id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    salary: float | None = None
    hourly_rate: float | None = None
    pay_frequency: str | None = None  # "Salary" or "Hourly"
    job_title: str | None = None
    department: str | None = None
    department_id: int | None = None
    employment_type: str | None = None  # "FT", "PT" or "PRN"
    marital_status: str | None = None
    supervisor: str | None = None
    location: str | None = None

    @property
    def current_rate(self) -> float | None:
        if self.pay_frequency == PayFrequency.HOURLY:
            return self.hourly_rate
        return self.salary

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None


@runtime_checkable
class EmployeeSnapshotProvider(Protocol):
    """Interface for whatever holds the employee profile."""

    async def get_snapshot(self, employee_id: uuid.UUID) -> EmployeeSnapshot | None:
        """Fetch the employee's current record. Returns None if not found."""
        ...


class InMemoryEmployeeSnapshotProvider:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._employees: dict[uuid.UUID, EmployeeSnapshot] = {}

    def seed(self, snapshot: EmployeeSnapshot) -> None:
        """Seed an employee for testing."""
        self._employees[snapshot.employee_id] = snapshot

    async def get_snapshot(self, employee_id: uuid.UUID) -> EmployeeSnapshot | None:
        """Fetch the employee's current record. Returns None if not found."""
        return self._employees.get(employee_id)

    async def list_snapshots(self) -> list[EmployeeSnapshot]:
        """List every seeded employee."""
        return list(self._employees.values())


_employee_provider: EmployeeSnapshotProvider = InMemoryEmployeeSnapshotProvider()


def get_employee_provider() -> EmployeeSnapshotProvider:
    """FastAPI dependency for the employee snapshot provider."""
    return _employee_provider


def set_employee_provider(provider: EmployeeSnapshotProvider) -> None:
    """Override the provider (for testing or production wiring)."""
    global _employee_provider
    _employee_provider = provider
