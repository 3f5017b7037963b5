# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, status

from hr_actions.api.deps import AdminDep, AuthDep, ReviewerDep
from hr_actions.exceptions import AppError
from hr_actions.schemas.employee import EmployeeListResponse, UpsertEmployeeRequest
from hr_actions.services.employee import EmployeeSnapshot, InMemoryEmployeeSnapshotProvider, get_employee_provider

employees_router = APIRouter(prefix="/employees", tags=["employees"])


def _in_memory_provider() -> InMemoryEmployeeSnapshotProvider:
    provider = get_employee_provider()
    if not isinstance(provider, InMemoryEmployeeSnapshotProvider):
        raise AppError("Employee records are read-only in this deployment", status_code=status.HTTP_409_CONFLICT)
    return provider


@employees_router.put("/{employee_id}", response_model=EmployeeSnapshot)
async def upsert_employee(
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: AdminDep,
) -> EmployeeSnapshot:
    """Create or update an employee in the stub provider (admin only)."""
    values = payload.model_dump()
    values["pay_frequency"] = payload.pay_frequency.value
    values["employment_type"] = payload.employment_type.value if payload.employment_type else None
    values["marital_status"] = payload.marital_status.value if payload.marital_status else None
    snapshot = EmployeeSnapshot(employee_id=employee_id, **values)
    _in_memory_provider().seed(snapshot)
    return snapshot


@employees_router.get("/{employee_id}", response_model=EmployeeSnapshot)
async def get_employee(employee_id: uuid.UUID, auth: AuthDep) -> EmployeeSnapshot:
    """Current record of an employee. Employees may only read their own."""
    if not auth.is_reviewer and auth.user_id != employee_id:
        raise AppError("Not authorized to view this employee", status_code=status.HTTP_403_FORBIDDEN)
    snapshot = await get_employee_provider().get_snapshot(employee_id)
    if snapshot is None:
        raise AppError("Employee not found", status_code=status.HTTP_404_NOT_FOUND)
    return snapshot


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(auth: ReviewerDep) -> EmployeeListResponse:
    """Every employee known to the stub provider (HR only)."""
    items = await _in_memory_provider().list_snapshots()
    return EmployeeListResponse(items=items, total=len(items))
