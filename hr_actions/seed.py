"""Seed script for development data.

Run with:  python -m hr_actions.seed
The API must be running at ``API_BASE_URL`` (default http://localhost:8000).

Employees are upserted through the admin endpoint; sample requests then go
through the same wizard and approval controllers a UI would drive.
"""

from __future__ import annotations

import asyncio
import sys
import uuid

import httpx

from hr_actions.config import configure_logging, get_settings
from hr_actions.exceptions import TransportError
from hr_actions.models.enums import ActionTypeId, Role
from hr_actions.workflow.approval import ApprovalController
from hr_actions.workflow.repository import HttpEmployeeSnapshotProvider, HttpRequestRepository
from hr_actions.workflow.wizard import WizardController

ADMIN_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
HR_ID = uuid.UUID("00000000-0000-0000-0000-000000000009")

# Well-known employee UUIDs
ALICE_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
BOB_ID = uuid.UUID("00000000-0000-0000-0000-000000000003")
CAROL_ID = uuid.UUID("00000000-0000-0000-0000-000000000004")

EMPLOYEES = [
    {
        "id": ALICE_ID,
        "firstName": "Alice",
        "lastName": "Johnson",
        "email": "alice.johnson@example.com",
        "salary": 52000,
        "payFrequency": "Salary",
        "jobTitle": "Registered Nurse",
        "department": "Nursing",
        "departmentId": 10,
        "employmentType": "FT",
        "maritalStatus": "Single",
        "supervisor": "Dana White",
        "location": "Main Campus",
    },
    {
        "id": BOB_ID,
        "firstName": "Bob",
        "lastName": "Smith",
        "email": "bob.smith@example.com",
        "hourlyRate": 24.5,
        "payFrequency": "Hourly",
        "jobTitle": "Pharmacy Technician",
        "department": "Pharmacy",
        "departmentId": 20,
        "employmentType": "PT",
        "location": "North Clinic",
    },
    {
        "id": CAROL_ID,
        "firstName": "Carol",
        "lastName": "Williams",
        "email": "carol.williams@example.com",
        "salary": 61000,
        "payFrequency": "Salary",
        "jobTitle": "Charge Nurse",
        "department": "Emergency",
        "departmentId": 30,
        "employmentType": "FT",
        "maritalStatus": "Married",
        "location": "Main Campus",
    },
]

# (employee, action type, field values, approve?)
REQUESTS = [
    (
        ALICE_ID,
        ActionTypeId.RATE_CHANGE,
        {"newRate": "56000", "effectiveDate": "2025-01-01", "reason": "Annual merit increase after review"},
        True,
    ),
    (
        BOB_ID,
        ActionTypeId.TRANSFER,
        {
            "newDepartmentId": "30",
            "newDepartment": "Emergency",
            "newLocation": "Main Campus",
            "effectiveDate": "2025-02-01",
            "reason": "Requested move to the emergency department",
        },
        False,
    ),
    (
        CAROL_ID,
        ActionTypeId.LEAVE_OF_ABSENCE,
        {
            "leaveType": "FMLA",
            "leaveStartDate": "2025-03-10",
            "leaveEndDate": "2025-04-07",
            "reason": "Family medical leave for a newborn",
        },
        False,
    ),
]


def _admin_headers() -> dict[str, str]:
    return {"X-User-Id": str(ADMIN_ID), "X-Role": Role.ADMIN.value}


async def seed_employees(client: httpx.AsyncClient) -> None:
    """Seed employees via PUT (upsert)."""
    print("\n--- Seeding employees ---")
    for emp in EMPLOYEES:
        body = {k: v for k, v in emp.items() if k != "id"}
        resp = await client.put(f"/employees/{emp['id']}", json=body, headers=_admin_headers())
        label = f"{emp['firstName']} {emp['lastName']}"
        if resp.is_success:
            print(f"  [OK] {label}")
        else:
            print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")


async def seed_requests(client: httpx.AsyncClient) -> list[str]:
    """Submit sample requests through the wizard; return numbers to approve."""
    print("\n--- Seeding requests ---")
    to_approve: list[str] = []
    for employee_id, action_type_id, values, approve in REQUESTS:
        repository = HttpRequestRepository(client, user_id=employee_id)
        provider = HttpEmployeeSnapshotProvider(client, user_id=employee_id)
        wizard = await WizardController.start(repository, provider, employee_id)
        wizard.select_type(action_type_id)
        wizard.on_change(values)
        if not wizard.next():
            print(f"  [ERROR] {action_type_id.name}: {wizard.errors}")
            continue
        response = await wizard.submit()
        if response is None:
            print(f"  [ERROR] {action_type_id.name}: {wizard.error}")
            continue
        print(f"  [OK] {response.request_number} {response.action_type} for {response.employee.full_name}")
        if approve:
            to_approve.append(response.request_number)
    return to_approve


async def seed_decisions(client: httpx.AsyncClient, request_numbers: list[str]) -> None:
    """Approve the selected requests as HR."""
    print("\n--- Seeding decisions ---")
    controller = ApprovalController(HttpRequestRepository(client, user_id=HR_ID, role=Role.HR))
    if not await controller.load():
        print(f"  [ERROR] Loading review queue: {controller.error}")
        return
    for request in list(controller.requests):
        if request.request_number not in request_numbers:
            continue
        if await controller.approve(request.request_id, "Approved during seeding"):
            print(f"  [OK] {controller.success_message}")
        else:
            print(f"  [ERROR] {request.request_number}: {controller.error}")


async def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    print("=" * 60)
    print("  HR Actions - Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(base_url=settings.api_base_url, timeout=settings.request_timeout_seconds) as client:
        try:
            resp = await client.get("/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", settings.api_base_url)
            sys.exit(1)

        try:
            await seed_employees(client)
            approved = await seed_requests(client)
            await seed_decisions(client, approved)
        except TransportError as exc:
            print(f"ERROR: {exc.message}")
            sys.exit(1)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
