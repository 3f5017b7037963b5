from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from hr_actions.db import get_session
from hr_actions.main import app
from hr_actions.models import SQLModel
from hr_actions.models.enums import RequestStatus
from hr_actions.schemas.request import EmployeeSummary, HRActionRequestResponse
from hr_actions.services.employee import (
    EmployeeSnapshot,
    InMemoryEmployeeSnapshotProvider,
    set_employee_provider,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine

EMPLOYEE_ID = uuid.UUID("00000000-0000-0000-0000-0000000000e1")
OTHER_EMPLOYEE_ID = uuid.UUID("00000000-0000-0000-0000-0000000000e2")
HR_ID = uuid.UUID("00000000-0000-0000-0000-0000000000a1")

EMPLOYEE_HEADERS = {"X-User-Id": str(EMPLOYEE_ID), "X-Role": "employee"}
OTHER_EMPLOYEE_HEADERS = {"X-User-Id": str(OTHER_EMPLOYEE_ID), "X-Role": "employee"}
HR_HEADERS = {"X-User-Id": str(HR_ID), "X-Role": "hr"}
ADMIN_HEADERS = {"X-User-Id": str(HR_ID), "X-Role": "admin"}


def make_snapshot(employee_id: uuid.UUID = EMPLOYEE_ID, **overrides: object) -> EmployeeSnapshot:
    """A salaried full-time nurse unless overridden."""
    values: dict[str, object] = {
        "employee_id": employee_id,
        "first_name": "Test",
        "last_name": "Employee",
        "email": "test.employee@example.com",
        "phone": "555-0100",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "salary": 50000.0,
        "pay_frequency": "Salary",
        "job_title": "Nurse",
        "department": "Nursing",
        "department_id": 10,
        "employment_type": "FT",
        "marital_status": "Single",
        "supervisor": "Dana White",
        "location": "Main Campus",
    }
    values.update(overrides)
    return EmployeeSnapshot(**values)


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """A fresh in-memory SQLite database with all tables created."""
    _engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session wrapped in a transaction that rolls back after each test."""
    async with engine.connect() as conn:
        txn = await conn.begin()
        session = AsyncSession(bind=conn, expire_on_commit=False)
        yield session
        await session.close()
        await txn.rollback()


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def employee_provider() -> Iterator[InMemoryEmployeeSnapshotProvider]:
    """Seed the in-memory employee provider for every test."""
    provider = InMemoryEmployeeSnapshotProvider()
    provider.seed(make_snapshot())
    provider.seed(make_snapshot(OTHER_EMPLOYEE_ID, first_name="Other", hourly_rate=22.0, pay_frequency="Hourly"))
    set_employee_provider(provider)
    yield provider
    set_employee_provider(InMemoryEmployeeSnapshotProvider())


@pytest.fixture
def snapshot() -> EmployeeSnapshot:
    return make_snapshot()


@pytest.fixture
def make_request() -> Callable[..., HRActionRequestResponse]:
    """Factory for request responses as the review screens receive them."""
    counter = iter(range(1, 10_000))

    def _make(
        status: RequestStatus = RequestStatus.PENDING,
        action_type: str = "Transfer",
        **overrides: object,
    ) -> HRActionRequestResponse:
        number = next(counter)
        values: dict[str, object] = {
            "request_id": uuid.uuid4(),
            "request_number": f"HRA-20250101-{number:06d}",
            "action_type_id": 2,
            "action_type": action_type,
            "status": status,
            "employee": EmployeeSummary(employee_id=EMPLOYEE_ID, full_name="Test Employee"),
            "reason": "Routine paperwork update",
            "request_date": datetime(2025, 1, 1, 9, 0, tzinfo=UTC),
        }
        values.update(overrides)
        return HRActionRequestResponse(**values)

    return _make
