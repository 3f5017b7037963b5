import logging
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlmodel import col

from hr_actions.config import get_settings
from hr_actions.db import SessionDep
from hr_actions.models.enums import RequestStatus
from hr_actions.models.request import HRActionRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok", "degraded"]
    version: str
    environment: str
    database: bool
    pending_requests: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Report service health and the size of the review queue."""
    settings = get_settings()
    pending: int | None = None

    try:
        result = await session.execute(
            select(func.count())
            .select_from(HRActionRequest)
            .where(col(HRActionRequest.status) == RequestStatus.PENDING.value)
        )
        pending = result.scalar_one()
    except Exception:
        logger.exception("Health check: database query failed")

    return HealthResponse(
        status="ok" if pending is not None else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database=pending is not None,
        pending_requests=pending,
    )
