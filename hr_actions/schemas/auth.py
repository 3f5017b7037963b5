# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

from hr_actions.models.enums import REVIEWER_ROLES, Role


class AuthContext(BaseModel):
    """Dev auth context extracted from request headers."""

    user_id: uuid.UUID
    role: Role = Role.EMPLOYEE

    @property
    def is_reviewer(self) -> bool:
        return self.role in REVIEWER_ROLES
