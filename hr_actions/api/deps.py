# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, status

from hr_actions.exceptions import AppError
from hr_actions.models.enums import Role
from hr_actions.schemas.auth import AuthContext


async def get_auth_context(
    x_user_id: uuid.UUID | None = Header(default=None),
    x_role: Role = Header(default=Role.EMPLOYEE),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    if x_user_id is None:
        raise AppError("Not logged in: missing X-User-Id header", status_code=status.HTTP_401_UNAUTHORIZED)
    return AuthContext(user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_reviewer(auth: AuthDep) -> AuthContext:
    """Require the hr or admin role."""
    if not auth.is_reviewer:
        raise AppError("Insufficient role: HR reviewer access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


ReviewerDep = Annotated[AuthContext, Depends(require_reviewer)]


async def require_admin(auth: AuthDep) -> AuthContext:
    """Require admin role for the request."""
    if auth.role != Role.ADMIN:
        raise AppError("Insufficient role: admin access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]
