"""API routes, mounted under settings.API_PREFIX."""

from typing import Any

from fastapi import APIRouter

from app.api.routes import auth, health, members, users
from app.schemas.auth import ErrorResponse

# Every error body is {"error": message}; documented once for all routes.
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 500)
}

router = APIRouter(responses=ERROR_RESPONSES)
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(members.router, prefix="/members", tags=["members"])
router.include_router(health.router, prefix="/health", tags=["health"])
