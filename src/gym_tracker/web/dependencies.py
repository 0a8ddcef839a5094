"""Request-scoped dependencies shared by the routers."""

from fastapi import Header, Request

from ..db import AttendanceRepository, SupplementRepository, UserProfileRepository
from ..services.stats import StatsService


def current_user(x_user_id: str | None = Header(default=None)) -> str | None:
    """Current user id from the ``X-User-Id`` header; None when signed out."""
    return x_user_id or None


def attendance_repo(request: Request) -> AttendanceRepository:
    return request.app.state.attendance


def supplement_repo(request: Request) -> SupplementRepository:
    return request.app.state.supplements


def profile_repo(request: Request) -> UserProfileRepository:
    return request.app.state.profiles


def stats_service(request: Request) -> StatsService:
    return request.app.state.stats
