"""Statistics routes."""

from datetime import date

from fastapi import APIRouter, Depends, Path

from ...services.stats import StatsService
from ..dependencies import current_user, stats_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/{year}")
async def year_stats(
    year: int,
    today: date | None = None,
    user_id: str | None = Depends(current_user),
    service: StatsService = Depends(stats_service),
):
    """Yearly attendance overview."""
    report = await service.year_report(user_id, year, today=today)
    return report.to_dict()


@router.get("/{year}/health")
async def health_stats(
    year: int,
    today: date | None = None,
    top: int = 5,
    user_id: str | None = Depends(current_user),
    service: StatsService = Depends(stats_service),
):
    """Supplement consistency, nutrient totals and top product."""
    report = await service.health_report(user_id, year, today=today, top_n=top)
    return report.to_dict()


@router.get("/{year}/{month}")
async def month_stats(
    year: int,
    month: int = Path(..., ge=1, le=12),
    user_id: str | None = Depends(current_user),
    service: StatsService = Depends(stats_service),
):
    report = await service.month_report(user_id, year, month)
    return report.to_dict()
