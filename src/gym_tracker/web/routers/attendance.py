"""Attendance routes."""

from fastapi import APIRouter, Body, Depends, Path

from ...db import AttendanceRepository
from ..dependencies import attendance_repo, current_user

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.put("/{day}")
async def mark_attendance(
    day: str,
    training_type_id: str | None = Body(None, alias="trainingTypeId"),
    duration_minutes: int | None = Body(None, alias="durationMinutes"),
    notes: str | None = Body(None),
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    """Create or overwrite the record for a day."""
    record = await repo.mark_attendance(
        user_id,
        day,
        training_type_id=training_type_id,
        duration_minutes=duration_minutes,
        notes=notes,
    )
    return {"record": record.to_dict() if record else None}


@router.delete("/{day}")
async def remove_attendance(
    day: str,
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    await repo.remove_attendance(user_id, day)
    return {"status": "deleted"}


@router.post("/{day}/toggle")
async def toggle_attendance(
    day: str,
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    """Flip attendance for a day and return the new state."""
    attended = await repo.toggle_attendance(user_id, day)
    return {"date": day, "attended": attended}


@router.get("/range")
async def get_range(
    start: str,
    end: str,
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    """Records from ``start`` to ``end`` inclusive."""
    records = await repo.get_range(user_id, start, end)
    return [r.to_dict() for r in records]


@router.get("/{year}/{month}")
async def get_month(
    year: int,
    month: int = Path(..., ge=1, le=12),
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    records = await repo.get_month(user_id, year, month)
    return [r.to_dict() for r in records]


@router.get("/{year}")
async def get_year(
    year: int,
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    records = await repo.get_year(user_id, year)
    return [r.to_dict() for r in records]
