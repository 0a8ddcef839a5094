"""Training type routes."""

from fastapi import APIRouter, Body, Depends, HTTPException, Response

from ...db import AttendanceRepository
from ..dependencies import attendance_repo, current_user

router = APIRouter(prefix="/training-types", tags=["training-types"])


@router.get("")
async def list_training_types(
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    types = await repo.list_training_types(user_id)
    return [{"id": t.id, **t.to_dict()} for t in types]


@router.post("", status_code=201)
async def create_training_type(
    response: Response,
    name: str = Body(...),
    color: str = Body(...),
    icon: str | None = Body(None),
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    type_id = await repo.create_training_type(user_id, name, color, icon)
    if type_id is None:
        response.status_code = 200
    return {"id": type_id}


@router.patch("/{type_id}")
async def update_training_type(
    type_id: str,
    name: str | None = Body(None),
    color: str | None = Body(None),
    icon: str | None = Body(None),
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    """Update the given fields; others keep their values."""
    found = await repo.update_training_type(
        user_id, type_id, name=name, color=color, icon=icon
    )
    if not found:
        raise HTTPException(status_code=404, detail="Training type not found")
    return {"status": "updated"}


@router.delete("/{type_id}")
async def delete_training_type(
    type_id: str,
    user_id: str | None = Depends(current_user),
    repo: AttendanceRepository = Depends(attendance_repo),
):
    await repo.delete_training_type(user_id, type_id)
    return {"status": "deleted"}
