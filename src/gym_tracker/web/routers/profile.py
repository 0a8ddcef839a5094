"""User profile routes."""

from fastapi import APIRouter, Body, Depends

from ...db import UserProfileRepository
from ...models.user_profile import Theme
from ..dependencies import current_user, profile_repo

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    user_id: str | None = Depends(current_user),
    repo: UserProfileRepository = Depends(profile_repo),
):
    profile = await repo.get_profile(user_id)
    return profile.to_dict() if profile else None


@router.post("/login")
async def login(
    email: str = Body(...),
    display_name: str | None = Body(None, alias="displayName"),
    user_id: str | None = Depends(current_user),
    repo: UserProfileRepository = Depends(profile_repo),
):
    """Create the profile on first sign-in, refresh last login otherwise."""
    profile = await repo.ensure_profile(user_id, email, display_name)
    return profile.to_dict() if profile else None


@router.put("/theme")
async def set_theme(
    theme: Theme = Body(..., embed=True),
    user_id: str | None = Depends(current_user),
    repo: UserProfileRepository = Depends(profile_repo),
):
    await repo.set_theme(user_id, theme)
    return {"theme": theme.value}
