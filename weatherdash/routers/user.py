"""
User profile router.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from weatherdash.crud.user import user as crud_user
from weatherdash.database import get_db
from weatherdash.dependencies.auth import get_current_user
from weatherdash.schemas.user import ProfileUpdate, UserProfile
from weatherdash.utils.rate_limit import DEFAULT_LIMIT, limiter
from weatherdash.utils.security import TokenClaims

router = APIRouter(
    prefix="/user",
    tags=["profile"],
    responses={
        401: {"description": "Access token required"},
        403: {"description": "Invalid or expired token"},
        404: {"description": "User not found"},
    },
)


@router.get("/profile", response_model=UserProfile)
@limiter.limit(DEFAULT_LIMIT)
async def get_profile(
    request: Request,
    current_user: TokenClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the caller's profile."""
    return await crud_user.get_profile(db, user_id=current_user.user_id)


@router.put("/profile", response_model=UserProfile)
@limiter.limit(DEFAULT_LIMIT)
async def update_profile(
    request: Request,
    profile_in: ProfileUpdate,
    current_user: TokenClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Partially update the caller's profile.

    Fields that are omitted, null or empty strings keep their current value;
    there is no way to clear a field through this endpoint.
    """
    return await crud_user.update_profile(db, user_id=current_user.user_id, obj_in=profile_in)
