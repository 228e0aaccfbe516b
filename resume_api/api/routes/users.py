# =============================================================================
# User Routes
# =============================================================================
"""
API routes for the authenticated user's own profile.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from resume_api.api.dependencies import get_current_user_id, get_user_service
from resume_api.models.common import DataResponse, MessageResponse
from resume_api.models.user import UserResponse, UserStats, UserUpdate
from resume_api.services.user_service import UserService


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/users", tags=["users"])


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.get("/me", response_model=DataResponse[UserResponse], summary="Get current user")
async def get_me(
    user_id: UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> DataResponse[UserResponse]:
    """Profile of the caller."""
    user = await service.get_by_id(user_id)
    return DataResponse(data=UserResponse.model_validate(user))


@router.put("/me", response_model=DataResponse[UserResponse], summary="Update current user")
async def update_me(
    data: UserUpdate,
    user_id: UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> DataResponse[UserResponse]:
    """Update the caller's name or avatar."""
    user = await service.update(user_id, data)
    return DataResponse(data=UserResponse.model_validate(user))


@router.delete("/me", response_model=MessageResponse, summary="Delete current user")
async def delete_me(
    user_id: UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Deactivate and soft-delete the caller's account."""
    await service.delete(user_id)
    return MessageResponse(message="Account deleted successfully")


@router.get("/me/stats", response_model=DataResponse[UserStats], summary="Get usage statistics")
async def get_my_stats(
    user_id: UUID = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> DataResponse[UserStats]:
    """Usage statistics of the caller."""
    return DataResponse(data=await service.get_stats(user_id))
