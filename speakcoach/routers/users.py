"""
User profile API routes
"""
from fastapi import APIRouter, Depends

from speakcoach.models.team import User, UserCreateRequest, UserResponse, UserUpdateRequest
from speakcoach.services.container import Services, get_current_user, get_services

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", summary="Create a profile", response_model=UserResponse)
def register(req: UserCreateRequest, services: Services = Depends(get_services)):
    return UserResponse(**services.users.register(req.email, req.name, req.role).to_dict())


@router.get("/me", summary="Current profile", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return UserResponse(**user.to_dict())


@router.patch("/me", summary="Edit profile", response_model=UserResponse)
def update_me(
    req: UserUpdateRequest,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    updated = services.users.update_profile(user.id, name=req.name, avatar_url=req.avatar_url)
    return UserResponse(**updated.to_dict())
