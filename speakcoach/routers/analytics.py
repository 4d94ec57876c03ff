"""
Progress analytics API routes
"""
from dataclasses import asdict

from fastapi import APIRouter, Depends

from speakcoach.models.team import User
from speakcoach.services.container import Services, get_current_user, get_services

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", summary="Dashboard statistics")
def get_summary(
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return services.analytics.summary(user.id)


@router.get("/achievements", summary="Earned and pending achievements")
def get_achievements(
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return {"achievements": [asdict(a) for a in services.analytics.achievements(user.id)]}
