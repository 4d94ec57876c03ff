"""
Team API routes
"""
from typing import List

from fastapi import APIRouter, Depends

from speakcoach.errors import NotFoundError
from speakcoach.models.team import TeamCreateRequest, TeamMemberModel, TeamResponse, TeamWithMembers, User
from speakcoach.services.container import Services, get_current_user, get_services

router = APIRouter(prefix="/teams", tags=["teams"])


def _team(team: TeamWithMembers, services: Services) -> TeamResponse:
    members = []
    for member in team.members:
        try:
            name = services.users.get_user(member.user_id).name
        except NotFoundError:
            name = ""
        members.append(TeamMemberModel(
            user_id=member.user_id,
            name=name,
            role=member.role,
            joined_at=member.joined_at,
        ))
    return TeamResponse(
        id=team.team.id,
        name=team.team.name,
        description=team.team.description,
        created_by=team.team.created_by,
        created_at=team.team.created_at,
        members=members,
        member_count=team.member_count,
    )


@router.post("", summary="Create a team", response_model=TeamResponse)
def create_team(
    req: TeamCreateRequest,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return _team(services.teams.create_team(user.id, req.name, req.description), services)


@router.get("", summary="Teams I belong to", response_model=List[TeamResponse])
def list_teams(
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return [_team(t, services) for t in services.teams.list_teams(user.id)]


@router.post("/{team_id}/join", summary="Join a team", response_model=TeamResponse)
def join_team(
    team_id: str,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return _team(services.teams.join_team(user.id, team_id), services)


@router.post("/{team_id}/leave", summary="Leave a team")
def leave_team(
    team_id: str,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    services.teams.leave_team(user.id, team_id)
    return {"team_id": team_id, "left": True}
