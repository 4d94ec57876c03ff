"""
Team service
Creating, joining and leaving practice teams
"""
import logging
import threading
import uuid
from typing import List, Optional

from speakcoach.errors import ConflictError, InvalidInputError, NotFoundError
from speakcoach.models.team import Team, TeamMember, TeamWithMembers
from speakcoach.storage.base import Repository
from speakcoach.utils.delay import Clock, isoformat, utc_now

logger = logging.getLogger(__name__)

TEAMS = "teams"
MEMBERS = "team_members"


class TeamService:
    """Owns teams and memberships; the creator of a team is its leader"""

    def __init__(self, repository: Repository, clock: Clock = utc_now):
        self.repository = repository
        self.clock = clock
        self._membership_lock = threading.Lock()

    def create_team(self, user_id: str, name: str, description: str = "") -> TeamWithMembers:
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("team name is required")

        now = isoformat(self.clock())
        team = Team(
            id=str(uuid.uuid4()),
            name=name,
            description=(description or "").strip(),
            created_by=user_id,
            created_at=now,
            updated_at=now,
        )
        self.repository.save(TEAMS, team.id, team.to_dict())
        leader = self._add_member(team.id, user_id, "leader")
        logger.info(f"[Teams] created: team_id={team.id}, leader={user_id}")
        return TeamWithMembers(team=team, members=[leader])

    def join_team(self, user_id: str, team_id: str) -> TeamWithMembers:
        self._get_team(team_id)
        with self._membership_lock:
            if self._membership(team_id, user_id) is not None:
                raise ConflictError("already a member of this team")
            self._add_member(team_id, user_id, "member")
        logger.info(f"[Teams] joined: team_id={team_id}, user_id={user_id}")
        return self.get_team(team_id)

    def leave_team(self, user_id: str, team_id: str) -> None:
        self._get_team(team_id)
        with self._membership_lock:
            membership = self._membership(team_id, user_id)
            if membership is None:
                raise NotFoundError("not a member of this team")
            self.repository.delete(MEMBERS, membership.id)
        logger.info(f"[Teams] left: team_id={team_id}, user_id={user_id}")

    def get_team(self, team_id: str) -> TeamWithMembers:
        team = self._get_team(team_id)
        return TeamWithMembers(team=team, members=self._members(team_id))

    def list_teams(self, user_id: str) -> List[TeamWithMembers]:
        """Teams the user belongs to, with every member"""
        team_ids = [
            r["team_id"] for r in self.repository.find(MEMBERS, lambda r: r["user_id"] == user_id)
        ]
        teams = [self.get_team(team_id) for team_id in dict.fromkeys(team_ids)]
        teams.sort(key=lambda t: t.team.created_at)
        return teams

    def is_member(self, user_id: str) -> bool:
        return bool(self.repository.find(MEMBERS, lambda r: r["user_id"] == user_id))

    # ==================== Helpers ====================

    def _get_team(self, team_id: str) -> Team:
        data = self.repository.get(TEAMS, team_id)
        if data is None:
            raise NotFoundError(f"team not found: {team_id}")
        return Team(**data)

    def _members(self, team_id: str) -> List[TeamMember]:
        members = [
            TeamMember(**r) for r in self.repository.find(MEMBERS, lambda r: r["team_id"] == team_id)
        ]
        members.sort(key=lambda m: (m.role != "leader", m.joined_at))
        return members

    def _membership(self, team_id: str, user_id: str) -> Optional[TeamMember]:
        for member in self._members(team_id):
            if member.user_id == user_id:
                return member
        return None

    def _add_member(self, team_id: str, user_id: str, role: str) -> TeamMember:
        member = TeamMember(
            id=str(uuid.uuid4()),
            team_id=team_id,
            user_id=user_id,
            role=role,
            joined_at=isoformat(self.clock()),
        )
        self.repository.save(MEMBERS, member.id, member.to_dict())
        return member
