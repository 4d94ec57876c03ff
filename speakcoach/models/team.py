"""
User profile and team data models
"""
from dataclasses import asdict, dataclass, field
from typing import List, Literal, Optional

from pydantic import BaseModel


UserRole = Literal["student", "coach", "admin"]
MemberRole = Literal["leader", "member"]


# -------- Internal data models (dataclass) --------

@dataclass
class User:
    id: str
    email: str
    name: str
    role: UserRole = "student"
    avatar_url: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Team:
    id: str
    name: str
    description: str
    created_by: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TeamMember:
    id: str
    team_id: str
    user_id: str
    role: MemberRole
    joined_at: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TeamWithMembers:
    """A team plus its member list, as shown on the teams page"""
    team: Team
    members: List[TeamMember] = field(default_factory=list)

    @property
    def member_count(self) -> int:
        return len(self.members)


# -------- API request / response models (Pydantic) --------

class UserCreateRequest(BaseModel):
    email: str
    name: str
    role: UserRole = "student"


class UserUpdateRequest(BaseModel):
    name: Optional[str] = None
    avatar_url: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: Optional[str] = None
    created_at: str
    updated_at: str


class TeamCreateRequest(BaseModel):
    name: str
    description: str = ""


class TeamMemberModel(BaseModel):
    user_id: str
    name: str
    role: MemberRole
    joined_at: str


class TeamResponse(BaseModel):
    id: str
    name: str
    description: str
    created_by: str
    created_at: str
    members: List[TeamMemberModel]
    member_count: int
