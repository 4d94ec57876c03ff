"""
Debate simulator data models
"""
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


Sender = Literal["user", "ai"]
Position = Literal["pro", "con"]


# -------- Internal data models (dataclass) --------

@dataclass
class DebateMessage:
    """One turn in a debate"""
    sender: Sender
    content: str
    timestamp: str                 # ISO-8601 UTC
    points: Optional[int] = None   # only scored turns carry points

    def to_dict(self) -> dict:
        return {
            "sender": self.sender,
            "content": self.content,
            "timestamp": self.timestamp,
            "points": self.points,
        }


@dataclass
class DebateSession:
    """A debate between the user and the opponent"""
    id: str
    user_id: str
    topic: str
    user_position: Position
    started_at: str
    user_score: int = 0
    ai_score: int = 0
    messages: List[DebateMessage] = field(default_factory=list)
    duration: float = 0.0          # seconds, fixed when the debate finishes
    finished: bool = False
    created_at: str = ""

    @property
    def opponent_position(self) -> Position:
        return "con" if self.user_position == "pro" else "pro"

    @property
    def user_won(self) -> bool:
        return self.user_score > self.ai_score

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "topic": self.topic,
            "user_position": self.user_position,
            "started_at": self.started_at,
            "user_score": self.user_score,
            "ai_score": self.ai_score,
            "messages": [m.to_dict() for m in self.messages],
            "duration": self.duration,
            "finished": self.finished,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DebateSession":
        data = dict(data)
        data["messages"] = [DebateMessage(**m) for m in data.get("messages", [])]
        return cls(**data)


# -------- API request / response models (Pydantic) --------

class DebateStartRequest(BaseModel):
    topic: str
    position: Position = "pro"


class DebateMessageRequest(BaseModel):
    content: str = Field(..., description="The user's argument")


class DebateMessageModel(BaseModel):
    sender: Sender
    content: str
    timestamp: str
    points: Optional[int] = None


class DebateSessionResponse(BaseModel):
    id: str
    topic: str
    user_position: Position
    user_score: int
    ai_score: int
    messages: List[DebateMessageModel]
    duration: float
    finished: bool
    time_left: float
    created_at: str = ""


class DebateTurnResponse(BaseModel):
    """The user's scored message and the opponent's reply"""
    user_message: DebateMessageModel
    ai_message: DebateMessageModel
    user_score: int
    ai_score: int
    time_left: float
