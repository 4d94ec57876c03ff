"""
Practice session data models
"""
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field

from speakcoach.models.analysis import AnalysisResponse, AnalysisResult


# -------- API request / response models (Pydantic) --------

class AnalyzeRequest(BaseModel):
    """Request body for analyzing a recording"""
    topic: str                                                   # practice topic
    audio_base64: str = Field(..., description="base64-encoded recording")
    duration: Optional[float] = None                             # seconds, estimated from size if absent
    transcript: Optional[str] = None                             # skip transcription when given
    mime_type: str = "audio/wav"


class SessionUpdateRequest(BaseModel):
    topic: Optional[str] = None


class PracticeSessionResponse(BaseModel):
    id: str
    topic: str
    duration: float
    transcript: Optional[str] = None
    analysis: AnalysisResponse
    created_at: str


class TaskStatusResponse(BaseModel):
    """Background analysis task status"""
    task_id: str
    status: str          # queued / processing / complete / failed
    message: str = ""
    result: Optional[PracticeSessionResponse] = None


class TopicsResponse(BaseModel):
    topics: List[str]


# -------- Internal data models (dataclass) --------

@dataclass
class PracticeSession:
    """A scored practice recording"""
    id: str
    user_id: str
    topic: str
    duration: float
    analysis: AnalysisResult
    created_at: str                      # ISO-8601 UTC
    transcript: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "topic": self.topic,
            "duration": self.duration,
            "transcript": self.transcript,
            "analysis": self.analysis.to_dict(),
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PracticeSession":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            topic=data["topic"],
            duration=data["duration"],
            transcript=data.get("transcript"),
            analysis=AnalysisResult.from_dict(data["analysis"]),
            created_at=data["created_at"],
        )

    def to_response(self) -> PracticeSessionResponse:
        return PracticeSessionResponse(
            id=self.id,
            topic=self.topic,
            duration=self.duration,
            transcript=self.transcript,
            analysis=AnalysisResponse.from_result(self.analysis),
            created_at=self.created_at,
        )
