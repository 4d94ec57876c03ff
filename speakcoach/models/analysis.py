"""
Speech analysis data models
"""
from dataclasses import dataclass, field
from typing import List, Literal, Tuple

from pydantic import BaseModel


InsightKind = Literal["positive", "improvement"]


# -------- Internal data models (dataclass) --------

@dataclass(frozen=True)
class Insight:
    """A short observation shown to the speaker after analysis"""
    type: InsightKind    # positive / improvement
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"type": self.type, "title": self.title, "description": self.description}


@dataclass(frozen=True)
class AnalysisResult:
    """Scores, insights and recommendations for one recording"""
    overall_score: int
    clarity: int
    pace: int
    volume: int
    tone_variety: int
    filler_words: int
    engagement: int
    insights: Tuple[Insight, ...] = field(default_factory=tuple)
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def sub_scores(self) -> Tuple[int, int, int, int, int, int]:
        return (
            self.clarity,
            self.pace,
            self.volume,
            self.tone_variety,
            self.filler_words,
            self.engagement,
        )

    def to_dict(self) -> dict:
        return {
            "overall_score": self.overall_score,
            "clarity": self.clarity,
            "pace": self.pace,
            "volume": self.volume,
            "tone_variety": self.tone_variety,
            "filler_words": self.filler_words,
            "engagement": self.engagement,
            "insights": [insight.to_dict() for insight in self.insights],
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        return cls(
            overall_score=int(data["overall_score"]),
            clarity=int(data["clarity"]),
            pace=int(data["pace"]),
            volume=int(data["volume"]),
            tone_variety=int(data["tone_variety"]),
            filler_words=int(data["filler_words"]),
            engagement=int(data["engagement"]),
            insights=tuple(Insight(**item) for item in data.get("insights", [])),
            recommendations=tuple(data.get("recommendations", [])),
        )


# -------- API response models (Pydantic) --------

class InsightModel(BaseModel):
    type: InsightKind
    title: str
    description: str


class AnalysisResponse(BaseModel):
    """Serialized AnalysisResult"""
    overall_score: int
    clarity: int
    pace: int
    volume: int
    tone_variety: int
    filler_words: int
    engagement: int
    insights: List[InsightModel]
    recommendations: List[str]

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        return cls(**result.to_dict())
