"""
Progress analytics
Aggregates a user's practice and debate history into dashboard statistics
and achievements
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Sequence

from speakcoach.analysis.scoring import round_half_up
from speakcoach.models.debate import DebateSession
from speakcoach.models.practice import PracticeSession
from speakcoach.services.debate_service import DebateService
from speakcoach.services.practice_service import PracticeService
from speakcoach.services.team_service import TeamService
from speakcoach.utils.delay import Clock, utc_now


# skill -> (analysis field, target score)
SKILL_TARGETS = {
    "Clarity": ("clarity", 95),
    "Pace": ("pace", 90),
    "Volume": ("volume", 92),
    "Engagement": ("engagement", 90),
    "Tone Variety": ("tone_variety", 93),
    "Filler Words": ("filler_words", 88),
}

RECENT_WINDOW = 5
WEEKS = 6


@dataclass
class Achievement:
    title: str
    description: str
    earned: bool
    progress: int
    goal: int


def _average(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def improvement_rate(sessions: Sequence[PracticeSession]) -> int:
    """
    Percent change of the latest five overall scores against the five before

    :param sessions: practice sessions, newest first
    """
    recent = [s.analysis.overall_score for s in sessions[:RECENT_WINDOW]]
    older = [s.analysis.overall_score for s in sessions[RECENT_WINDOW:2 * RECENT_WINDOW]]
    recent_avg = _average(recent)
    older_avg = _average(older) if older else recent_avg
    if older_avg <= 0:
        return 0
    return round_half_up((recent_avg - older_avg) / older_avg * 100)


def longest_daily_streak(timestamps: Sequence[str]) -> int:
    """Longest run of consecutive calendar days (UTC) with at least one session"""
    days = sorted({datetime.fromisoformat(ts).date() for ts in timestamps})
    best = current = 0
    previous = None
    for day in days:
        current = current + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, current)
        previous = day
    return best


class AnalyticsService:
    """Read-only statistics over the other services' records"""

    def __init__(
        self,
        practice: PracticeService,
        debates: DebateService,
        teams: TeamService,
        clock: Clock = utc_now,
    ):
        self.practice = practice
        self.debates = debates
        self.teams = teams
        self.clock = clock

    def summary(self, user_id: str) -> dict:
        sessions = self.practice.list_sessions(user_id)
        debates = self.debates.list_debates(user_id, finished_only=True)
        scores = [s.analysis.overall_score for s in sessions]

        return {
            "total_sessions": len(sessions) + len(debates),
            "practice_sessions": len(sessions),
            "debate_sessions": len(debates),
            "average_score": round_half_up(_average(scores)),
            "practice_hours": round(sum(s.duration for s in sessions) / 3600, 1),
            "improvement_rate": improvement_rate(sessions),
            "debate_wins": sum(1 for d in debates if d.user_won),
            "skills": self.skill_averages(sessions),
            "topics": self.topic_breakdown(sessions),
            "weekly": self.weekly_activity(sessions),
            "recent": [self._recent_detail(s) for s in sessions[:3]],
        }

    @staticmethod
    def skill_averages(sessions: Sequence[PracticeSession]) -> List[dict]:
        recent = sessions[:RECENT_WINDOW]
        if not recent:
            return []
        return [
            {
                "skill": skill,
                "current": round_half_up(_average([getattr(s.analysis, field) for s in recent])),
                "target": target,
            }
            for skill, (field, target) in SKILL_TARGETS.items()
        ]

    @staticmethod
    def topic_breakdown(sessions: Sequence[PracticeSession], limit: int = 5) -> List[dict]:
        """Most practiced topics with their average overall score"""
        by_topic: Dict[str, List[int]] = {}
        for session in sessions:
            by_topic.setdefault(session.topic, []).append(session.analysis.overall_score)
        topics = [
            {"topic": topic, "sessions": len(scores), "average_score": round_half_up(_average(scores))}
            for topic, scores in by_topic.items()
        ]
        topics.sort(key=lambda t: t["sessions"], reverse=True)
        return topics[:limit]

    def weekly_activity(self, sessions: Sequence[PracticeSession]) -> List[dict]:
        """Session count and average score for each of the last six weeks, oldest first"""
        now = self.clock()
        weeks = []
        for i in range(WEEKS - 1, -1, -1):
            end = now - timedelta(days=7 * i)
            start = end - timedelta(days=7)
            scores = [
                s.analysis.overall_score
                for s in sessions
                if start < datetime.fromisoformat(s.created_at) <= end
            ]
            weeks.append({
                "week": f"Week {WEEKS - i}",
                "sessions": len(scores),
                "average_score": round_half_up(_average(scores)),
            })
        return weeks

    @staticmethod
    def _recent_detail(session: PracticeSession) -> dict:
        insights = session.analysis.insights
        return {
            "id": session.id,
            "topic": session.topic,
            "created_at": session.created_at,
            "duration_minutes": round_half_up(session.duration / 60),
            "score": session.analysis.overall_score,
            "strengths": [i.title for i in insights if i.type == "positive"][:2],
            "improvements": [i.title for i in insights if i.type == "improvement"][:2],
        }

    def achievements(self, user_id: str) -> List[Achievement]:
        sessions = self.practice.list_sessions(user_id)
        debates: List[DebateSession] = self.debates.list_debates(user_id, finished_only=True)
        total = len(sessions) + len(debates)
        average = round_half_up(_average([s.analysis.overall_score for s in sessions]))
        wins = sum(1 for d in debates if d.user_won)
        streak = longest_daily_streak([s.created_at for s in sessions] + [d.created_at for d in debates])
        on_team = self.teams.is_member(user_id)

        return [
            Achievement("First Steps", "Completed your first practice session", total >= 1, min(total, 1), 1),
            Achievement("Consistent Performer", "Practiced for 7 consecutive days", streak >= 7, min(streak, 7), 7),
            Achievement("Debate Master", "Won 10 debates against AI opponents", wins >= 10, min(wins, 10), 10),
            Achievement("Team Player", "Joined your first debate team", on_team, int(on_team), 1),
            Achievement("Rising Star", "Achieved average score above 85", average >= 85, min(average, 85), 85),
            Achievement("Marathon Speaker", "Complete 50 practice sessions", total >= 50, min(total, 50), 50),
        ]
