"""Tests for progress analytics and achievements."""

from types import SimpleNamespace

from conftest import make_audio
from speakcoach.services.analytics_service import AnalyticsService, improvement_rate, longest_daily_streak


def _scored(*scores):
    """Minimal newest-first session stand-ins carrying only an overall score"""
    return [SimpleNamespace(analysis=SimpleNamespace(overall_score=s)) for s in scores]


def test_improvement_rate_compares_recent_to_previous_five() -> None:
    assert improvement_rate(_scored(80, 80, 80, 80, 80, 64, 64, 64, 64, 64)) == 25
    assert improvement_rate(_scored(60, 60, 60, 60, 60, 80, 80, 80, 80, 80)) == -25


def test_improvement_rate_without_history_is_zero() -> None:
    assert improvement_rate([]) == 0
    assert improvement_rate(_scored(70, 75)) == 0


def test_longest_daily_streak() -> None:
    timestamps = [
        "2024-03-01T08:00:00+00:00",
        "2024-03-01T20:00:00+00:00",
        "2024-03-02T09:00:00+00:00",
        "2024-03-03T09:00:00+00:00",
        "2024-03-05T09:00:00+00:00",
    ]

    assert longest_daily_streak(timestamps) == 3
    assert longest_daily_streak([]) == 0


def _analytics(practice_service, debate_service, team_service, clock) -> AnalyticsService:
    return AnalyticsService(practice_service, debate_service, team_service, clock=clock)


def test_summary_of_new_user_is_empty(practice_service, debate_service, team_service, clock) -> None:
    summary = _analytics(practice_service, debate_service, team_service, clock).summary("u1")

    assert summary["total_sessions"] == 0
    assert summary["average_score"] == 0
    assert summary["skills"] == []
    assert summary["recent"] == []
    assert [w["sessions"] for w in summary["weekly"]] == [0] * 6


def test_summary_aggregates_sessions_and_debates(practice_service, debate_service, team_service, clock) -> None:
    practice_service.analyze_recording("u1", "Remote work", make_audio(duration=60), "hello world")
    clock.advance(days=8)
    practice_service.analyze_recording("u1", "Remote work", make_audio(duration=300), "hello world")
    debate = debate_service.start("u1", "Privacy is more important than security")
    debate_service.finish("u1", debate.id)
    debate_service.start("u1", "Unfinished debate")

    summary = _analytics(practice_service, debate_service, team_service, clock).summary("u1")

    assert summary["practice_sessions"] == 2
    assert summary["debate_sessions"] == 1
    assert summary["total_sessions"] == 3
    assert summary["practice_hours"] == 0.1
    assert summary["topics"] == [
        {"topic": "Remote work", "sessions": 2, "average_score": summary["average_score"]}
    ]
    assert [w["week"] for w in summary["weekly"]] == [f"Week {n}" for n in range(1, 7)]
    assert [w["sessions"] for w in summary["weekly"]][-2:] == [1, 1]
    assert len(summary["skills"]) == 6
    assert summary["recent"][0]["duration_minutes"] == 5


def test_achievements_track_progress(practice_service, debate_service, team_service, clock) -> None:
    for _ in range(3):
        practice_service.analyze_recording("u1", "Topic", make_audio(), "hello world")
        clock.advance(days=1)
    team_service.create_team("u1", "Debaters")

    achievements = {
        a.title: a for a in _analytics(practice_service, debate_service, team_service, clock).achievements("u1")
    }

    assert achievements["First Steps"].earned
    assert achievements["Consistent Performer"].progress == 3
    assert not achievements["Consistent Performer"].earned
    assert achievements["Team Player"].earned
    assert achievements["Rising Star"].progress == 63
    assert achievements["Marathon Speaker"].progress == 3
    assert achievements["Debate Master"].progress == 0
