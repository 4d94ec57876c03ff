"""Shared fixtures: temporary storage, a controllable clock and wired services."""

import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from speakcoach import create_app
from speakcoach.analysis.engine import SpeechAnalyzer
from speakcoach.config import Settings
from speakcoach.errors import TranscriptionUnavailable
from speakcoach.models.audio import AudioSample
from speakcoach.opponents.canned import CannedOpponent
from speakcoach.services.analytics_service import AnalyticsService
from speakcoach.services.container import Services
from speakcoach.services.debate_service import DebateService
from speakcoach.services.practice_service import PracticeService
from speakcoach.services.team_service import TeamService
from speakcoach.services.user_service import UserService
from speakcoach.storage.json_store import JsonFileRepository
from speakcoach.transcribers.base import Transcriber
from speakcoach.transcribers.sample_transcriber import SampleTranscriber


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class UnavailableTranscriber(Transcriber):
    """Transcriber that never produces text."""

    def __init__(self):
        self.calls = 0

    def transcribe(self, audio):
        self.calls += 1
        raise TranscriptionUnavailable("backend offline")


def make_audio(value: int = 128, size: int = 1000, duration: float = 60.0) -> AudioSample:
    """Uniform payload with a fixed duration."""
    return AudioSample(data=bytes([value]) * size, duration=duration)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(tmp_path) -> JsonFileRepository:
    return JsonFileRepository(tmp_path / "store")


@pytest.fixture
def practice_service(repository, clock) -> PracticeService:
    return PracticeService(
        repository=repository,
        analyzer=SpeechAnalyzer(),
        transcriber=SampleTranscriber(rng=random.Random(7)),
        clock=clock,
    )


@pytest.fixture
def debate_service(repository, clock) -> DebateService:
    return DebateService(
        repository=repository,
        opponent=CannedOpponent(rng=random.Random(11)),
        time_limit=300,
        clock=clock,
    )


@pytest.fixture
def team_service(repository, clock) -> TeamService:
    return TeamService(repository, clock=clock)


@pytest.fixture
def user_service(repository, clock) -> UserService:
    return UserService(repository, clock=clock)


@pytest.fixture
def services(tmp_path, user_service, practice_service, debate_service, team_service, clock) -> Services:
    settings = Settings(data_dir=tmp_path / "store", analysis_delay=0.0, transcription_delay=0.0)
    return Services(
        settings=settings,
        users=user_service,
        practice=practice_service,
        debates=debate_service,
        teams=team_service,
        analytics=AnalyticsService(practice_service, debate_service, team_service, clock=clock),
    )


@pytest.fixture
def client(services) -> TestClient:
    return TestClient(create_app(services))
