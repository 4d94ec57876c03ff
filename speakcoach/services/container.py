"""
Service container
Builds every state-owning service once per application and hands them to
the routers through FastAPI dependencies
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, Request

from speakcoach.analysis.engine import SpeechAnalyzer
from speakcoach.config import Settings
from speakcoach.errors import NotFoundError
from speakcoach.models.team import User
from speakcoach.services.analytics_service import AnalyticsService
from speakcoach.services.debate_service import DebateService, create_opponent
from speakcoach.services.practice_service import PracticeService, create_transcriber
from speakcoach.services.team_service import TeamService
from speakcoach.services.user_service import UserService
from speakcoach.storage.json_store import JsonFileRepository
from speakcoach.utils.delay import Delay

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    users: UserService
    practice: PracticeService
    debates: DebateService
    teams: TeamService
    analytics: AnalyticsService


def build_services(settings: Settings) -> Services:
    """Wire services from configuration"""
    repository = JsonFileRepository(settings.data_dir)
    practice = PracticeService(
        repository=repository,
        analyzer=SpeechAnalyzer(delay=Delay(settings.analysis_delay)),
        transcriber=create_transcriber(settings),
    )
    debates = DebateService(
        repository=repository,
        opponent=create_opponent(settings),
        time_limit=settings.debate_time_limit,
        reply_delay=Delay(settings.debate_reply_delay),
    )
    teams = TeamService(repository)
    services = Services(
        settings=settings,
        users=UserService(repository),
        practice=practice,
        debates=debates,
        teams=teams,
        analytics=AnalyticsService(practice, debates, teams),
    )
    logger.info(
        f"[Services] ready: data_dir={settings.data_dir}, "
        f"transcriber={settings.transcriber_type}, opponent={settings.opponent_type}"
    )
    return services


# ==================== FastAPI dependencies ====================

def get_services(request: Request) -> Services:
    return request.app.state.services


def get_current_user(
    request: Request,
    x_user_id: Optional[str] = Header(default=None),
) -> User:
    """Resolve the caller from the X-User-Id header set by the auth proxy"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="missing X-User-Id header")
    try:
        return get_services(request).users.get_user(x_user_id)
    except NotFoundError:
        raise HTTPException(status_code=401, detail="unknown user")
