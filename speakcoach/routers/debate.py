"""
Debate simulator API routes
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from speakcoach.models.debate import (
    DebateMessage,
    DebateMessageModel,
    DebateMessageRequest,
    DebateSession,
    DebateSessionResponse,
    DebateStartRequest,
    DebateTurnResponse,
)
from speakcoach.models.team import User
from speakcoach.services.container import Services, get_current_user, get_services
from speakcoach.services.debate_service import DEBATE_TOPICS

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/debate", tags=["debate"])


def _message(message: DebateMessage) -> DebateMessageModel:
    return DebateMessageModel(**message.to_dict())


def _session(debate: DebateSession, services: Services) -> DebateSessionResponse:
    return DebateSessionResponse(
        id=debate.id,
        topic=debate.topic,
        user_position=debate.user_position,
        user_score=debate.user_score,
        ai_score=debate.ai_score,
        messages=[_message(m) for m in debate.messages],
        duration=debate.duration,
        finished=debate.finished,
        time_left=services.debates.time_left(debate),
        created_at=debate.created_at,
    )


@router.get("/topics", summary="List debate topics")
def get_topics():
    return {"topics": list(DEBATE_TOPICS)}


@router.post("", summary="Start a debate", response_model=DebateSessionResponse)
def start_debate(
    req: DebateStartRequest,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    debate = services.debates.start(user.id, req.topic, req.position)
    return _session(debate, services)


@router.post("/{debate_id}/messages", summary="Send an argument", response_model=DebateTurnResponse)
def send_message(
    debate_id: str,
    req: DebateMessageRequest,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    user_message, ai_message = services.debates.send_message(user.id, debate_id, req.content)
    debate = services.debates.get_debate(user.id, debate_id)
    return DebateTurnResponse(
        user_message=_message(user_message),
        ai_message=_message(ai_message),
        user_score=debate.user_score,
        ai_score=debate.ai_score,
        time_left=services.debates.time_left(debate),
    )


@router.post("/{debate_id}/finish", summary="End a debate", response_model=DebateSessionResponse)
def finish_debate(
    debate_id: str,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return _session(services.debates.finish(user.id, debate_id), services)


@router.get("/sessions", summary="Debate history", response_model=List[DebateSessionResponse])
def list_debates(
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return [_session(d, services) for d in services.debates.list_debates(user.id)]


@router.get("/{debate_id}", summary="One debate", response_model=DebateSessionResponse)
def get_debate(
    debate_id: str,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return _session(services.debates.get_debate(user.id, debate_id), services)
