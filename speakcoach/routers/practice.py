"""
Practice API routes

  1. POST /api/practice/analyze       : sync: analyze and return the session
  2. POST /api/practice/submit        : async: return task_id, analyze in background
  3. GET  /api/practice/task/{task_id}: poll an async task
  4. GET  /api/practice/sessions      : session history, newest first
  5. GET  /api/practice/topics        : suggested practice topics
"""
import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from speakcoach.errors import SpeakCoachError
from speakcoach.models.audio import AudioSample
from speakcoach.models.practice import (
    AnalyzeRequest,
    PracticeSessionResponse,
    SessionUpdateRequest,
    TaskStatusResponse,
    TopicsResponse,
)
from speakcoach.models.team import User
from speakcoach.services.container import Services, get_current_user, get_services
from speakcoach.services.practice_service import PRACTICE_TOPICS

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/practice", tags=["practice"])


def _decode_audio(req: AnalyzeRequest, services: Services) -> AudioSample:
    return AudioSample.from_base64(
        req.audio_base64,
        duration=req.duration,
        byte_rate=services.settings.audio_byte_rate,
        mime_type=req.mime_type,
    )


# ==================== API Endpoints ====================


@router.get("/topics", summary="List practice topics", response_model=TopicsResponse)
def get_topics():
    return TopicsResponse(topics=list(PRACTICE_TOPICS))


@router.post("/analyze", summary="Analyze a recording", response_model=PracticeSessionResponse)
def analyze_sync(
    req: AnalyzeRequest,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """
    Transcribe, score and store a recording, waiting for the result
    """
    audio = _decode_audio(req, services)
    try:
        session = services.practice.analyze_recording(
            user_id=user.id,
            topic=req.topic,
            audio=audio,
            transcript=req.transcript,
        )
    except SpeakCoachError:
        raise
    except Exception as e:
        logger.error(f"[API] analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    return session.to_response()


@router.post("/submit", summary="Analyze a recording in the background")
def analyze_async(
    req: AnalyzeRequest,
    background_tasks: BackgroundTasks,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """
    Queue an analysis and return its task_id; poll GET /api/practice/task/{task_id}
    """
    audio = _decode_audio(req, services)
    services.practice.analyzer.validate(audio)
    task_id = services.practice.submit(user.id)

    background_tasks.add_task(
        services.practice.run_task,
        task_id=task_id,
        user_id=user.id,
        topic=req.topic,
        audio=audio,
        transcript=req.transcript,
    )

    logger.info(f"[API] analysis task submitted: task_id={task_id}")
    return {"task_id": task_id, "status": "queued", "message": "analysis queued"}


@router.get("/task/{task_id}", summary="Analysis task status", response_model=TaskStatusResponse)
def get_task_status(
    task_id: str,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """
    State flow: queued → processing → complete / failed
    """
    task = services.practice.get_task(user.id, task_id)

    result = None
    if task["status"] == "complete" and task.get("session_id"):
        result = services.practice.get_session(user.id, task["session_id"]).to_response()

    return TaskStatusResponse(
        task_id=task_id,
        status=task["status"],
        message=task.get("message", ""),
        result=result,
    )


@router.get("/sessions", summary="Practice history", response_model=List[PracticeSessionResponse])
def list_sessions(
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return [s.to_response() for s in services.practice.list_sessions(user.id)]


@router.get("/sessions/{session_id}", summary="One practice session", response_model=PracticeSessionResponse)
def get_session(
    session_id: str,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return services.practice.get_session(user.id, session_id).to_response()


@router.patch("/sessions/{session_id}", summary="Edit a practice session", response_model=PracticeSessionResponse)
def update_session(
    session_id: str,
    req: SessionUpdateRequest,
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return services.practice.update_session(user.id, session_id, topic=req.topic).to_response()
