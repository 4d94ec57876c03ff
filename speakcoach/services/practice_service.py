"""
Practice session pipeline
Orchestrates: transcribe → analyze → persist

Analysis can run synchronously or as a background task whose state moves
queued → processing → complete / failed
"""
import logging
import random
import uuid
from typing import List, Optional

from speakcoach.analysis.engine import SpeechAnalyzer
from speakcoach.config import Settings
from speakcoach.errors import (
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    TranscriptionUnavailable,
)
from speakcoach.models.audio import AudioSample
from speakcoach.models.practice import PracticeSession
from speakcoach.models.transcript import Transcript
from speakcoach.storage.base import Repository
from speakcoach.transcribers.base import Transcriber
from speakcoach.utils.delay import Clock, Delay, isoformat, utc_now

logger = logging.getLogger(__name__)

SESSIONS = "practice_sessions"
TASKS = "analysis_tasks"

PRACTICE_TOPICS = (
    "The importance of renewable energy",
    "Technology's impact on education",
    "Why everyone should learn to code",
    "The future of remote work",
    "Social media and mental health",
    "The value of public libraries",
    "Space exploration: worth the cost?",
    "Artificial intelligence in everyday life",
    "The benefits of learning a second language",
    "Climate change and personal responsibility",
)


def create_transcriber(settings: Settings) -> Transcriber:
    """Build a transcriber from configuration"""
    t_type = settings.transcriber_type.lower()

    if t_type == "sample":
        from speakcoach.transcribers.sample_transcriber import SampleTranscriber
        return SampleTranscriber(rng=random.Random(), delay=Delay(settings.transcription_delay))

    elif t_type == "groq":
        from speakcoach.transcribers.groq_transcriber import GroqWhisperTranscriber
        if not settings.groq_api_key:
            raise ValueError("GROQ_API_KEY is not set, add it to .env")
        return GroqWhisperTranscriber(api_key=settings.groq_api_key)

    else:
        raise ValueError(f"unsupported transcriber type: {t_type}, choose sample / groq")


class PracticeService:
    """
    Owns practice sessions and their analysis tasks

    Transcription failures never fail an analysis: the analyzer falls back
    to duration-based word and filler estimates.
    """

    def __init__(
        self,
        repository: Repository,
        analyzer: SpeechAnalyzer,
        transcriber: Transcriber,
        clock: Clock = utc_now,
    ):
        self.repository = repository
        self.analyzer = analyzer
        self.transcriber = transcriber
        self.clock = clock

    # ==================== Core pipeline ====================

    def analyze_recording(
        self,
        user_id: str,
        topic: str,
        audio: AudioSample,
        transcript: Optional[str] = None,
    ) -> PracticeSession:
        """
        Score a recording and store it as a practice session

        :param user_id: owner of the session
        :param topic: practice topic
        :param audio: the recording
        :param transcript: known transcript; transcribed when absent
        :return: PracticeSession
        """
        topic = (topic or "").strip()
        if not topic:
            raise InvalidInputError("a practice topic is required")
        self.analyzer.validate(audio)

        text = transcript.strip() if transcript and transcript.strip() else None
        if text is None:
            text = self._step_transcribe(audio)

        analysis = self.analyzer.analyze(audio, Transcript(full_text=text) if text else None)

        session = PracticeSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            topic=topic,
            duration=audio.duration,
            transcript=text,
            analysis=analysis,
            created_at=isoformat(self.clock()),
        )
        self.repository.save(SESSIONS, session.id, session.to_dict())
        logger.info(
            f"[Practice] session saved: session_id={session.id}, user_id={user_id}, "
            f"overall={analysis.overall_score}"
        )
        return session

    def _step_transcribe(self, audio: AudioSample) -> Optional[str]:
        """Transcribe, or return None so the analyzer estimates instead"""
        try:
            transcript = self.transcriber.transcribe(audio)
        except TranscriptionUnavailable as e:
            logger.warning(f"[Practice] transcription unavailable, using estimates: {e}")
            return None
        return transcript.full_text.strip() or None

    # ==================== Background tasks ====================

    def submit(self, user_id: str) -> str:
        """Register a queued analysis task and return its id"""
        task_id = str(uuid.uuid4())
        self._update_task(task_id, user_id, "queued", "analysis queued")
        return task_id

    def run_task(
        self,
        task_id: str,
        user_id: str,
        topic: str,
        audio: AudioSample,
        transcript: Optional[str] = None,
    ) -> Optional[PracticeSession]:
        """Execute a queued task, recording its outcome instead of raising"""
        self._update_task(task_id, user_id, "processing", "analyzing speech...")
        try:
            session = self.analyze_recording(user_id, topic, audio, transcript)
        except Exception as exc:
            logger.error(f"[Practice] task failed: task_id={task_id}, error={exc}", exc_info=True)
            self._update_task(task_id, user_id, "failed", str(exc))
            return None

        self._update_task(task_id, user_id, "complete", "analysis complete", session_id=session.id)
        return session

    def get_task(self, user_id: str, task_id: str) -> dict:
        data = self.repository.get(TASKS, task_id)
        if data is None or data["user_id"] != user_id:
            raise NotFoundError(f"task not found: {task_id}")
        return data

    def _update_task(
        self,
        task_id: str,
        user_id: str,
        status: str,
        message: str = "",
        session_id: Optional[str] = None,
    ) -> None:
        self.repository.save(TASKS, task_id, {
            "task_id": task_id,
            "user_id": user_id,
            "status": status,
            "message": message,
            "session_id": session_id,
            "updated_at": isoformat(self.clock()),
        })

    # ==================== Session queries ====================

    def list_sessions(self, user_id: str) -> List[PracticeSession]:
        """The user's sessions, newest first"""
        records = self.repository.find(SESSIONS, lambda r: r["user_id"] == user_id)
        sessions = [PracticeSession.from_dict(r) for r in records]
        sessions.sort(key=lambda s: s.created_at, reverse=True)
        return sessions

    def get_session(self, user_id: str, session_id: str) -> PracticeSession:
        data = self.repository.get(SESSIONS, session_id)
        if data is None:
            raise NotFoundError(f"practice session not found: {session_id}")
        if data["user_id"] != user_id:
            raise PermissionDeniedError("session belongs to another user")
        return PracticeSession.from_dict(data)

    def update_session(self, user_id: str, session_id: str, topic: Optional[str] = None) -> PracticeSession:
        session = self.get_session(user_id, session_id)
        if topic is not None:
            if not topic.strip():
                raise InvalidInputError("topic cannot be blank")
            session.topic = topic.strip()
        self.repository.save(SESSIONS, session.id, session.to_dict())
        return session
