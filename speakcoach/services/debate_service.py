"""
Debate simulator service
Runs timed debates between the user and a pluggable opponent
"""
import logging
import random
import threading
import uuid
from collections import defaultdict
from datetime import datetime
from typing import List, Optional, Tuple

from speakcoach.config import Settings
from speakcoach.errors import ConflictError, InvalidInputError, NotFoundError, PermissionDeniedError
from speakcoach.models.debate import DebateMessage, DebateSession
from speakcoach.opponents.base import DebateOpponent
from speakcoach.storage.base import Repository
from speakcoach.utils.delay import Clock, Delay, NoDelay, isoformat, utc_now

logger = logging.getLogger(__name__)

DEBATES = "debate_sessions"

DEBATE_TOPICS = (
    "Artificial Intelligence should be regulated by government",
    "Social media has a net negative impact on society",
    "Universal Basic Income should be implemented globally",
    "Climate change action should prioritize economic growth",
    "Privacy is more important than security",
    "Remote work is better than office work",
    "Cryptocurrency should replace traditional currency",
    "Space exploration funding should be increased",
)


def create_opponent(settings: Settings) -> DebateOpponent:
    """Build a debate opponent from configuration"""
    o_type = settings.opponent_type.lower()

    if o_type == "canned":
        from speakcoach.opponents.canned import CannedOpponent
        return CannedOpponent(rng=random.Random())

    elif o_type == "llm":
        from speakcoach.opponents.llm_opponent import LLMOpponent
        if not settings.llm_api_key:
            raise ValueError("LLM_API_KEY is not set, add it to .env")
        return LLMOpponent(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
        )

    else:
        raise ValueError(f"unsupported opponent type: {o_type}, choose canned / llm")


class DebateService:
    """
    Owns debate sessions

    Debate flow: start → send_message (repeated) → finish.
    A message arriving after the time limit closes the debate instead.
    """

    def __init__(
        self,
        repository: Repository,
        opponent: DebateOpponent,
        time_limit: float = 300.0,
        reply_delay: Optional[Delay] = None,
        clock: Clock = utc_now,
    ):
        self.repository = repository
        self.opponent = opponent
        self.time_limit = time_limit
        self.reply_delay = reply_delay or NoDelay()
        self.clock = clock
        # one lock per debate serializes read-modify-save of its record
        self._locks = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def start(self, user_id: str, topic: str, position: str = "pro") -> DebateSession:
        """
        Open a debate; the opponent takes the other side

        :param user_id: debating user
        :param topic: one of DEBATE_TOPICS, or a custom motion
        :param position: user's side (pro / con)
        """
        topic = (topic or "").strip()
        if not topic:
            raise InvalidInputError("a debate topic is required")
        if position not in ("pro", "con"):
            raise InvalidInputError(f"position must be pro or con, got {position!r}")

        now = isoformat(self.clock())
        debate = DebateSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            topic=topic,
            user_position=position,
            started_at=now,
            created_at=now,
        )
        debate.messages.append(DebateMessage("ai", self.opponent.opening(topic, position), now))
        self._save(debate)
        logger.info(f"[Debate] started: debate_id={debate.id}, user_id={user_id}, position={position}")
        return debate

    def send_message(self, user_id: str, debate_id: str, content: str) -> Tuple[DebateMessage, DebateMessage]:
        """
        Score the user's argument and let the opponent reply

        :return: (user_message, ai_message)
        :raises ConflictError: the debate is finished or its time ran out
        """
        content = (content or "").strip()
        if not content:
            raise InvalidInputError("message cannot be empty")

        with self._lock_for(debate_id):
            debate = self.get_debate(user_id, debate_id)
            if debate.finished:
                raise ConflictError("debate already finished")
            if self.time_left(debate) <= 0:
                self._finish(debate)
                raise ConflictError("debate time is up")

            user_message = DebateMessage("user", content, isoformat(self.clock()))
            debate.messages.append(user_message)
            user_message.points = self.opponent.score_user_points(debate.messages)
            debate.user_score += user_message.points

            self.reply_delay.wait()
            reply = self.opponent.choose_response(debate.topic, debate.opponent_position, debate.messages)
            ai_message = DebateMessage("ai", reply, isoformat(self.clock()), points=self.opponent.score_points())
            debate.messages.append(ai_message)
            debate.ai_score += ai_message.points

            self._save(debate)
        logger.info(
            f"[Debate] turn scored: debate_id={debate.id}, "
            f"user={user_message.points}, ai={ai_message.points}"
        )
        return user_message, ai_message

    def finish(self, user_id: str, debate_id: str) -> DebateSession:
        with self._lock_for(debate_id):
            debate = self.get_debate(user_id, debate_id)
            if debate.finished:
                raise ConflictError("debate already finished")
            return self._finish(debate)

    def _finish(self, debate: DebateSession) -> DebateSession:
        elapsed = self._elapsed(debate)
        debate.duration = round(min(elapsed, self.time_limit), 2)
        debate.finished = True
        debate.messages.append(DebateMessage("ai", self.opponent.closing(), isoformat(self.clock())))
        self._save(debate)
        logger.info(
            f"[Debate] finished: debate_id={debate.id}, user_score={debate.user_score}, "
            f"ai_score={debate.ai_score}, duration={debate.duration}s"
        )
        return debate

    # ==================== Queries ====================

    def get_debate(self, user_id: str, debate_id: str) -> DebateSession:
        data = self.repository.get(DEBATES, debate_id)
        if data is None:
            raise NotFoundError(f"debate not found: {debate_id}")
        if data["user_id"] != user_id:
            raise PermissionDeniedError("debate belongs to another user")
        return DebateSession.from_dict(data)

    def list_debates(self, user_id: str, finished_only: bool = False) -> List[DebateSession]:
        """The user's debates, newest first"""
        records = self.repository.find(DEBATES, lambda r: r["user_id"] == user_id)
        debates = [DebateSession.from_dict(r) for r in records]
        if finished_only:
            debates = [d for d in debates if d.finished]
        debates.sort(key=lambda d: d.created_at, reverse=True)
        return debates

    def time_left(self, debate: DebateSession) -> float:
        if debate.finished:
            return 0.0
        return max(0.0, self.time_limit - self._elapsed(debate))

    def _elapsed(self, debate: DebateSession) -> float:
        started = datetime.fromisoformat(debate.started_at)
        return (self.clock() - started).total_seconds()

    def _lock_for(self, debate_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[debate_id]

    def _save(self, debate: DebateSession) -> None:
        self.repository.save(DEBATES, debate.id, debate.to_dict())
