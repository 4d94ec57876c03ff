"""
Scripted debate opponent
Replies with one of a fixed set of rebuttals and scores turns at random
"""
import random
from typing import Optional, Sequence

from speakcoach.models.debate import DebateMessage
from speakcoach.opponents.base import DebateOpponent


CANNED_RESPONSES = (
    "That's an interesting point, but consider this counterargument: "
    "The potential risks often outweigh the benefits in this scenario.",
    "I understand your perspective, however, the data suggests a different conclusion. "
    "Let me present evidence to the contrary.",
    "While your argument has merit, there are several flaws in that reasoning that I'd like to address.",
    "That's a compelling argument, but have you considered the long-term implications of that approach?",
    "I can see the logic in your statement, but let me challenge that assumption with real-world examples.",
)

USER_POINTS_RANGE = (70, 89)
AI_POINTS_RANGE = (75, 89)


class RandomScoring:
    """Uniform random turn scores, shared by every built-in opponent"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def score_user_points(self, history: Sequence[DebateMessage]) -> int:
        return self.rng.randint(*USER_POINTS_RANGE)

    def score_points(self) -> int:
        return self.rng.randint(*AI_POINTS_RANGE)


class CannedOpponent(RandomScoring, DebateOpponent):
    """Picks a canned rebuttal for every turn"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        responses: Sequence[str] = CANNED_RESPONSES,
    ):
        super().__init__(rng)
        self.responses = tuple(responses)

    def choose_response(self, topic: str, position: str, history: Sequence[DebateMessage]) -> str:
        return self.rng.choice(self.responses)
