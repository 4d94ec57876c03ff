"""
Debate opponent abstract base class
"""
from abc import ABC, abstractmethod
from typing import Sequence

from speakcoach.models.debate import DebateMessage


class DebateOpponent(ABC):
    """Chooses the opponent's replies and scores each turn"""

    def opening(self, topic: str, user_position: str) -> str:
        """First message of a debate"""
        if user_position == "pro":
            return (
                f'I\'ll argue against "{topic}". You\'ll have the pro position. '
                "Let's begin with your opening statement. You have 2 minutes to make your case."
            )
        return (
            f'I\'ll argue for "{topic}". You\'ll have the con position. '
            "Let's begin with your opening statement. You have 2 minutes to make your case."
        )

    def closing(self) -> str:
        """Final message once the debate ends"""
        return "Time's up! Great debate. Let me analyze your performance and provide feedback."

    @abstractmethod
    def choose_response(self, topic: str, position: str, history: Sequence[DebateMessage]) -> str:
        """
        Reply to the latest user argument

        :param topic: debate motion
        :param position: side the opponent argues (pro / con)
        :param history: all messages so far, the user's latest turn last
        :return: reply text
        """
        ...

    @abstractmethod
    def score_user_points(self, history: Sequence[DebateMessage]) -> int:
        """Points awarded for the user's latest turn"""
        ...

    @abstractmethod
    def score_points(self) -> int:
        """Points the opponent earns for its own reply"""
        ...
