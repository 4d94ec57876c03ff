"""
Debate opponent backed by an OpenAI-compatible chat API
Works with OpenAI / DeepSeek / Ollama and any other compatible endpoint
"""
import logging
import random
from typing import Optional, Sequence

from openai import OpenAI, OpenAIError

from speakcoach.models.debate import DebateMessage
from speakcoach.opponents.base import DebateOpponent
from speakcoach.opponents.canned import CANNED_RESPONSES, RandomScoring
from speakcoach.opponents.prompts import build_chat_messages, build_system_prompt

logger = logging.getLogger(__name__)


class LLMOpponent(RandomScoring, DebateOpponent):
    """
    Generates rebuttals with a chat model; turn scoring stays random

    Set different base_url values for:
    - OpenAI:      https://api.openai.com/v1
    - DeepSeek:    https://api.deepseek.com/v1
    - Ollama:      http://localhost:11434/v1
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        rng: Optional[random.Random] = None,
        client: Optional[OpenAI] = None,
    ):
        super().__init__(rng)
        self.model = model
        self.temperature = temperature
        self.client = client or OpenAI(api_key=api_key, base_url=base_url)
        logger.info(f"[LLMOpponent] ready: model={model}, base_url={base_url}")

    def choose_response(self, topic: str, position: str, history: Sequence[DebateMessage]) -> str:
        """
        Ask the model for a rebuttal, falling back to a canned one on API errors

        :param topic: debate motion
        :param position: side the opponent argues
        :param history: all messages so far
        :return: reply text
        """
        messages = [{"role": "system", "content": build_system_prompt(topic, position)}]
        messages.extend(build_chat_messages(history))

        logger.info(f"[LLMOpponent] requesting rebuttal: model={self.model}, turns={len(history)}")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except OpenAIError as exc:
            logger.warning(f"[LLMOpponent] request failed, using canned reply: {exc}")
            return self.rng.choice(CANNED_RESPONSES)

        reply = (response.choices[0].message.content or "").strip()
        if not reply:
            return self.rng.choice(CANNED_RESPONSES)
        logger.info(f"[LLMOpponent] rebuttal received: length={len(reply)}")
        return reply
