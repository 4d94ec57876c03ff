"""
Prompt templates for the LLM debate opponent
"""
from typing import List, Sequence

from speakcoach.models.debate import DebateMessage

# ==================== System Prompt ====================

SYSTEM_PROMPT_TEMPLATE = """You are a sharp but fair debate sparring partner for a student practicing competitive debate.

Motion: "{topic}"
You argue the {position} side. The student argues the other side.

Rules:
- Reply in 2-4 sentences, plain text, no lists or markdown
- Address the student's latest argument directly before adding your own point
- Stay on the motion; never concede the whole debate
- Keep a respectful, coaching tone"""


def build_system_prompt(topic: str, position: str) -> str:
    """
    Assemble the system prompt

    :param topic: debate motion
    :param position: side the opponent argues (pro / con)
    """
    return SYSTEM_PROMPT_TEMPLATE.format(topic=topic, position=position)


def build_chat_messages(history: Sequence[DebateMessage]) -> List[dict]:
    """Map debate turns to chat roles; the opponent is the assistant"""
    return [
        {"role": "assistant" if m.sender == "ai" else "user", "content": m.content}
        for m in history
    ]
