"""
Speech transcript data model
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TranscriptSegment:
    """A single timed transcript segment"""
    start: float   # start time (seconds)
    end: float     # end time (seconds)
    text: str      # segment text


@dataclass
class Transcript:
    """Full transcript of one recording"""
    full_text: str                                             # merged text
    language: Optional[str] = None                             # detected language (en / ...)
    segments: List[TranscriptSegment] = field(default_factory=list)

