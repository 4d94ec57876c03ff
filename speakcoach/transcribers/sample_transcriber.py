"""
Sample transcriber
Stands in for a real speech-to-text backend by returning one of a few
canned practice paragraphs
"""
import logging
import random
from typing import Optional, Sequence

from speakcoach.errors import TranscriptionUnavailable
from speakcoach.models.audio import AudioSample
from speakcoach.models.transcript import Transcript, TranscriptSegment
from speakcoach.transcribers.base import Transcriber
from speakcoach.utils.delay import Delay, NoDelay

logger = logging.getLogger(__name__)


SAMPLE_TRANSCRIPTS = (
    "Today I want to discuss the critical importance of renewable energy in addressing climate change. "
    "Solar and wind power have become increasingly cost-effective alternatives to fossil fuels, offering "
    "both environmental benefits and economic opportunities for communities worldwide.",

    "The digital revolution has fundamentally transformed how we communicate, work, and access information. "
    "While technology has brought unprecedented connectivity and convenience, we must also address the "
    "challenges of digital privacy, cybersecurity, and the digital divide that affects underserved communities.",

    "Education serves as the foundation for individual growth and societal progress. We need to invest in "
    "innovative teaching methods, embrace technology in the classroom, and ensure equal access to quality "
    "education for all students, regardless of their socioeconomic background.",

    "Artificial intelligence presents both remarkable opportunities and significant challenges for our "
    "society. As we develop increasingly sophisticated AI systems, we must carefully consider their impact "
    "on employment, privacy, and decision-making processes while ensuring these technologies benefit "
    "humanity as a whole.",

    "Public health initiatives play a crucial role in maintaining community wellbeing. From vaccination "
    "programs to mental health support services, we must prioritize preventive care and ensure healthcare "
    "accessibility for all members of our society.",

    "Environmental conservation requires immediate action and long-term commitment from individuals, "
    "businesses, and governments. We must implement sustainable practices, protect biodiversity, and work "
    "together to preserve our planet for future generations.",
)


class SampleTranscriber(Transcriber):
    """
    Picks a canned paragraph at random

    Pass a seeded ``random.Random`` for reproducible output.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        delay: Optional[Delay] = None,
        samples: Sequence[str] = SAMPLE_TRANSCRIPTS,
    ):
        self.rng = rng or random.Random()
        self.delay = delay or NoDelay()
        self.samples = tuple(samples)
        logger.info(f"[SampleTranscriber] ready: samples={len(self.samples)}")

    def transcribe(self, audio: AudioSample) -> Transcript:
        if not self.samples:
            raise TranscriptionUnavailable("no sample transcripts configured")

        self.delay.wait()
        text = self.rng.choice(self.samples)
        logger.info(f"[SampleTranscriber] transcribed {audio.duration:.1f}s of audio: words={len(text.split())}")
        return Transcript(
            full_text=text,
            language="en",
            segments=[TranscriptSegment(start=0.0, end=round(audio.duration, 2), text=text)],
        )
