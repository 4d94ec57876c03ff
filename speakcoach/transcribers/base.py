"""
Transcriber abstract base class
"""
from abc import ABC, abstractmethod

from speakcoach.models.audio import AudioSample
from speakcoach.models.transcript import Transcript


class Transcriber(ABC):
    """Speech-to-text base class"""

    @abstractmethod
    def transcribe(self, audio: AudioSample) -> Transcript:
        """
        Turn a recording into text

        :param audio: recorded audio payload
        :return: Transcript
        :raises TranscriptionUnavailable: when no text can be produced
        """
        ...
