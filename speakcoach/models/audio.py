"""
Recorded audio data model
"""
import base64
import binascii
from dataclasses import dataclass
from typing import Optional

from speakcoach.errors import InvalidInputError


@dataclass(frozen=True)
class AudioSample:
    """A finished recording handed over by the UI"""
    data: bytes                 # raw audio payload
    duration: float             # total length (seconds)
    mime_type: str = "audio/wav"

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        duration: Optional[float] = None,
        byte_rate: int = 16000,
        mime_type: str = "audio/wav",
    ) -> "AudioSample":
        """
        Build a sample, estimating the duration from the payload size when it is not given

        :param data: raw audio bytes
        :param duration: recording length in seconds, if the recorder measured it
        :param byte_rate: bytes per second used for the estimate
        :param mime_type: container type of the payload
        """
        if duration is None:
            duration = len(data) / byte_rate if byte_rate > 0 else 0.0
        return cls(data=bytes(data), duration=float(duration), mime_type=mime_type)

    @classmethod
    def from_base64(
        cls,
        encoded: str,
        duration: Optional[float] = None,
        byte_rate: int = 16000,
        mime_type: str = "audio/wav",
    ) -> "AudioSample":
        """Decode an uploaded base64 payload"""
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputError(f"audio payload is not valid base64: {exc}") from exc
        return cls.from_bytes(data, duration=duration, byte_rate=byte_rate, mime_type=mime_type)
