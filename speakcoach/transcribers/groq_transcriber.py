"""
Whisper transcriber backed by the Groq API
Uses Groq's whisper-large-v3-turbo model through the OpenAI-compatible endpoint
No local model, no native dependencies
"""
import logging

from openai import OpenAI, OpenAIError

from speakcoach.errors import TranscriptionUnavailable
from speakcoach.models.audio import AudioSample
from speakcoach.models.transcript import Transcript, TranscriptSegment
from speakcoach.transcribers.base import Transcriber

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
}


class GroqWhisperTranscriber(Transcriber):
    """
    Whisper transcription through Groq

    Get an API key at https://console.groq.com/keys
    """

    def __init__(
        self,
        api_key: str,
        model: str = "whisper-large-v3-turbo",
        language: str | None = "en",
    ):
        self.model = model
        self.language = language
        self.client = OpenAI(
            api_key=api_key,
            base_url="https://api.groq.com/openai/v1",
        )
        logger.info(f"[GroqWhisper] ready: model={model}")

    def transcribe(self, audio: AudioSample) -> Transcript:
        """
        Upload the recording and parse the verbose JSON response

        :param audio: recorded audio payload
        :return: Transcript
        """
        logger.info(f"[GroqWhisper] transcribing: size={len(audio.data) / 1024:.1f} KB")

        filename = f"speech.{_EXTENSIONS.get(audio.mime_type, 'wav')}"
        kwargs = {
            "model": self.model,
            "file": (filename, audio.data, audio.mime_type),
            "response_format": "verbose_json",
            "timestamp_granularities": ["segment"],
        }
        if self.language:
            kwargs["language"] = self.language

        try:
            response = self.client.audio.transcriptions.create(**kwargs)
        except OpenAIError as exc:
            logger.warning(f"[GroqWhisper] transcription failed: {exc}")
            raise TranscriptionUnavailable(str(exc)) from exc

        full_text = (response.text or "").strip()
        if not full_text:
            raise TranscriptionUnavailable("empty transcription")
        language = getattr(response, "language", None) or self.language

        segments = []
        for seg in getattr(response, "segments", []) or []:
            is_dict = isinstance(seg, dict)
            segments.append(
                TranscriptSegment(
                    start=round(seg["start"] if is_dict else seg.start, 2),
                    end=round(seg["end"] if is_dict else seg.end, 2),
                    text=(seg.get("text", "") if is_dict else seg.text).strip(),
                )
            )

        logger.info(
            f"[GroqWhisper] done: language={language}, segments={len(segments)}, "
            f"words={len(full_text.split())}"
        )
        return Transcript(full_text=full_text, language=language, segments=segments)
