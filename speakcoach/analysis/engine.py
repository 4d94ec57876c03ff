"""
Speech scoring engine
Turns one recording (plus optional transcript) into an AnalysisResult
"""
import logging
from typing import Optional, Union

from speakcoach.analysis import scoring
from speakcoach.errors import InvalidInputError
from speakcoach.models.analysis import AnalysisResult
from speakcoach.models.audio import AudioSample
from speakcoach.models.transcript import Transcript
from speakcoach.utils.delay import Delay, NoDelay

logger = logging.getLogger(__name__)


class SpeechAnalyzer:
    """
    Deterministic, formula-based speech analysis

    The computation is pure: identical inputs always give identical results.
    ``delay`` only emulates processing latency for interactive clients.
    """

    def __init__(self, delay: Optional[Delay] = None):
        self.delay = delay or NoDelay()

    def analyze(
        self,
        audio: AudioSample,
        transcript: Union[Transcript, str, None] = None,
    ) -> AnalysisResult:
        """
        Score a recording

        :param audio: recorded payload and its duration
        :param transcript: transcript of the recording; when absent, word and
            filler counts are estimated from the duration
        :return: AnalysisResult
        :raises InvalidInputError: payload unreadable or duration <= 0
        """
        self.validate(audio)
        self.delay.wait()

        text = transcript.full_text if isinstance(transcript, Transcript) else transcript
        metrics = self.compute_metrics(audio, text)

        clarity = scoring.clarity_score(metrics.mean_amplitude, metrics.duration)
        pace = scoring.pace_score(metrics.words_per_minute)
        volume = scoring.volume_score(metrics.mean_amplitude)
        tone_variety = scoring.tone_variety_score(metrics.amplitude_variation)
        filler_words = scoring.filler_words_score(metrics.filler_count, metrics.word_count)
        engagement = scoring.engagement_score(clarity, pace, tone_variety)
        overall = scoring.overall_score(
            (clarity, pace, volume, tone_variety, filler_words, engagement)
        )

        result = AnalysisResult(
            overall_score=overall,
            clarity=clarity,
            pace=pace,
            volume=volume,
            tone_variety=tone_variety,
            filler_words=filler_words,
            engagement=engagement,
            insights=tuple(scoring.generate_insights(clarity, tone_variety, metrics)),
            recommendations=tuple(
                scoring.generate_recommendations(clarity, pace, volume, tone_variety, filler_words)
            ),
        )

        logger.info(
            f"[Analyzer] analysis done: duration={metrics.duration:.1f}s, "
            f"words={metrics.word_count}, wpm={metrics.words_per_minute:.0f}, "
            f"fillers={metrics.filler_count}, overall={overall}"
        )
        return result

    @staticmethod
    def compute_metrics(audio: AudioSample, transcript: Optional[str]) -> scoring.SpeechMetrics:
        """Derive the statistics every score is computed from"""
        mean_amplitude, amplitude_variation = scoring.signal_statistics(audio.data)
        word_count = scoring.count_words(transcript, audio.duration)
        return scoring.SpeechMetrics(
            mean_amplitude=mean_amplitude,
            amplitude_variation=amplitude_variation,
            word_count=word_count,
            words_per_minute=scoring.words_per_minute(word_count, audio.duration),
            filler_count=scoring.count_filler_words(transcript, word_count),
            duration=audio.duration,
        )

    @staticmethod
    def validate(audio: AudioSample) -> None:
        if not isinstance(audio, AudioSample):
            raise InvalidInputError(f"expected AudioSample, got {type(audio).__name__}")
        if not isinstance(audio.data, (bytes, bytearray)):
            raise InvalidInputError("audio payload is not a byte sequence")
        duration = audio.duration
        # NaN fails every comparison, so test for the valid range
        if not (isinstance(duration, (int, float)) and duration > 0 and duration != float("inf")):
            raise InvalidInputError(f"audio duration must be positive, got {duration!r}")
