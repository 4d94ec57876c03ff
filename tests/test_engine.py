"""Tests for the SpeechAnalyzer engine."""

import math

import pytest

from conftest import make_audio
from speakcoach.analysis.engine import SpeechAnalyzer
from speakcoach.errors import InvalidInputError
from speakcoach.models.analysis import AnalysisResult
from speakcoach.models.audio import AudioSample
from speakcoach.models.transcript import Transcript
from speakcoach.utils.delay import Delay


@pytest.fixture
def analyzer() -> SpeechAnalyzer:
    return SpeechAnalyzer()


def test_reference_recording_scores(analyzer: SpeechAnalyzer) -> None:
    """Flat amplitude 128, one minute, 'hello world' gives the documented scores."""
    result = analyzer.analyze(make_audio(128, duration=60), Transcript("hello world"))

    assert result.clarity == 86
    assert result.pace == 50
    assert result.volume == 95
    assert result.tone_variety == 0
    assert result.filler_words == 100
    assert result.engagement == 45
    assert result.overall_score == 63
    assert [i.title for i in result.insights] == [
        "Excellent Clarity",
        "Speaking Too Slowly",
        "Minimal Filler Words",
        "Add More Vocal Variety",
    ]
    assert result.recommendations == (
        "Use a metronome to practice consistent pacing",
        "Mark your script with pause indicators",
        "Practice reading with different emotions to develop vocal range",
        "Use pitch variation to emphasize key points",
        "Continue practicing regularly to maintain improvement",
        "Consider joining a speaking group for additional practice opportunities",
    )


def test_plain_string_transcript_is_accepted(analyzer: SpeechAnalyzer) -> None:
    """A raw string scores the same as a Transcript object."""
    audio = make_audio(128, duration=60)

    assert analyzer.analyze(audio, "hello world") == analyzer.analyze(audio, Transcript("hello world"))


def test_optimal_pace_scores_100(analyzer: SpeechAnalyzer) -> None:
    """155 words in one minute hits the optimal rate."""
    result = analyzer.analyze(make_audio(duration=60), " ".join(["word"] * 155))

    assert result.pace == 100
    assert "Good Speaking Pace" in [i.title for i in result.insights]


def test_missing_transcript_uses_duration_estimates(analyzer: SpeechAnalyzer) -> None:
    """60 s estimates 150 words and 7 fillers."""
    result = analyzer.analyze(make_audio(duration=60))

    assert result.filler_words == 53
    assert "Reduce Filler Words" in [i.title for i in result.insights]
    assert "Good Speaking Pace" in [i.title for i in result.insights]


def test_empty_payload_scores_degenerate_but_valid(analyzer: SpeechAnalyzer) -> None:
    """No bytes but a positive duration yields zero signal scores, not an error."""
    result = analyzer.analyze(AudioSample(data=b"", duration=10))

    assert (result.clarity, result.volume, result.tone_variety) == (0, 0, 0)
    assert result.pace == 97
    assert result.filler_words == 60
    assert result.engagement == 32
    assert result.overall_score == 32


def test_blank_transcript_uses_estimates(analyzer: SpeechAnalyzer) -> None:
    """A whitespace-only transcript counts as absent."""
    audio = make_audio(duration=30)

    assert analyzer.analyze(audio, "   ") == analyzer.analyze(audio, None)


@pytest.mark.parametrize("duration", [0, -5, math.nan, math.inf])
def test_invalid_duration_raises(analyzer: SpeechAnalyzer, duration: float) -> None:
    """Non-positive or non-finite durations are rejected instead of producing NaN."""
    with pytest.raises(InvalidInputError):
        analyzer.analyze(AudioSample(data=b"\x80" * 10, duration=duration))


def test_non_bytes_payload_raises(analyzer: SpeechAnalyzer) -> None:
    """A payload that is not a byte sequence is unreadable."""
    with pytest.raises(InvalidInputError):
        analyzer.analyze(AudioSample(data="not audio", duration=10))


def test_analysis_is_idempotent(analyzer: SpeechAnalyzer) -> None:
    """Identical inputs give identical results."""
    audio = AudioSample(data=bytes(range(256)) * 4, duration=95)
    text = "So um I think, you know, like this works"

    assert analyzer.analyze(audio, text) == analyzer.analyze(audio, text)


@pytest.mark.parametrize(
    ("payload", "duration", "text"),
    [
        (bytes([0, 255] * 500), 30, None),
        (bytes([255]) * 100, 900, "um uh like so"),
        (bytes(range(256)), 1, " ".join(["fast"] * 50)),
        (bytes([3]) * 10, 400, "a b c"),
    ],
)
def test_scores_stay_in_bounds(analyzer: SpeechAnalyzer, payload: bytes, duration: float, text) -> None:
    """Signal scores stay in [0, 95], pace and filler in [50, 100], overall equals the rounded mean."""
    result = analyzer.analyze(AudioSample(payload, duration), text)

    for score in (result.clarity, result.volume, result.tone_variety):
        assert 0 <= score <= 95
    assert 50 <= result.pace <= 100
    assert 50 <= result.filler_words <= 100
    assert 0 <= result.overall_score <= 100
    assert result.overall_score == math.floor(sum(result.sub_scores) / 6 + 0.5)
    assert result.recommendations[-2:] == (
        "Continue practicing regularly to maintain improvement",
        "Consider joining a speaking group for additional practice opportunities",
    )


def test_long_speech_earns_length_insight(analyzer: SpeechAnalyzer) -> None:
    """Recordings over five minutes end with the length insight."""
    result = analyzer.analyze(make_audio(duration=301))

    assert result.insights[-1].title == "Good Speech Length"


def test_result_round_trips_through_dict(analyzer: SpeechAnalyzer) -> None:
    """to_dict / from_dict preserves scores and ordering exactly."""
    result = analyzer.analyze(AudioSample(bytes([0, 255] * 100), 400), "um so like")

    assert AnalysisResult.from_dict(result.to_dict()) == result


def test_delay_is_injected() -> None:
    """The configured delay is awaited once per analysis."""
    waits = []
    analyzer = SpeechAnalyzer(delay=Delay(2.5, sleep=waits.append))

    analyzer.analyze(make_audio())

    assert waits == [2.5]


def test_invalid_input_skips_delay() -> None:
    """Validation happens before the simulated latency."""
    waits = []
    analyzer = SpeechAnalyzer(delay=Delay(3, sleep=waits.append))

    with pytest.raises(InvalidInputError):
        analyzer.analyze(AudioSample(b"\x01", 0))
    assert waits == []
