"""Tests for the pure scoring functions."""

import pytest

from speakcoach.analysis import scoring
from speakcoach.analysis.scoring import SpeechMetrics


def _metrics(**overrides) -> SpeechMetrics:
    values = dict(
        mean_amplitude=128.0,
        amplitude_variation=0.0,
        word_count=150,
        words_per_minute=150.0,
        filler_count=0,
        duration=60.0,
    )
    values.update(overrides)
    return SpeechMetrics(**values)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (85.5, 86), (2.4999, 2), (-2.5, -3), (0.0, 0)],
)
def test_round_half_up_rounds_halves_away_from_zero(value: float, expected: int) -> None:
    """Halves go away from zero, unlike Python's banker's rounding."""
    assert scoring.round_half_up(value) == expected


def test_signal_statistics_uses_population_deviation() -> None:
    """Alternating 0/255 bytes have mean and deviation 127.5."""
    mean, deviation = scoring.signal_statistics(bytes([0, 255] * 50))

    assert mean == pytest.approx(127.5)
    assert deviation == pytest.approx(127.5)


def test_signal_statistics_handles_long_recordings() -> None:
    """Five minutes at 16 kB/s: every byte value equally often gives mean 127.5, deviation sqrt((256^2 - 1) / 12)."""
    payload = bytes(range(256)) * 18750

    mean, deviation = scoring.signal_statistics(payload)

    assert len(payload) == 4_800_000
    assert mean == pytest.approx(127.5)
    assert deviation == pytest.approx(((256 ** 2 - 1) / 12) ** 0.5)
    assert scoring.signal_statistics(bytearray(payload[:512])) == pytest.approx((mean, deviation))


def test_signal_statistics_of_empty_payload_is_zero() -> None:
    """An empty payload yields degenerate zero statistics instead of an error."""
    assert scoring.signal_statistics(b"") == (0.0, 0.0)


def test_count_words_measures_transcript_or_estimates() -> None:
    """Transcripts are counted; without one the count is floor(duration * 2.5)."""
    assert scoring.count_words("hello   world\nagain", 60) == 3
    assert scoring.count_words(None, 61) == 152
    assert scoring.count_words("   ", 10) == 25


def test_count_filler_words_is_case_insensitive_and_matches_phrases() -> None:
    """Single fillers match per token, 'you know' matches as an adjacent pair."""
    text = "Um, so like I think you know it was basically fine. ACTUALLY."

    assert scoring.count_filler_words(text, 12) == 6


def test_count_filler_words_ignores_words_containing_fillers() -> None:
    """Only whole tokens count."""
    assert scoring.count_filler_words("umbrella likely sofa", 3) == 0


def test_count_filler_words_estimates_without_transcript() -> None:
    """The estimate is floor(5% of the word count)."""
    assert scoring.count_filler_words(None, 150) == 7
    assert scoring.count_filler_words("", 19) == 0


def test_pace_peaks_at_optimal_rate() -> None:
    """155 WPM scores a perfect 100."""
    assert scoring.pace_score(155) == 100


@pytest.mark.parametrize("wpm", [0, 2, 40, 155, 200, 320, 5000])
def test_pace_stays_between_floor_and_100(wpm: float) -> None:
    """Pace never drops below its floor of 50."""
    assert 50 <= scoring.pace_score(wpm) <= 100


def test_pace_penalizes_distance_linearly() -> None:
    """200 WPM is 45 away from optimum: 100 - 45/155*100 = 70.97."""
    assert scoring.pace_score(200) == 71


@pytest.mark.parametrize("amplitude", [0, 10, 64, 127.5, 128, 200, 255])
def test_volume_is_capped_at_95(amplitude: float) -> None:
    """Volume never exceeds 95."""
    assert 0 <= scoring.volume_score(amplitude) <= 95


def test_clarity_decays_for_long_speeches() -> None:
    """The duration factor shrinks linearly and bottoms out at 0.8 from two minutes on."""
    assert scoring.clarity_score(128, 60) == 86
    assert scoring.clarity_score(128, 120) == 76
    assert scoring.clarity_score(128, 3600) == 76


def test_tone_variety_scales_with_variation() -> None:
    """Variation of 25 is half of the reference 50."""
    assert scoring.tone_variety_score(25) == 50
    assert scoring.tone_variety_score(500) == 95


def test_filler_words_score_edge_cases() -> None:
    """No fillers is perfect, no words is the 85 fallback, heavy use floors at 50."""
    assert scoring.filler_words_score(0, 40) == 100
    assert scoring.filler_words_score(0, 0) == 85
    assert scoring.filler_words_score(7, 150) == 53
    assert scoring.filler_words_score(30, 40) == 50


def test_overall_score_is_rounded_mean() -> None:
    """189 / 6 = 31.5 rounds up to 32."""
    assert scoring.overall_score((0, 97, 0, 0, 60, 32)) == 32


def test_pace_insight_always_exactly_one() -> None:
    """Every word rate produces exactly one of the three pace insights."""
    pace_titles = {"Speaking Too Fast", "Speaking Too Slowly", "Good Speaking Pace"}
    for wpm in (0.5, 119.9, 120, 155, 180, 180.1, 900):
        titles = [i.title for i in scoring.generate_insights(75, 70, _metrics(words_per_minute=wpm))]
        assert len(pace_titles.intersection(titles)) == 1


def test_insights_follow_fixed_order() -> None:
    """Clarity, pace, filler words, tone variety and duration appear in that order."""
    insights = scoring.generate_insights(
        90, 85, _metrics(words_per_minute=150, filler_count=1, duration=301)
    )

    assert [i.title for i in insights] == [
        "Excellent Clarity",
        "Good Speaking Pace",
        "Minimal Filler Words",
        "Great Vocal Variety",
        "Good Speech Length",
    ]
    assert all(i.type == "positive" for i in insights)


def test_middle_bands_emit_no_insight() -> None:
    """Clarity 70-85, three to five fillers and tone variety 60-80 stay silent."""
    insights = scoring.generate_insights(80, 70, _metrics(filler_count=4))

    assert [i.title for i in insights] == ["Good Speaking Pace"]


def test_insight_descriptions_interpolate_values() -> None:
    """Pace text shows the rounded rate, the filler text shows the count."""
    insights = scoring.generate_insights(
        75, 70, _metrics(words_per_minute=190.5, filler_count=9)
    )

    assert insights[0].title == "Speaking Too Fast"
    assert "191 words per minute" in insights[0].description
    assert insights[1].title == "Reduce Filler Words"
    assert insights[1].description.startswith("You used 9 filler words.")


def test_recommendations_always_end_with_general_advice() -> None:
    """Strong scores leave only the two general recommendations."""
    recommendations = scoring.generate_recommendations(
        clarity=90, pace=80, volume=90, tone_variety=90, filler_words=100
    )

    assert recommendations == list(scoring.GENERAL_RECOMMENDATIONS)


def test_recommendations_accumulate_per_weak_score() -> None:
    """Every weak sub-score adds two items ahead of the general pair."""
    recommendations = scoring.generate_recommendations(
        clarity=50, pace=90, volume=50, tone_variety=50, filler_words=50
    )

    assert len(recommendations) == 12
    assert recommendations[0] == "Practice tongue twisters to improve articulation"
    assert recommendations[2] == "Use a metronome to practice consistent pacing"
    assert recommendations[-2:] == list(scoring.GENERAL_RECOMMENDATIONS)
