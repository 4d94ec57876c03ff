"""
Speech scoring functions

Every score is a linear formula over crude recording statistics:
mean byte amplitude, its population standard deviation, word rate and
filler-word count. All sub-scores are clamped by their formulas and
rounded half away from zero.
"""
import math
import string
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from speakcoach.models.analysis import Insight


# ==================== Constants ====================

FILLER_WORDS: Tuple[str, ...] = ("um", "uh", "like", "you know", "so", "actually", "basically")

ESTIMATED_WORDS_PER_SECOND = 2.5
ESTIMATED_FILLER_RATIO = 0.05

OPTIMAL_WPM = 155
FAST_WPM = 180
SLOW_WPM = 120

AMPLITUDE_REFERENCE = 128
VARIATION_REFERENCE = 50
SCORE_CAP = 95
PACE_FLOOR = 50
FILLER_FLOOR = 50
FILLER_FALLBACK_SCORE = 85
LONG_SPEECH_SECONDS = 600
MIN_DURATION_FACTOR = 0.8
GOOD_LENGTH_SECONDS = 300

GENERAL_RECOMMENDATIONS: Tuple[str, str] = (
    "Continue practicing regularly to maintain improvement",
    "Consider joining a speaking group for additional practice opportunities",
)

_PUNCTUATION = string.punctuation + "“”‘’…"


@dataclass(frozen=True)
class SpeechMetrics:
    """Intermediate statistics the scores are derived from"""
    mean_amplitude: float
    amplitude_variation: float
    word_count: int
    words_per_minute: float
    filler_count: int
    duration: float


def round_half_up(value: float) -> int:
    """Round half away from zero (2.5 -> 3, -2.5 -> -3)"""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


# ==================== Statistics ====================

def signal_statistics(data: bytes) -> Tuple[float, float]:
    """
    Mean and population standard deviation of the payload's byte values

    :param data: raw audio bytes (each byte read as 0..255)
    :return: (mean_amplitude, amplitude_variation); (0.0, 0.0) for an empty payload
    """
    if not data:
        return 0.0, 0.0
    values = np.frombuffer(data, dtype=np.uint8)
    return float(values.mean()), float(values.std())


def _normalize(token: str) -> str:
    return token.lower().strip(_PUNCTUATION)


def count_words(transcript: Optional[str], duration: float) -> int:
    """Measured word count, or an estimate from duration when there is no transcript"""
    if transcript and transcript.strip():
        return len(transcript.split())
    return math.floor(duration * ESTIMATED_WORDS_PER_SECOND)


def count_filler_words(transcript: Optional[str], word_count: int) -> int:
    """
    Count filler words in the transcript

    Single-word fillers are matched per token, two-word fillers ("you know")
    per adjacent token pair. Without a transcript the count is estimated as
    5% of the word count.
    """
    if not (transcript and transcript.strip()):
        return math.floor(word_count * ESTIMATED_FILLER_RATIO)

    tokens = [_normalize(token) for token in transcript.split()]
    singles = {filler for filler in FILLER_WORDS if " " not in filler}
    phrases = [tuple(filler.split()) for filler in FILLER_WORDS if " " in filler]

    count = sum(1 for token in tokens if token in singles)
    for phrase in phrases:
        width = len(phrase)
        count += sum(
            1 for i in range(len(tokens) - width + 1)
            if tuple(tokens[i:i + width]) == phrase
        )
    return count


def words_per_minute(word_count: int, duration: float) -> float:
    """Caller guarantees duration > 0"""
    return word_count / (duration / 60)


# ==================== Sub-scores ====================

def clarity_score(mean_amplitude: float, duration: float) -> int:
    base = min(SCORE_CAP, mean_amplitude / AMPLITUDE_REFERENCE * 100)
    # slight penalty for very long speeches
    factor = max(MIN_DURATION_FACTOR, 1 - duration / LONG_SPEECH_SECONDS)
    return round_half_up(base * factor)


def pace_score(wpm: float) -> int:
    difference = abs(wpm - OPTIMAL_WPM)
    return round_half_up(max(PACE_FLOOR, 100 - difference / OPTIMAL_WPM * 100))


def volume_score(mean_amplitude: float) -> int:
    return round_half_up(min(SCORE_CAP, mean_amplitude / AMPLITUDE_REFERENCE * 100))


def tone_variety_score(amplitude_variation: float) -> int:
    return round_half_up(min(SCORE_CAP, amplitude_variation / VARIATION_REFERENCE * 100))


def filler_words_score(filler_count: int, word_count: int) -> int:
    if word_count == 0:
        return FILLER_FALLBACK_SCORE
    percentage = filler_count / word_count * 100
    return round_half_up(max(FILLER_FLOOR, 100 - percentage * 10))


def engagement_score(clarity: int, pace: int, tone_variety: int) -> int:
    return round_half_up((clarity + pace + tone_variety) / 3)


def overall_score(scores: Sequence[int]) -> int:
    """Rounded mean of the six sub-scores"""
    return round_half_up(sum(scores) / len(scores))


# ==================== Insights & recommendations ====================

def generate_insights(
    clarity: int,
    tone_variety: int,
    metrics: SpeechMetrics,
) -> List[Insight]:
    """
    Evaluate the insight rules in fixed order:
    clarity -> pace -> filler words -> tone variety -> duration

    Pace always yields exactly one insight; the other rules may yield none.
    """
    insights = []
    wpm = round_half_up(metrics.words_per_minute)

    if clarity > 85:
        insights.append(Insight(
            "positive",
            "Excellent Clarity",
            "Your speech is very clear and easy to understand. Great articulation!",
        ))
    elif clarity < 70:
        insights.append(Insight(
            "improvement",
            "Improve Clarity",
            "Focus on speaking more clearly. Try slowing down and articulating each word.",
        ))

    if metrics.words_per_minute > FAST_WPM:
        insights.append(Insight(
            "improvement",
            "Speaking Too Fast",
            f"You're speaking at {wpm} words per minute. Try slowing down to 150-160 WPM.",
        ))
    elif metrics.words_per_minute < SLOW_WPM:
        insights.append(Insight(
            "improvement",
            "Speaking Too Slowly",
            f"You're speaking at {wpm} words per minute. Try increasing your pace slightly.",
        ))
    else:
        insights.append(Insight(
            "positive",
            "Good Speaking Pace",
            f"Your speaking pace of {wpm} words per minute is in the optimal range.",
        ))

    if metrics.filler_count > 5:
        insights.append(Insight(
            "improvement",
            "Reduce Filler Words",
            f'You used {metrics.filler_count} filler words. Practice pausing instead of using "um" or "uh".',
        ))
    elif metrics.filler_count <= 2:
        insights.append(Insight(
            "positive",
            "Minimal Filler Words",
            "Great job keeping filler words to a minimum. Your speech flows naturally.",
        ))

    if tone_variety > 80:
        insights.append(Insight(
            "positive",
            "Great Vocal Variety",
            "Your tone variation keeps the audience engaged and emphasizes key points effectively.",
        ))
    elif tone_variety < 60:
        insights.append(Insight(
            "improvement",
            "Add More Vocal Variety",
            "Try varying your pitch and tone to make your speech more engaging and dynamic.",
        ))

    if metrics.duration > GOOD_LENGTH_SECONDS:
        insights.append(Insight(
            "positive",
            "Good Speech Length",
            "You maintained good quality throughout a longer speech. Excellent stamina!",
        ))

    return insights


def generate_recommendations(
    clarity: int,
    pace: int,
    volume: int,
    tone_variety: int,
    filler_words: int,
) -> List[str]:
    """Accumulate practice advice per weak sub-score, then the two general items"""
    recommendations = []

    if clarity < 80:
        recommendations.append("Practice tongue twisters to improve articulation")
        recommendations.append("Record yourself daily to monitor clarity improvements")

    if pace < 75 or pace > 85:
        recommendations.append("Use a metronome to practice consistent pacing")
        recommendations.append("Mark your script with pause indicators")

    if filler_words < 75:
        recommendations.append('Practice the "pause and breathe" technique instead of using filler words')
        recommendations.append("Record yourself and count filler words to build awareness")

    if tone_variety < 70:
        recommendations.append("Practice reading with different emotions to develop vocal range")
        recommendations.append("Use pitch variation to emphasize key points")

    if volume < 75:
        recommendations.append("Practice diaphragmatic breathing for better voice projection")
        recommendations.append("Warm up your voice before speaking")

    recommendations.extend(GENERAL_RECOMMENDATIONS)
    return recommendations
