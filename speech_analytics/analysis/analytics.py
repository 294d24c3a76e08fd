"""Point-in-time analytics computed from a session's counters."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from speech_analytics.analysis.fragments import EmotionScores, SessionState
from speech_analytics.domain import NEUTRAL_TONE, AnalyticsSnapshot, EmotionalTone


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def format_ratio(value: float) -> str:
    """Formats to two decimals, ties going up."""
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def emotional_tone(scores: EmotionScores) -> EmotionalTone:
    """
    Returns each category's share of all sentiment-bearing words.

    A session without any sentiment word reads as fully neutral.
    """
    total = scores.total
    if total == 0:
        return NEUTRAL_TONE
    return EmotionalTone(
        positive=format_ratio(scores.positive / total),
        negative=format_ratio(scores.negative / total),
        neutral=format_ratio(scores.neutral / total),
    )


def compute_analytics(
    state: SessionState, now: float, is_final: bool = False
) -> AnalyticsSnapshot | None:
    """
    Computes an analytics snapshot for the session at clock reading ``now``.

    Arguments:
        state (SessionState): Session counters.
        now (float): Current clock reading in seconds, same clock as
            ``state.start_time``.
        is_final (bool): Passed through to mark the terminating report.

    Returns:
        AnalyticsSnapshot | None: None when no session has been started.
    """
    if state.start_time is None:
        return None

    duration_minutes = max(now - state.start_time, 0.0) / 60
    speaking_pace = (
        round_half_up(state.word_count / duration_minutes)
        if duration_minutes > 0
        else 0
    )
    diversity = (
        len(state.unique_words) / state.word_count if state.word_count > 0 else 0
    )

    return AnalyticsSnapshot(
        speaking_pace=speaking_pace,
        filler_word_count=state.filler_word_count,
        vocabulary_diversity=format_ratio(diversity),
        emotional_tone=emotional_tone(state.emotion_scores),
        duration=round_half_up(duration_minutes * 60),
        is_final=is_final,
    )
