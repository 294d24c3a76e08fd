from .analytics import compute_analytics, emotional_tone, round_half_up
from .fragments import (
    EmotionScores,
    SessionState,
    classify_sentiment,
    clean_token,
    count_fillers,
    process_fragment,
    tokenize,
)

__all__ = [
    "EmotionScores",
    "SessionState",
    "classify_sentiment",
    "clean_token",
    "compute_analytics",
    "count_fillers",
    "emotional_tone",
    "process_fragment",
    "round_half_up",
    "tokenize",
]
