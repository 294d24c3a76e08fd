"""Domain data structures for recognition fragments and analytics snapshots."""

from typing import NamedTuple


class FragmentEvent(NamedTuple):
    """A chunk of recognized speech, final (committed) or interim (provisional)."""

    text: str
    is_final: bool


class EmotionalTone(NamedTuple):
    """Share of each sentiment category, formatted with two decimals."""

    positive: str
    negative: str
    neutral: str

    def as_dict(self) -> dict[str, str]:
        return self._asdict()


NEUTRAL_TONE = EmotionalTone(positive="0.00", negative="0.00", neutral="1.00")


class AnalyticsSnapshot(NamedTuple):
    """A point-in-time analytics report for one recording session."""

    speaking_pace: int
    filler_word_count: int
    vocabulary_diversity: str
    emotional_tone: EmotionalTone
    duration: int
    is_final: bool = False

    def as_dict(self) -> dict[str, object]:
        """Renders the payload delivered to UI collaborators."""
        return {
            "speakingPace": self.speaking_pace,
            "fillerWordCount": self.filler_word_count,
            "vocabularyDiversity": self.vocabulary_diversity,
            "emotionalTone": self.emotional_tone.as_dict(),
            "duration": self.duration,
        }
