"""
Fragment processing for live transcripts.

This module keeps the per-session counters and updates them from each
recognition fragment. Interim fragments feed the vocabulary and the
sentiment counters only; final fragments also add to the word count, the
filler count and the stored transcript.

Functions:
    - tokenize: Splits a fragment into lower-cased whitespace tokens.
    - clean_token: Strips punctuation and underscores from a token.
    - classify_sentiment: Returns the sentiment category of a clean token.
    - count_fillers: Counts filler phrase matches in raw fragment text.
    - process_fragment: Applies one fragment to a session state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Mapping

from speech_analytics.config import FILLER_WORDS, SENTIMENT_DICTIONARY
from speech_analytics.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

_NON_WORD = re.compile(r"[^\w\s]|_")


@dataclass
class EmotionScores:
    """Running count of sentiment-bearing words per category."""

    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral

    def increment(self, category: str) -> None:
        setattr(self, category, getattr(self, category) + 1)


@dataclass
class SessionState:
    """Mutable counters for one recording session."""

    transcript_text: str = ""
    word_count: int = 0
    unique_words: set[str] = field(default_factory=set)
    filler_word_count: int = 0
    emotion_scores: EmotionScores = field(default_factory=EmotionScores)
    start_time: float | None = None
    is_recording: bool = False

    def reset(self, start_time: float | None = None) -> None:
        """Clears every counter and the transcript for a new session."""
        self.transcript_text = ""
        self.word_count = 0
        self.unique_words = set()
        self.filler_word_count = 0
        self.emotion_scores = EmotionScores()
        self.start_time = start_time

    def append_final(self, text: str) -> None:
        """Appends a finalized fragment to the stored transcript."""
        self.transcript_text = f"{self.transcript_text} {text}".strip()


def tokenize(text: str) -> list[str]:
    """
    Splits a fragment into lower-cased tokens on runs of whitespace.

    Arguments:
        text (str): Raw fragment text.

    Returns:
        list[str]: Tokens; empty for blank input.
    """
    return text.strip().lower().split()


def clean_token(token: str) -> str:
    return _NON_WORD.sub("", token)


def classify_sentiment(
    word: str,
    dictionary: Mapping[str, Iterable[str]] = SENTIMENT_DICTIONARY,
) -> str | None:
    """Returns the first sentiment category listing ``word``, or None."""
    for category, words in dictionary.items():
        if word in words:
            return category
    return None


@lru_cache(maxsize=64)
def _filler_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


def count_fillers(text: str, fillers: Iterable[str] = FILLER_WORDS) -> int:
    """
    Counts whole-word filler matches in the raw fragment text.

    Each phrase is matched on its own, so a word may be counted once per
    phrase it belongs to.

    Arguments:
        text (str): Original fragment text, punctuation included.
        fillers (Iterable[str]): Filler words and phrases.

    Returns:
        int: Number of non-overlapping matches summed over all phrases.
    """
    return sum(len(_filler_pattern(phrase).findall(text)) for phrase in fillers)


def process_fragment(
    state: SessionState,
    text: str,
    is_interim: bool = False,
    *,
    fillers: Iterable[str] = FILLER_WORDS,
    dictionary: Mapping[str, Iterable[str]] = SENTIMENT_DICTIONARY,
) -> None:
    """
    Updates the session counters from one recognition fragment.

    Arguments:
        state (SessionState): Session to mutate.
        text (str): Fragment text as reported by the recognizer.
        is_interim (bool): True for provisional fragments.
        fillers (Iterable[str]): Filler phrases counted in final fragments.
        dictionary (Mapping[str, Iterable[str]]): Sentiment word lists.
    """
    words: list[str] = tokenize(text)

    if not is_interim:
        state.word_count += len(words)

    for word in words:
        clean_word = clean_token(word)
        if not clean_word:
            continue
        state.unique_words.add(clean_word)
        category = classify_sentiment(clean_word, dictionary)
        if category is not None:
            state.emotion_scores.increment(category)

    if not is_interim:
        state.filler_word_count += count_fillers(text, fillers)

    logger.debug(
        msg=f"Processed {'interim' if is_interim else 'final'} fragment "
        f"with {len(words)} tokens."
    )
