"""Typed runtime settings for the transcript analyzer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Verbal hesitation markers counted in finalized speech.
FILLER_WORDS: tuple[str, ...] = (
    "um",
    "uh",
    "like",
    "you know",
    "actually",
    "basically",
    "literally",
    "sort of",
    "kind of",
)

# Category order matters: the first category containing a word wins.
SENTIMENT_DICTIONARY: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "positive": (
            "great",
            "awesome",
            "happy",
            "excellent",
            "wonderful",
            "love",
            "fantastic",
        ),
        "negative": (
            "bad",
            "terrible",
            "sad",
            "awful",
            "hate",
            "horrible",
            "disappointing",
        ),
        "neutral": ("okay", "fine", "normal", "usual"),
    }
)

DEFAULT_LANGUAGE = "en-US"
DEFAULT_ANALYTICS_INTERVAL_SECONDS = 2.0

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class RecognitionOptions:
    """Options handed to the speech source when the analyzer attaches to it."""

    language: str = DEFAULT_LANGUAGE
    continuous: bool = True
    interim_results: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "lang": self.language,
            "continuous": self.continuous,
            "interimResults": self.interim_results,
        }


@dataclass(frozen=True)
class AnalyzerSettings:
    """Analyzer behavior and the static word lists it classifies against."""

    analytics_interval_seconds: float = DEFAULT_ANALYTICS_INTERVAL_SECONDS
    snapshot_on_fragment: bool = True
    filler_words: tuple[str, ...] = FILLER_WORDS
    sentiment_dictionary: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: SENTIMENT_DICTIONARY
    )

    def __post_init__(self) -> None:
        if self.analytics_interval_seconds <= 0:
            raise ValueError(
                "analytics_interval_seconds must be positive, "
                f"got {self.analytics_interval_seconds!r}."
            )
        unknown = set(self.sentiment_dictionary) - set(SENTIMENT_DICTIONARY)
        if unknown:
            raise ValueError(
                f"Unsupported sentiment categories: {sorted(unknown)}."
            )


@dataclass(frozen=True)
class AppConfig:
    """Process-wide settings resolved from the environment."""

    recognition: RecognitionOptions = field(default_factory=RecognitionOptions)
    analyzer: AnalyzerSettings = field(default_factory=AnalyzerSettings)
    log_level: str = "INFO"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as err:
        raise ValueError(f"Invalid number for {name}: {raw!r}") from err


def _load_settings() -> AppConfig:
    recognition = RecognitionOptions(
        language=os.getenv("SPEECH_LANGUAGE", "").strip() or DEFAULT_LANGUAGE,
        continuous=_env_bool("SPEECH_CONTINUOUS", True),
        interim_results=_env_bool("SPEECH_INTERIM_RESULTS", True),
    )
    interval = _env_float(
        "ANALYTICS_INTERVAL_SECONDS", DEFAULT_ANALYTICS_INTERVAL_SECONDS
    )
    if interval <= 0:
        raise ValueError(
            f"ANALYTICS_INTERVAL_SECONDS must be positive, got {interval!r}."
        )
    analyzer = AnalyzerSettings(
        analytics_interval_seconds=interval,
        snapshot_on_fragment=_env_bool("ANALYTICS_ON_FRAGMENT", True),
    )
    return AppConfig(
        recognition=recognition,
        analyzer=analyzer,
        log_level=os.getenv("LOG_LEVEL", "").strip().upper() or "INFO",
    )


_SETTINGS: AppConfig | None = None


def reload_settings() -> AppConfig:
    """Re-reads the environment and replaces the cached settings."""
    global _SETTINGS
    _SETTINGS = _load_settings()
    return _SETTINGS


def get_settings() -> AppConfig:
    """Returns the cached settings, loading them on first access."""
    if _SETTINGS is None:
        return reload_settings()
    return _SETTINGS
