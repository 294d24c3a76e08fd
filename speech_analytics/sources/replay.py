"""
Scripted speech source that replays a recorded session.

A session script is a JSONL file; each line is one timed event:

    {"at": 0.4, "text": "um so", "final": false}
    {"at": 1.1, "text": "um so this is great", "final": true}
    {"at": 5.0, "event": "end"}
    {"at": 6.5, "event": "error", "reason": "network"}
    {"at": 9.0, "event": "stop"}

``at`` is seconds since the session started and must not decrease. Blank
lines and lines starting with ``#`` are skipped.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from speech_analytics.config import RecognitionOptions
from speech_analytics.domain import FragmentEvent
from speech_analytics.session.scheduler import ManualScheduler
from speech_analytics.sources.base import SourceListener
from speech_analytics.utils.logger import get_logger

if TYPE_CHECKING:
    from speech_analytics.session.controller import TranscriptAnalyzer

logger: logging.Logger = get_logger(__name__)

EVENT_KINDS = frozenset({"fragment", "end", "error", "stop"})


class ScriptError(ValueError):
    """Raised when a session script cannot be parsed."""


@dataclass(frozen=True)
class ScriptEvent:
    """One timed entry of a session script."""

    at: float
    kind: str
    text: str = ""
    is_final: bool = False
    reason: str = ""

    @classmethod
    def from_record(cls, record: dict[str, object]) -> ScriptEvent:
        at = record.get("at", 0.0)
        if isinstance(at, bool) or not isinstance(at, (int, float)) or at < 0:
            raise ValueError(f"'at' must be a non-negative number, got {at!r}.")
        kind = str(record.get("event", "fragment"))
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event {kind!r}.")
        if kind == "fragment":
            text = record.get("text")
            if not isinstance(text, str):
                raise ValueError("Fragment events need a 'text' string.")
            return cls(
                at=float(at),
                kind=kind,
                text=text,
                is_final=bool(record.get("final", True)),
            )
        return cls(at=float(at), kind=kind, reason=str(record.get("reason", "")))

    def fragment(self) -> FragmentEvent:
        return FragmentEvent(text=self.text, is_final=self.is_final)


def load_script(path: Path) -> list[ScriptEvent]:
    """Loads and validates a JSONL session script."""
    events: list[ScriptEvent] = []
    last_at = 0.0
    with path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw or raw.startswith("#"):
                continue
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError as err:
                raise ScriptError(
                    f"Invalid JSON in script {path} at line {line_number}: {err}"
                ) from err
            if not isinstance(payload, dict):
                raise ScriptError(
                    f"Script {path} line {line_number} must be a JSON object."
                )
            try:
                event = ScriptEvent.from_record(payload)
            except ValueError as err:
                raise ScriptError(f"Script {path} line {line_number}: {err}") from err
            if event.at < last_at:
                raise ScriptError(
                    f"Script {path} line {line_number}: 'at' goes back in time "
                    f"({event.at} < {last_at})."
                )
            last_at = event.at
            events.append(event)
    logger.debug("Loaded %d events from %s", len(events), path)
    return events


class ScriptedSource:
    """
    ``SpeechSource`` that feeds a scripted session into its listener.

    Time is virtual: ``play`` advances the ``ManualScheduler`` to each event,
    so periodic snapshots fire exactly as they would in a live session.
    """

    def __init__(
        self,
        events: list[ScriptEvent],
        scheduler: ManualScheduler | None = None,
        available: bool = True,
    ) -> None:
        self.events = events
        self.scheduler = scheduler or ManualScheduler()
        self.available = available
        self.listener: SourceListener | None = None
        self.options: RecognitionOptions | None = None
        self.running = False
        self.start_count = 0
        self.stop_count = 0
        self.restart_count = 0

    def is_available(self) -> bool:
        return self.available

    def attach(self, listener: SourceListener, options: RecognitionOptions) -> None:
        self.listener = listener
        self.options = options

    def start(self) -> None:
        self.running = True
        self.start_count += 1

    def stop(self) -> None:
        self.running = False
        self.stop_count += 1

    def restart(self) -> None:
        self.running = True
        self.restart_count += 1

    def play(self, analyzer: TranscriptAnalyzer) -> None:
        """
        Runs the whole script and stops ``analyzer`` at the end.

        Recognition events go to the attached listener; ``stop`` entries and
        the session start are user actions driven through ``analyzer``.
        """
        listener = self.listener
        if listener is None:
            raise RuntimeError("ScriptedSource has no attached listener.")
        started_at = self.scheduler.now()
        analyzer.start()
        for event in self.events:
            self.scheduler.advance_to(started_at + event.at)
            if event.kind == "fragment":
                listener.handle_results((event.fragment(),))
            elif event.kind == "end":
                self.running = False
                listener.handle_stream_ended()
            elif event.kind == "error":
                self.running = False
                listener.handle_stream_error(event.reason or "unknown")
            else:
                analyzer.stop()
        if analyzer.is_listening():
            analyzer.stop()
