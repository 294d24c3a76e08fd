"""Contracts between the analyzer and the speech recognition source."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from speech_analytics.config import RecognitionOptions
from speech_analytics.domain import FragmentEvent


class SourceListener(Protocol):
    """Receiver of recognition events; implemented by TranscriptAnalyzer."""

    def handle_results(self, events: Sequence[FragmentEvent]) -> None: ...

    def handle_stream_ended(self) -> None: ...

    def handle_stream_error(self, reason: str) -> None: ...


@runtime_checkable
class SpeechSource(Protocol):
    """
    A speech recognition engine that streams fragments to a listener.

    ``is_available`` reports whether the platform offers recognition at all.
    Sources deliver events by calling the attached listener's ``handle_*``
    methods from the same event loop the analyzer runs on.
    """

    def is_available(self) -> bool: ...

    def attach(self, listener: SourceListener, options: RecognitionOptions) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def restart(self) -> None: ...
