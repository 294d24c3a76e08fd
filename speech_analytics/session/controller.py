"""
Session controller for live transcript analytics.

``TranscriptAnalyzer`` owns one recording session at a time. It receives
fragments and stream signals from a ``SpeechSource``, keeps the session
counters up to date, and publishes analytics snapshots periodically while
recording and once more when the session ends.

States are Idle and Recording. Leaving Recording (stop, source error,
failed restart) always cancels the periodic snapshot task.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from speech_analytics.analysis.analytics import compute_analytics
from speech_analytics.analysis.fragments import SessionState, process_fragment
from speech_analytics.config import AnalyzerSettings, RecognitionOptions, get_settings
from speech_analytics.domain import AnalyticsSnapshot, FragmentEvent
from speech_analytics.session.events import EventChannel
from speech_analytics.session.scheduler import (
    AsyncioScheduler,
    ScheduledTask,
    Scheduler,
)
from speech_analytics.sources.base import SpeechSource
from speech_analytics.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

TranscriptCallback = Callable[[str, str], None]
AnalyticsCallback = Callable[[AnalyticsSnapshot, bool], None]


class TranscriptAnalyzer:
    """
    Turns a stream of recognition fragments into running analytics.

    Arguments:
        source (SpeechSource | None): Recognition engine. When missing or not
            available, the analyzer is permanently disabled and every
            operation is a no-op.
        scheduler (Scheduler | None): Provider of the periodic snapshot task.
            Defaults to an ``AsyncioScheduler`` on the running loop.
        clock (Callable[[], float] | None): Clock in seconds. Defaults to the
            scheduler's ``now`` when it has one, else ``time.monotonic``.
        settings (AnalyzerSettings | None): Interval and word lists.
        options (RecognitionOptions | None): Options passed to the source.
    """

    def __init__(
        self,
        source: SpeechSource | None,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] | None = None,
        settings: AnalyzerSettings | None = None,
        options: RecognitionOptions | None = None,
    ) -> None:
        app_config = get_settings()
        self.settings: AnalyzerSettings = settings or app_config.analyzer
        self.options: RecognitionOptions = options or app_config.recognition
        self._scheduler: Scheduler = scheduler or AsyncioScheduler()
        self._clock: Callable[[], float] = clock or getattr(
            self._scheduler, "now", time.monotonic
        )
        self._state = SessionState()
        self._timer: ScheduledTask | None = None
        self._finalized = False
        self._transcript_updates: EventChannel[[str, str]] = EventChannel("transcript")
        self._analytics_updates: EventChannel[[AnalyticsSnapshot, bool]] = (
            EventChannel("analytics")
        )

        self._source: SpeechSource | None = (
            source if source is not None and _source_available(source) else None
        )
        if self._source is None:
            logger.error("Speech recognition not supported on this platform.")
            return
        self._source.attach(self, self.options)

    @property
    def supported(self) -> bool:
        return self._source is not None

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe_transcript(self, callback: TranscriptCallback) -> Callable[[], None]:
        """Registers ``callback(final_text, interim_text)``; returns its unsubscriber."""
        return self._transcript_updates.subscribe(callback)

    def subscribe_analytics(self, callback: AnalyticsCallback) -> Callable[[], None]:
        """Registers ``callback(snapshot, is_final)``; returns its unsubscriber."""
        return self._analytics_updates.subscribe(callback)

    def get_transcript(self) -> str:
        return self._state.transcript_text

    def is_listening(self) -> bool:
        return self._state.is_recording

    def start(self) -> None:
        """Starts a new session, resetting every counter and the transcript."""
        if self._source is None:
            return
        if self._state.is_recording:
            logger.warning("Speech recognition already running; start ignored.")
            return

        try:
            self._source.start()
        except Exception as err:
            logger.error(
                msg=f"Error starting speech recognition: {err}", exc_info=True
            )
            return

        try:
            timer = self._scheduler.call_every(
                self.settings.analytics_interval_seconds, self._on_tick
            )
        except Exception as err:
            logger.error(
                msg=f"Error scheduling analytics updates: {err}", exc_info=True
            )
            self._stop_source()
            return

        self._state.reset(start_time=self._clock())
        self._state.is_recording = True
        self._finalized = False
        self._timer = timer
        logger.info("Speech recognition started.")

    def stop(self) -> None:
        """Ends the session and publishes the final snapshot."""
        if self._source is None:
            return
        was_recording = self._state.is_recording
        self._state.is_recording = False
        self._cancel_timer()

        if was_recording:
            self._stop_source()

        self._finalize()
        if was_recording:
            logger.info("Speech recognition stopped.")

    def handle_fragment(self, event: FragmentEvent) -> None:
        self.handle_results((event,))

    def handle_results(self, events: Sequence[FragmentEvent]) -> None:
        """
        Applies a batch of recognition results in arrival order.

        Transcript subscribers are notified once per batch with the stored
        final transcript and the interim text of this batch.
        """
        if self._source is None:
            return
        if self._state.start_time is None:
            logger.debug("Ignoring %d fragment(s) outside a session.", len(events))
            return

        interim_text = ""
        for event in events:
            process_fragment(
                self._state,
                event.text,
                not event.is_final,
                fillers=self.settings.filler_words,
                dictionary=self.settings.sentiment_dictionary,
            )
            if event.is_final:
                self._state.append_final(event.text)
            else:
                interim_text += event.text

        self._transcript_updates.publish(self._state.transcript_text, interim_text)
        if self.settings.snapshot_on_fragment and self._state.is_recording:
            self._publish(is_final=False)

    def handle_stream_ended(self) -> None:
        """
        Reacts to the source ending its stream.

        While recording this is an unexpected end (silence timeout, network
        hiccup): the source is restarted and the session carries on.
        Otherwise the stop is confirmed and the session finalized.
        """
        if self._source is None:
            return
        if self._state.is_recording:
            logger.info("Speech recognition ended unexpectedly; restarting.")
            try:
                self._source.restart()
            except Exception as err:
                logger.error(
                    msg=f"Error restarting speech recognition: {err}", exc_info=True
                )
                self.stop()
            return

        self._cancel_timer()
        self._finalize()

    def handle_stream_error(self, reason: str) -> None:
        if self._source is None:
            return
        logger.error("Speech recognition error: %s", reason)
        self.stop()

    def compute_analytics(self, is_final: bool = False) -> AnalyticsSnapshot | None:
        """Computes a snapshot of the current session without publishing it."""
        return compute_analytics(self._state, self._clock(), is_final)

    def _on_tick(self) -> None:
        if self._state.is_recording:
            self._publish(is_final=False)

    def _publish(self, is_final: bool) -> AnalyticsSnapshot | None:
        snapshot = self.compute_analytics(is_final)
        if snapshot is not None:
            self._analytics_updates.publish(snapshot, is_final)
        return snapshot

    def _finalize(self) -> None:
        if self._finalized or self._state.start_time is None:
            return
        self._finalized = True
        if self._clock() - self._state.start_time <= 0:
            logger.warning("Speech duration too short to calculate speaking pace.")
        self._publish(is_final=True)

    def _stop_source(self) -> None:
        if self._source is None:
            return
        try:
            self._source.stop()
        except Exception as err:
            logger.error(
                msg=f"Error stopping speech recognition: {err}", exc_info=True
            )

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


def _source_available(source: SpeechSource) -> bool:
    try:
        return bool(source.is_available())
    except Exception as err:
        logger.error(
            msg=f"Could not probe speech recognition support: {err}", exc_info=True
        )
        return False
