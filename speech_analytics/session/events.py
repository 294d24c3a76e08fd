"""Subscription channels for transcript and analytics updates."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, ParamSpec

from speech_analytics.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

P = ParamSpec("P")


class EventChannel(Generic[P]):
    """
    Ordered list of subscribers for one kind of event.

    A subscriber that raises is logged and skipped; the remaining
    subscribers still receive the event.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[Callable[P, None]] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[P, None]) -> Callable[[], None]:
        """Adds a subscriber and returns a function that removes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(callback)

        return _unsubscribe

    def unsubscribe(self, callback: Callable[P, None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, *args: P.args, **kwargs: P.kwargs) -> None:
        for callback in list(self._subscribers):
            try:
                callback(*args, **kwargs)
            except Exception as err:
                logger.error(
                    msg=f"Subscriber to {self.name} updates failed: {err}",
                    exc_info=True,
                )
