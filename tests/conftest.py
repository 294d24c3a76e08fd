import contextlib
import io
import sys
from collections.abc import Sequence

import pytest

import speech_analytics.__main__ as cli_main
import speech_analytics.config as config
from speech_analytics.config import RecognitionOptions
from speech_analytics.session.controller import TranscriptAnalyzer
from speech_analytics.session.scheduler import ManualScheduler


class FakeSource:
    """In-memory speech source recording lifecycle calls."""

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.listener = None
        self.options: RecognitionOptions | None = None
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def is_available(self) -> bool:
        return self.available

    def attach(self, listener, options: RecognitionOptions) -> None:
        self.listener = listener
        self.options = options

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    def start(self) -> None:
        self._call("start")

    def stop(self) -> None:
        self._call("stop")

    def restart(self) -> None:
        self._call("restart")


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    """Keeps cached settings independent of the developer environment."""
    for name in (
        "SPEECH_LANGUAGE",
        "SPEECH_CONTINUOUS",
        "SPEECH_INTERIM_RESULTS",
        "ANALYTICS_INTERVAL_SECONDS",
        "ANALYTICS_ON_FRAGMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    config._SETTINGS = None
    yield
    config._SETTINGS = None


@pytest.fixture(autouse=True)
def _silence_halo(monkeypatch):
    """Replace Halo spinners with a no-op context manager for tests."""

    class _DummyHalo:
        def __init__(self, *args, **kwargs):
            self.text = kwargs.get("text")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr(cli_main, "Halo", _DummyHalo)


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler(start=100.0)


@pytest.fixture
def analyzer(source, scheduler) -> TranscriptAnalyzer:
    return TranscriptAnalyzer(source, scheduler=scheduler)


@pytest.fixture
def snapshots(analyzer):
    """Collects every published (snapshot, is_final) pair."""
    received = []
    analyzer.subscribe_analytics(lambda snapshot, is_final: received.append((snapshot, is_final)))
    return received


@pytest.fixture
def run_cli(monkeypatch):
    """Run the speech-analytics CLI with a custom argv list."""

    def _run_cli(args: Sequence[str], *, expect_exit: bool = True) -> tuple[int, str]:
        monkeypatch.setattr(sys, "argv", ["speech-analytics", *args])
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            try:
                cli_main.main()
            except SystemExit as exc:
                return exc.code, stdout.getvalue()
        if expect_exit:
            raise AssertionError("CLI did not exit as expected")
        return 0, stdout.getvalue()

    return _run_cli


@pytest.fixture
def source_factory():
    return FakeSource
