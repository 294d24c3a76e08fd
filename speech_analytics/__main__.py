"""
Speech Analytics Replay Tool

Command-line entry point that replays a recorded recognition session through
a TranscriptAnalyzer and prints the analytics it publishes: live snapshots
every analytics interval and the final report when the session ends.

Usage:
    speech-analytics --script session.jsonl [--interval 2] [--no-live] [--json]
"""

import argparse
import dataclasses
import json
import logging
import sys
import time
from pathlib import Path

from halo import Halo

from speech_analytics.config import get_settings
from speech_analytics.domain import AnalyticsSnapshot
from speech_analytics.session.controller import TranscriptAnalyzer
from speech_analytics.session.scheduler import ManualScheduler
from speech_analytics.sources.replay import ScriptedSource, ScriptError, load_script
from speech_analytics.utils import (
    configure_logging,
    display_elapsed_time,
    get_logger,
    print_snapshot,
    print_snapshot_header,
)


logger: logging.Logger = get_logger("speech_analytics")


def main(argv: list[str] | None = None) -> None:
    """
    Main function to handle the command line interface logic.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Replay a speech recognition session and report its analytics"
    )
    parser.add_argument(
        "--script",
        type=str,
        help="Path to the JSONL session script to replay",
    )
    parser.add_argument(
        "--interval",
        type=float,
        help="Seconds between live analytics snapshots",
    )
    parser.add_argument(
        "--no-live",
        action="store_true",
        help="Only print the final analytics report",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print snapshots as JSON lines instead of a table",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )
    args: argparse.Namespace = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as err:
        logger.error(msg=str(err))
        sys.exit(1)

    if not args.script:
        logger.error(msg="No session script provided.")
        sys.exit(1)

    script_path = Path(args.script)
    if not script_path.is_file():
        logger.error("Session script %s does not exist.", script_path)
        sys.exit(1)

    settings = get_settings().analyzer
    if args.interval is not None:
        try:
            settings = dataclasses.replace(
                settings, analytics_interval_seconds=args.interval
            )
        except ValueError as err:
            logger.error(msg=str(err))
            sys.exit(1)

    try:
        with Halo(
            text=f"Loading session script {script_path}...",
            spinner="dots",
            text_color="green",
        ):
            events = load_script(script_path)
    except ScriptError as err:
        logger.error(msg=f"Failed to load session script: {err}")
        sys.exit(1)
    logger.info("Loaded %d events from %s", len(events), script_path)

    start_time: float = time.perf_counter()
    scheduler = ManualScheduler()
    source = ScriptedSource(events, scheduler=scheduler)
    analyzer = TranscriptAnalyzer(source, scheduler=scheduler, settings=settings)

    if not args.json:
        print_snapshot_header()
    analyzer.subscribe_analytics(
        lambda snapshot, is_final: _report(
            snapshot, is_final, live=not args.no_live, as_json=args.json
        )
    )
    source.play(analyzer)

    if not args.json:
        print(f"\nTranscript: {analyzer.get_transcript()}")
    if source.restart_count:
        logger.info("Recognition restarted %d time(s).", source.restart_count)
    logger.info(
        msg=f"Replay completed in {display_elapsed_time(time.perf_counter() - start_time)}"
    )


def _report(
    snapshot: AnalyticsSnapshot, is_final: bool, *, live: bool, as_json: bool
) -> None:
    if not is_final and not live:
        return
    if as_json:
        print(json.dumps({**snapshot.as_dict(), "isFinal": is_final}))
    else:
        print_snapshot(snapshot)


if __name__ == "__main__":
    main()
