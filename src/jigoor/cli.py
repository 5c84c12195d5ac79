"""Command-line signal desk.

Usage:
  jigoor BTC ETH EURUSD              # one-shot search
  jigoor BTC SOL --news BTC          # search, then live news for matching cards
  jigoor --source api LINK ADA       # third-party provider instead of Gemini
  jigoor --interactive               # line-mode session

Environment:
  GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) required
  GEMINI_MODEL, JIGOOR_DATA_SOURCE, JIGOOR_USD_TO_CAD_RATE, JIGOOR_SIGNAL_COUNT,
  THIRD_PARTY_SIGNALS_URL, THIRD_PARTY_SIGNALS_API_KEY, THIRD_PARTY_MOCK_DELAY_SECONDS, JIGOOR_AI_LOG_PATH

Exit status: 0 when the signal search succeeded (a failed --news fetch is only
reported in the output), 1 when the search failed, 2 on a configuration error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from dotenv import load_dotenv

from .app.config import DATA_SOURCES, AppConfig
from .app.factory import create_session
from .app.session import SignalDeskSession
from .signals.errors import ConfigurationError
from .ui.render import render_signal, render_sources

logger = logging.getLogger("jigoor")

DISCLAIMER = (
    "Signals are for informational purposes only. This app is for educational purposes and is "
    "not financial advice. Please act wisely and do not risk money you cannot afford to lose."
)

HELP_TEXT = """Type tickers separated by spaces or commas and press Enter to search.
Commands:
  :news N      live news analysis for card N
  :remove TAG  drop a tag
  :tags        show current tags
  :clear       drop all tags
  :source gemini|api
  :quit"""


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AI trading signals for crypto tickers and forex pairs")
    parser.add_argument("tickers", nargs="*", help="Tickers or pairs, e.g. BTC ETH EURUSD")
    parser.add_argument(
        "--source",
        choices=DATA_SOURCES,
        default=None,
        help="Signal source (default: JIGOOR_DATA_SOURCE or gemini)",
    )
    parser.add_argument("--count", type=int, default=None, help="Signals to request from the api source (1-10)")
    parser.add_argument(
        "--news",
        action="append",
        default=[],
        metavar="ASSET",
        help="Run live news analysis for cards whose name contains ASSET (repeatable, 'all' for every card)",
    )
    parser.add_argument("--no-fib", action="store_true", help="Hide Fibonacci levels")
    parser.add_argument("--interactive", "-i", action="store_true", help="Start a line-mode session")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def print_results(session: SignalDeskSession, show_fibonacci: bool = True) -> None:
    if session.error:
        print(f"\n!! {session.error}\n")
    if not session.signals:
        if not session.error:
            print("Enter one or more cryptocurrency tickers or forex pairs to get started (e.g. BTC, ETH, SOL, EURUSD, GBPJPY).")
        return

    print("\n" + "=" * 70)
    print("TRADING SIGNALS FOUND")
    print("=" * 70)
    for idx, signal in enumerate(session.signals, 1):
        print(render_signal(signal, session.usd_to_cad_rate, index=idx, show_fibonacci=show_fibonacci))
        print("-" * 70)
    for line in render_sources(session.sources):
        print(line)
    print(f"\n{DISCLAIMER}")


def _news_targets(session: SignalDeskSession, wanted: List[str]) -> List[str]:
    wanted_upper = [w.upper() for w in wanted]
    if "ALL" in wanted_upper:
        return [s.signal_id for s in session.signals]
    return [
        s.signal_id
        for s in session.signals
        if any(w in s.asset_name.upper() for w in wanted_upper)
    ]


def _handle_command(session: SignalDeskSession, line: str, show_fibonacci: bool) -> bool:
    """Returns False when the session should end."""

    cmd, _, arg = line[1:].partition(" ")
    arg = arg.strip()
    if cmd in ("quit", "q", "exit"):
        return False
    if cmd == "news":
        try:
            signal = session.signals[int(arg) - 1]
        except (ValueError, IndexError):
            print(f"No card #{arg}.")
            return True
        print(f"Analyzing live news for {signal.asset_name}...")
        session.analyze_news(signal.signal_id)
        print_results(session, show_fibonacci)
    elif cmd == "remove":
        session.tag_input.remove_tag(arg.upper())
        print("Tags:", ", ".join(session.tag_input.tags) or "(none)")
    elif cmd == "tags":
        print("Tags:", ", ".join(session.tag_input.tags) or "(none)")
    elif cmd == "clear":
        session.tag_input.tags = []
    elif cmd == "source":
        if arg not in DATA_SOURCES:
            print(f"Source must be one of {', '.join(DATA_SOURCES)}.")
        elif arg == "api" and session.provider is None:
            print("No third-party provider configured for this session; restart with --source api.")
        else:
            session.data_source = arg  # type: ignore[assignment]
    else:
        print(HELP_TEXT)
    return True


def run_interactive(session: SignalDeskSession, show_fibonacci: bool) -> int:
    print(HELP_TEXT)
    while True:
        print("Tags:", ", ".join(session.tag_input.tags) or "(none)")
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        line = line.strip()
        if line.startswith(":"):
            if not _handle_command(session, line, show_fibonacci):
                return 0
            continue
        session.tag_input.type_text(line)
        print("Analyzing market data...")
        session.search()
        print_results(session, show_fibonacci)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    overrides = {}
    if args.source:
        overrides["data_source"] = args.source
    if args.count is not None:
        overrides["signal_count"] = args.count
    if args.tickers:
        overrides["default_tags"] = list(args.tickers)
    try:
        config = AppConfig.from_env()
        if overrides:
            config = replace(config, **overrides)
        session = create_session(config, logger)
    except ConfigurationError as e:
        print("Application Configuration Error", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 2

    if args.interactive:
        return run_interactive(session, show_fibonacci=not args.no_fib)

    print("Analyzing market data...")
    found = session.search()
    for signal_id in _news_targets(session, args.news):
        session.analyze_news(signal_id)
    print_results(session, show_fibonacci=not args.no_fib)
    return 0 if found else 1


if __name__ == "__main__":
    raise SystemExit(main())
