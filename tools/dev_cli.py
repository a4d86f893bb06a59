from __future__ import annotations

import argparse
import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from market_watch.config.settings import get_settings
from market_watch.utils.logging import configure_logging


def _cmd_run_app(_: argparse.Namespace) -> int:
    cmd = [
        "streamlit",
        "run",
        str(REPO_ROOT / "src/market_watch/ui/streamlit/app.py"),
    ]
    return subprocess.call(cmd, cwd=str(REPO_ROOT))


def _cmd_session(_: argparse.Namespace) -> int:
    from market_watch.schedule.sessions import next_session

    session = next_session()
    print(f"NEXT_SESSION={session.name}")
    print(f"EXPECTED_AT={session.time_str}")
    return 0


def _cmd_quote(_: argparse.Namespace) -> int:
    from market_watch.schedule.quotes import quote_of_day

    print(quote_of_day())
    return 0


def _cmd_briefing(args: argparse.Namespace) -> int:
    from market_watch.assistant.briefing import BriefingClient
    from market_watch.domain.errors import BriefingGenerationError, EmptyWatchlistError

    client = BriefingClient.from_settings(get_settings())
    try:
        briefing = client.request_briefing([symbol.upper() for symbol in args.symbols])
    except (BriefingGenerationError, EmptyWatchlistError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(briefing.as_dict(), indent=2, ensure_ascii=False))
    return 0


def _cmd_events(args: argparse.Namespace) -> int:
    from market_watch.assistant.events import EventsClient

    client = EventsClient.from_settings(get_settings())
    events = client.request_events([symbol.upper() for symbol in args.symbols])
    print(json.dumps([event.as_dict() for event in events], indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Market Watch developer CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sp_run = subparsers.add_parser("run-app", help="Run Streamlit dashboard")
    sp_run.set_defaults(func=_cmd_run_app)

    sp_session = subparsers.add_parser("session", help="Print the next update session")
    sp_session.set_defaults(func=_cmd_session)

    sp_quote = subparsers.add_parser("quote", help="Print today's trading quote")
    sp_quote.set_defaults(func=_cmd_quote)

    sp_briefing = subparsers.add_parser("briefing", help="Request one briefing and print JSON")
    sp_briefing.add_argument("symbols", nargs="+", help="Symbols to cover, e.g. NVDA BTC")
    sp_briefing.set_defaults(func=_cmd_briefing)

    sp_events = subparsers.add_parser("events", help="Request this week's events and print JSON")
    sp_events.add_argument("symbols", nargs="+", help="Symbols to cover, e.g. NVDA BTC")
    sp_events.set_defaults(func=_cmd_events)

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
