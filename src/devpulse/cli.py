"""CLI commands for devpulse."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path

from devpulse.config import get_sessions_file, set_sessions_file
from devpulse.dates import FILTER_PERIODS, day_key, filter_sessions, newest_first
from devpulse.display import (
    print_config_result,
    print_daily_table,
    print_dashboard,
    print_invalid_input,
    print_no_data_message,
    print_sessions,
)
from devpulse.metrics import (
    InvalidSessionError,
    SessionRecord,
    calculate_daily_metrics,
    session_type,
    todays_score,
    validate_sessions,
)
from devpulse.parser import SessionFileParser
from devpulse.series import build_series
from devpulse.streaks import calculate_streaks

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="devpulse",
        description="Coding/break session metrics, streaks and productivity score",
    )
    parser.add_argument("--file", "-f", default=None, help="Sessions export (JSON); overrides config")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("dashboard", help="Show today's score and streaks")
    daily_parser = subparsers.add_parser("daily", help="Per-day totals")
    daily_parser.add_argument("--days", "-n", type=int, default=0, help="Only the most recent N logged days")
    sessions_parser = subparsers.add_parser("sessions", help="List sessions")
    sessions_parser.add_argument("--filter", choices=list(FILTER_PERIODS), default="all", dest="period")
    config_parser = subparsers.add_parser("config", help="Configure devpulse")
    config_parser.add_argument("--sessions-file", required=True, help="Path to the sessions export")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "dashboard"

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if command == "config":
        do_config(args.sessions_file)
        return

    sessions = load_sessions(args.file)
    if not sessions:
        print_no_data_message()
        return

    now = datetime.now(tz=timezone.utc)
    try:
        if command == "dashboard":
            do_dashboard(sessions, now)
        elif command == "daily":
            do_daily(sessions, days=args.days)
        elif command == "sessions":
            do_sessions(sessions, period=args.period, now=now)
    except InvalidSessionError as e:
        logger.debug("Rejected session record: %r", e.session)
        print_invalid_input(str(e))
        raise SystemExit(1) from e


def load_sessions(file_arg: str | None = None) -> list[SessionRecord] | None:
    """Load sessions from --file, falling back to the configured export."""
    sessions_file = Path(file_arg).expanduser() if file_arg else get_sessions_file()
    if sessions_file is None:
        logger.debug("No sessions file given or configured")
        return None
    return SessionFileParser(sessions_file).parse_sessions()


def do_dashboard(sessions: list[SessionRecord], now: datetime) -> dict:
    """Show today's score, streaks and totals.

    Returns the displayed values (useful for testing).
    """
    daily = calculate_daily_metrics(sessions)
    streak_info = calculate_streaks(daily, now)
    today = daily.get(day_key(now))

    data = {
        "todays_score": todays_score(daily, streak_info.current_streak, now),
        "current_streak": streak_info.current_streak,
        "longest_streak": streak_info.longest_streak,
        "today_coding": today.coding_minutes if today else 0,
        "today_breaks": today.break_count if today else 0,
        "days_logged": len(daily),
        "total_sessions": len(sessions),
        "total_coding": sum(d.coding_minutes for d in daily.values()),
    }
    print_dashboard(data)
    return data


def do_daily(sessions: list[SessionRecord], days: int = 0) -> dict:
    """Show per-day totals, oldest first."""
    daily = calculate_daily_metrics(sessions)
    series = build_series(daily, days=days)
    rows = [
        {
            "date": key,
            "coding_minutes": daily[key].coding_minutes,
            "break_minutes": daily[key].break_minutes,
            "total_minutes": daily[key].total_minutes,
            "coding_session_count": daily[key].coding_session_count,
            "average_session_length": daily[key].average_session_length,
            "daily_score": daily[key].daily_score,
        }
        for key in series.labels
    ]
    print_daily_table(rows)
    return {"ok": True, "rows": rows, "count": len(rows)}


def do_sessions(sessions: list[SessionRecord], period: str = "all", now: datetime | None = None) -> dict:
    """List sessions for a period (all, today, week), newest first."""
    validate_sessions(sessions)
    now = now or datetime.now(tz=timezone.utc)
    selected = newest_first(filter_sessions(sessions, period, now))
    listing = [
        {
            "id": s.id,
            "start_time": s.start_time.astimezone().strftime("%Y-%m-%d %H:%M"),
            "type": session_type(s).value,
            "duration_minutes": s.duration_minutes or 0,
        }
        for s in selected
    ]
    print_sessions(listing, period)
    return {"ok": True, "period": period, "sessions": listing, "count": len(listing)}


def do_config(sessions_file: str, config_path: Path | None = None) -> dict:
    """Store the sessions export location."""
    expanded = Path(sessions_file).expanduser().resolve()
    set_sessions_file(expanded, config_path)
    logger.debug("Saved sessions_file=%s", expanded)
    result = {"ok": True, "sessions_file": str(expanded)}
    print_config_result(result)
    return result
