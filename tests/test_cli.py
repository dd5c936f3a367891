"""Tests for CLI commands and display helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from devpulse.cli import build_parser, do_config, do_daily, do_dashboard, do_sessions, load_sessions, main
from devpulse.config import get_sessions_file
from devpulse.display import format_minutes, format_score
from devpulse.metrics import SessionRecord

NOW = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


def _session(day: str, hour: int, minutes: float, kind: str = "coding", session_id: str | None = None) -> SessionRecord:
    start = datetime.fromisoformat(day).replace(hour=hour, tzinfo=timezone.utc)
    return SessionRecord(start_time=start, duration_minutes=minutes, type=kind, id=session_id)


@pytest.fixture
def sessions() -> list[SessionRecord]:
    return [
        _session("2026-01-04", 9, 30, session_id="a"),
        _session("2026-01-04", 10, 10, "break", session_id="b"),
        _session("2026-01-05", 9, 45, session_id="c"),
    ]


@pytest.fixture
def sessions_file(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps([
        {"id": "a", "startTime": "2026-01-04T09:00:00Z", "durationMinutes": 30, "type": "coding"},
        {"id": "b", "startTime": "2026-01-04T10:00:00Z", "durationMinutes": 10, "type": "break"},
    ]), encoding="utf-8")
    return path


# ── Argument Parsing ──────────────────────────────────────────────────────────


class TestArgumentParsing:
    def test_no_args_defaults_to_none_command(self):
        args = build_parser().parse_args([])
        assert args.command is None
        assert args.file is None
        assert args.verbose is False

    def test_daily_days(self):
        args = build_parser().parse_args(["daily", "--days", "7"])
        assert args.command == "daily"
        assert args.days == 7

    def test_sessions_filter(self):
        args = build_parser().parse_args(["sessions", "--filter", "week"])
        assert args.period == "week"

    def test_sessions_filter_default(self):
        args = build_parser().parse_args(["sessions"])
        assert args.period == "all"

    def test_invalid_filter_raises(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["sessions", "--filter", "month"])

    def test_global_file_option(self):
        args = build_parser().parse_args(["--file", "s.json", "dashboard"])
        assert args.file == "s.json"

    def test_invalid_command_raises(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["nonexistent"])


# ── Formatting ────────────────────────────────────────────────────────────────


class TestFormatMinutes:
    def test_whole_minutes(self):
        assert format_minutes(45) == "45m"

    def test_fractional_minutes(self):
        assert format_minutes(12.5) == "12.5m"

    def test_exact_hours(self):
        assert format_minutes(120) == "2h"

    def test_hours_and_minutes(self):
        assert format_minutes(90) == "1h 30m"

    def test_zero(self):
        assert format_minutes(0) == "0m"

    def test_negative(self):
        assert format_minutes(-5) == "-5m"


class TestFormatScore:
    def test_one_decimal(self):
        assert format_score(41.5) == "41.5"

    def test_none_is_na(self):
        assert format_score(None) == "N/A"


# ── Commands ──────────────────────────────────────────────────────────────────


class TestDoDashboard:
    @patch("devpulse.cli.print_dashboard")
    def test_active_today(self, mock_print, sessions):
        data = do_dashboard(sessions, NOW)
        assert data["current_streak"] == 2
        assert data["longest_streak"] == 2
        # 45*0.7 + 2*5 - 0*2
        assert data["todays_score"] == pytest.approx(41.5)
        assert data["today_coding"] == 45
        assert data["today_breaks"] == 0
        assert data["days_logged"] == 2
        assert data["total_sessions"] == 3
        assert data["total_coding"] == 75
        mock_print.assert_called_once_with(data)

    @patch("devpulse.cli.print_dashboard")
    def test_idle_today(self, mock_print, sessions):
        data = do_dashboard(sessions, datetime(2026, 1, 6, 12, 0, tzinfo=timezone.utc))
        assert data["current_streak"] == 0
        assert data["longest_streak"] == 2
        assert data["todays_score"] is None
        assert data["today_coding"] == 0


class TestDoDaily:
    @patch("devpulse.cli.print_daily_table")
    def test_rows_oldest_first(self, mock_print, sessions):
        result = do_daily(sessions)
        assert result["count"] == 2
        assert [r["date"] for r in result["rows"]] == ["2026-01-04", "2026-01-05"]
        first = result["rows"][0]
        assert first["total_minutes"] == 40
        assert first["coding_session_count"] == 1
        mock_print.assert_called_once_with(result["rows"])

    @patch("devpulse.cli.print_daily_table")
    def test_limit_days(self, mock_print, sessions):
        result = do_daily(sessions, days=1)
        assert [r["date"] for r in result["rows"]] == ["2026-01-05"]


class TestDoSessions:
    @patch("devpulse.cli.print_sessions")
    def test_all_newest_first(self, mock_print, sessions):
        result = do_sessions(sessions, "all", NOW)
        assert [s["id"] for s in result["sessions"]] == ["c", "b", "a"]
        assert result["sessions"][1]["type"] == "break"
        mock_print.assert_called_once_with(result["sessions"], "all")

    @patch("devpulse.cli.print_sessions")
    def test_invalid_start_time_raises(self, mock_print):
        from devpulse.metrics import InvalidSessionError

        with pytest.raises(InvalidSessionError):
            do_sessions([SessionRecord(start_time=None)], "all", NOW)
        mock_print.assert_not_called()


class TestDoConfig:
    @patch("devpulse.cli.print_config_result")
    def test_stores_resolved_path(self, mock_print, tmp_path):
        config_path = tmp_path / "config.json"
        result = do_config(str(tmp_path / "sessions.json"), config_path=config_path)
        assert result["ok"] is True
        assert get_sessions_file(config_path) == (tmp_path / "sessions.json").resolve()


class TestLoadSessions:
    def test_from_file_argument(self, sessions_file):
        sessions = load_sessions(str(sessions_file))
        assert [s.id for s in sessions] == ["a", "b"]

    @patch("devpulse.cli.get_sessions_file", return_value=None)
    def test_nothing_configured(self, _mock):
        assert load_sessions() is None

    @patch("devpulse.cli.get_sessions_file")
    def test_falls_back_to_config(self, mock_get, sessions_file):
        mock_get.return_value = sessions_file
        assert len(load_sessions()) == 2


class TestMain:
    @patch("devpulse.cli.print_daily_table")
    def test_daily_from_file(self, mock_print, sessions_file):
        main(["--file", str(sessions_file), "daily"])
        rows = mock_print.call_args[0][0]
        assert rows[0]["date"] == "2026-01-04"

    @patch("devpulse.cli.print_dashboard")
    def test_defaults_to_dashboard(self, mock_print, sessions_file):
        main(["--file", str(sessions_file)])
        mock_print.assert_called_once()

    @patch("devpulse.cli.print_no_data_message")
    def test_no_data(self, mock_print, tmp_path):
        main(["--file", str(tmp_path / "missing.json")])
        mock_print.assert_called_once()

    @patch("devpulse.cli.print_invalid_input")
    def test_invalid_records_exit_1(self, mock_print, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"startTime": "not a date", "durationMinutes": 5}]), encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["--file", str(path), "daily"])
        assert exc_info.value.code == 1
        mock_print.assert_called_once()

    @patch("devpulse.cli.print_config_result")
    @patch("devpulse.cli.set_sessions_file")
    def test_config_command(self, mock_set, mock_print, tmp_path):
        main(["config", "--sessions-file", str(tmp_path / "s.json")])
        mock_set.assert_called_once()
        assert mock_set.call_args[0][0] == (tmp_path / "s.json").resolve()
