"""Read exported DevPulse session documents from a JSON file."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from devpulse.metrics import SessionRecord

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_timestamp(raw: Any) -> datetime | None:
    """Convert a stored startTime into a datetime.

    Accepts ISO-8601 strings (a trailing Z is allowed), epoch milliseconds,
    and document-store timestamp objects ({"seconds": .., "nanoseconds": ..}).
    Returns None for anything else.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(raw, dict):
        seconds = raw.get("seconds", raw.get("_seconds"))
        nanos = raw.get("nanoseconds", raw.get("_nanoseconds", 0)) or 0
        if _is_number(seconds) and _is_number(nanos):
            try:
                return datetime.fromtimestamp(seconds + nanos / 1e9, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return None
    return None


class SessionFileParser:
    def __init__(self, sessions_file: Path) -> None:
        self.sessions_file = sessions_file

    def parse_sessions(self) -> list[SessionRecord] | None:
        """Parse the sessions export.

        The file holds a JSON list of session documents, or an object with a
        "sessions" list. Returns None if the file doesn't exist or can't be
        parsed. Entries that are not objects are skipped. An unreadable
        startTime is kept as None so aggregation rejects the record.
        """
        try:
            raw = json.loads(self.sessions_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("Cannot read sessions from %s: %s", self.sessions_file, e)
            return None

        if isinstance(raw, dict):
            raw = raw.get("sessions", [])
        if not isinstance(raw, list):
            logger.warning("Unexpected sessions payload in %s", self.sessions_file)
            return None

        sessions: list[SessionRecord] = []
        for position, entry in enumerate(raw):
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object session entry #%d", position)
                continue
            sessions.append(self._to_record(entry, position))

        logger.debug("Loaded %d sessions from %s", len(sessions), self.sessions_file)
        return sessions

    def _to_record(self, entry: dict, position: int) -> SessionRecord:
        start_time = parse_timestamp(entry.get("startTime"))
        if start_time is None:
            logger.warning(
                "Session entry #%d has an unreadable startTime: %r",
                position,
                entry.get("startTime"),
            )

        duration = entry.get("durationMinutes", 0)
        if not _is_number(duration):
            duration = 0

        session_id = entry.get("id")
        return SessionRecord(
            start_time=start_time,  # type: ignore[arg-type]
            duration_minutes=duration,
            type=entry.get("type"),
            id=str(session_id) if session_id is not None else None,
        )
