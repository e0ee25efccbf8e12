"""Activity logging for webhook traffic.

Logs every inbound message and its outcome to a JSONL file so the operator
can see what the webhook received and what it replied. Each line is a JSON
object with a timestamp, an event name and event-specific fields.

The log file path comes from WAGIT_LOG_PATH (default: wagit-activity.jsonl
in the working directory).
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from pathlib import Path

from wagit.config import DEFAULT_LOG_PATH

TEXT_PREVIEW_LIMIT = 500

EVENTS = [
    "message_received",
    "config_error",
    "inference_attempt",
    "reply_sent",
    "reply_failed",
]


def _resolve_log_path() -> Path:
    env_path = os.getenv("WAGIT_LOG_PATH")
    if env_path:
        return Path(env_path)
    return DEFAULT_LOG_PATH


def _preview(value: object) -> object:
    if isinstance(value, str) and len(value) > TEXT_PREVIEW_LIMIT:
        return value[:TEXT_PREVIEW_LIMIT]
    return value


def log_event(event: str, log_path: Path | None = None, **fields: object) -> None:
    """Append an event entry to the activity log. Never raises."""
    try:
        entry = {"timestamp": datetime.now().isoformat(), "event": event}
        entry.update({key: _preview(value) for key, value in fields.items()})
        path = log_path or _resolve_log_path()
        with open(path, "a") as f:
            f.write(json.dumps(entry, default=str) + "\n")
    except Exception:
        pass  # Never block the reply path for logging


def read_activity_log(
    limit: int = 20,
    event: str | None = None,
    log_path: Path | None = None,
) -> list[dict]:
    """Read recent activity log entries.

    Returns entries in reverse chronological order (most recent first).
    """
    path = log_path or _resolve_log_path()
    if not path.exists():
        return []

    entries: list[dict] = []
    for line in path.read_text().splitlines():
        if not line.strip():
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue

        if event and entry.get("event") != event:
            continue

        entries.append(entry)

    entries.reverse()
    return entries[:limit]
