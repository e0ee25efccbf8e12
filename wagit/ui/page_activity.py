"""Webhook activity timeline page."""

from __future__ import annotations

from datetime import datetime

import streamlit as st

from wagit.activity import EVENTS, read_activity_log
from wagit.config import Config

EVENT_COLORS = {
    "message_received": "blue",
    "config_error": "red",
    "inference_attempt": "violet",
    "reply_sent": "green",
    "reply_failed": "red",
}

SKIPPED_FIELDS = {"timestamp", "event"}


def render(config: Config) -> None:
    """Render the webhook activity timeline."""
    st.header("Webhook Activity")
    st.caption("Messages the WhatsApp webhook received and how it replied.")

    col1, col2 = st.columns(2)
    with col1:
        event_filter = st.selectbox("Event", ["All"] + EVENTS, key="activity_event_filter")
    with col2:
        limit = st.slider("Entries", min_value=10, max_value=100, value=20, key="activity_limit")

    event = event_filter if event_filter != "All" else None
    entries = read_activity_log(limit=limit, event=event, log_path=config.log_path)

    if not entries:
        st.info("No activity recorded yet. Entries appear when the webhook receives messages.")
        return

    _render_summary(entries)
    st.divider()

    for entry in entries:
        _render_entry(entry)


def _render_summary(entries: list[dict]) -> None:
    received = sum(1 for e in entries if e.get("event") == "message_received")
    replied = sum(1 for e in entries if e.get("event") == "reply_sent")
    failures = sum(1 for e in entries if e.get("event") in ("reply_failed", "config_error"))

    cols = st.columns(3)
    cols[0].metric("Received", received)
    cols[1].metric("Replied", replied)
    cols[2].metric("Failures", failures)


def _render_entry(entry: dict) -> None:
    ts = entry.get("timestamp", "")
    try:
        time_str = datetime.fromisoformat(ts).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, TypeError):
        time_str = ts[:19] if ts else "unknown"

    event = entry.get("event", "unknown")
    color = EVENT_COLORS.get(event, "gray")
    header = f"**{time_str}** — :{color}[{event}]"
    if entry.get("sender"):
        header += f" — {entry['sender']}"
    if entry.get("error") or entry.get("ok") is False:
        header += " ❌"

    with st.expander(header):
        if entry.get("error"):
            st.error(f"Error: {entry['error']}")
        details = {k: v for k, v in entry.items() if k not in SKIPPED_FIELDS}
        if details:
            st.json(details)
