# analytics.py
"""
Local analytics for Harvard Art Explorer.

A very small, fully local usage log that:
- appends events as JSON lines to ANALYTICS_FILE (see app_paths.py),
- uses Streamlit's session_state to keep a per-session `session_id`,
- optionally enriches events with installation metadata
  (city, country, timezone) from ANALYTICS_CONFIG_FILE,
- exposes two functions:

    track_event(event, page, props=None)
    track_event_once(event, page, once_key, props=None)

No data is sent to any external server.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Dict, Optional

import streamlit as st

from app_paths import ANALYTICS_CONFIG_FILE, ANALYTICS_FILE

logger = logging.getLogger(__name__)


# ============================================================
# Session identifier
# ============================================================
def _get_session_id() -> str:
    """
    Return a stable session_id for the current Streamlit session.

    A random UUID is generated the first time and stored in
    st.session_state, so events from one browser session can be grouped.
    """
    key = "_analytics_session_id"
    sid = st.session_state.get(key)
    if not sid:
        sid = str(uuid.uuid4())
        st.session_state[key] = sid
    return sid


# ============================================================
# Installation metadata (optional, local only)
# ============================================================
def _load_installation_metadata() -> Dict[str, Any]:
    """
    Read installation metadata (city/country/timezone) from a local JSON file.

    Expected keys (all optional):
        - installation_city
        - installation_country
        - installation_timezone

    Cached in session_state and attached to every event as
    "install_city", "install_country", "install_timezone".
    """
    cache_key = "_analytics_installation_meta"
    if cache_key in st.session_state:
        return st.session_state[cache_key]

    meta: Dict[str, Any] = {}
    try:
        if ANALYTICS_CONFIG_FILE.exists():
            with ANALYTICS_CONFIG_FILE.open("r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                meta = {
                    "install_city": data.get("installation_city"),
                    "install_country": data.get("installation_country"),
                    "install_timezone": data.get("installation_timezone"),
                }
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable analytics config %s: %s", ANALYTICS_CONFIG_FILE, exc)
        meta = {}

    st.session_state[cache_key] = meta
    return meta


# ============================================================
# Writer
# ============================================================
def _write_event(record: Dict[str, Any]) -> None:
    """Append one event as a JSON line. Analytics must never break the app."""
    try:
        ANALYTICS_FILE.parent.mkdir(parents=True, exist_ok=True)
        with ANALYTICS_FILE.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError as exc:
        logger.warning("Could not write analytics event %s: %s", record.get("event"), exc)


# ============================================================
# Public API
# ============================================================
def track_event(
    event: str,
    page: str,
    props: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a generic analytics event.

    Parameters
    ----------
    event:
        Short string identifying the type of event
        (e.g. "search_executed", "query_run", "record_featured").
    page:
        Logical page name where the event occurred (e.g. "Explorer").
    props:
        Optional dictionary with extra properties, merged with the
        installation metadata.
    """
    base_props = props.copy() if isinstance(props, dict) else {}
    base_props.update(_load_installation_metadata())

    record = {
        "ts": time.time(),
        "event": event,
        "page": page,
        "session_id": _get_session_id(),
        "props": base_props,
    }
    _write_event(record)


def track_event_once(
    event: str,
    page: str,
    once_key: str,
    props: Optional[Dict[str, Any]] = None,
) -> None:
    """Log an event only once per Streamlit session, keyed by `once_key`."""
    state_key = f"_analytics_once::{once_key}"
    if st.session_state.get(state_key):
        return

    st.session_state[state_key] = True
    track_event(event=event, page=page, props=props)
