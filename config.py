"""
config.py — runtime configuration for Harvard Art Explorer.

Usage:
    from config import get_config

    cfg = get_config()
    cfg.backend       # "harvard" or "local"
    cfg.api_key       # Harvard Art Museums API key ("" when missing)

Environment variables (all optional):
    HARVARD_API_KEY                   API key (falls back to st.secrets)
    EXPLORER_API_BASE_URL             Override the API base URL
    EXPLORER_BACKEND                  "harvard" | "local"
    EXPLORER_REQUEST_TIMEOUT          HTTP timeout in seconds
    EXPLORER_PAGE_SIZE                Page size of the offline collection
    EXPLORER_CLEAR_FEATURE_ON_SEARCH  Drop the featured record on new results
    EXPLORER_LOG_LEVEL                Logging level name
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import streamlit as st

DEFAULT_API_BASE_URL = "https://api.harvardartmuseums.org"
DEFAULT_REQUEST_TIMEOUT = 20
DEFAULT_PAGE_SIZE = 4

BACKENDS = ("harvard", "local")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    """Resolved runtime settings."""

    api_key: str
    api_base_url: str
    backend: str
    request_timeout: int
    page_size: int
    clear_feature_on_new_results: bool
    log_level: str


def _read_api_key() -> str:
    """Environment first, then .streamlit/secrets.toml (if any)."""
    key = os.environ.get("HARVARD_API_KEY", "").strip()
    if key:
        return key
    try:
        return str(st.secrets.get("HARVARD_API_KEY", "")).strip()
    except Exception:
        # No secrets file configured
        return ""


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 1 else default


def _read_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


def get_config() -> AppConfig:
    """Build the configuration from the environment.

    The backend defaults to the Harvard API when a key is available and to
    the bundled offline collection otherwise. An unknown EXPLORER_BACKEND
    value raises ValueError.
    """
    api_key = _read_api_key()

    backend = os.environ.get("EXPLORER_BACKEND", "").strip().lower()
    if not backend:
        backend = "harvard" if api_key else "local"
    if backend not in BACKENDS:
        raise ValueError(f"EXPLORER_BACKEND must be one of {BACKENDS}, got {backend!r}")

    return AppConfig(
        api_key=api_key,
        api_base_url=os.environ.get("EXPLORER_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        backend=backend,
        request_timeout=_read_int("EXPLORER_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        page_size=_read_int("EXPLORER_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        clear_feature_on_new_results=_read_bool("EXPLORER_CLEAR_FEATURE_ON_SEARCH"),
        log_level=os.environ.get("EXPLORER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def configure_logging(level: str = "INFO") -> None:
    """Install the app's log format once (Streamlit reruns call this often)."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
