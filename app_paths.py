"""
app_paths.py — central paths for local files.

This app uses local files for:
- the offline sample collection (bundled JSON, read-only)
- analytics events (local only, no external tracking)

EXPLORER_DATA_DIR moves the writable data folder (tests point it at a
temporary directory). EXPLORER_COLLECTION_FILE swaps the sample collection.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root (folder where this file lives)
ROOT_DIR = Path(__file__).resolve().parent

# App folders
DATA_DIR = Path(os.environ.get("EXPLORER_DATA_DIR", str(ROOT_DIR / "data")))
ANALYTICS_DIR = DATA_DIR / "analytics"

# Ensure directories exist (safe no-op if already created)
DATA_DIR.mkdir(parents=True, exist_ok=True)
ANALYTICS_DIR.mkdir(parents=True, exist_ok=True)

# Offline collection (ships with the repo, never written)
SAMPLE_COLLECTION_FILE = Path(
    os.environ.get("EXPLORER_COLLECTION_FILE", str(ROOT_DIR / "data" / "collection_sample.json"))
)

# Analytics files
ANALYTICS_FILE = ANALYTICS_DIR / "events.jsonl"
ANALYTICS_CONFIG_FILE = DATA_DIR / "analytics_config.json"
