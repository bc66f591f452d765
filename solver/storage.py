"""
polysolve — Local JSON storage for settings and solve history.

Data is persisted in ``~/.polysolve/`` (override with ``POLYSOLVE_DATA_DIR``).
"""

import json
import logging
import os
import time
from datetime import datetime

logger = logging.getLogger(__name__)

_DATA_DIR = os.environ.get(
    "POLYSOLVE_DATA_DIR", os.path.join(os.path.expanduser("~"), ".polysolve")
)
_SETTINGS_FILE = "settings.json"
_HISTORY_FILE = "history.json"

HISTORY_LIMIT = 100

# ── Default settings ────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "complex_precision": 2,    # decimals shown for complex root parts
    "save_history": True,
    "plot_span": 5.0,          # half-width of the plot window around the roots
}


def _path(name: str) -> str:
    return os.path.join(_DATA_DIR, name)


def _ensure_dir() -> None:
    os.makedirs(_DATA_DIR, exist_ok=True)


def _load(name: str, default):
    path = _path(name)
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError):
            logger.warning("Ignoring unreadable %s", path)
    return default


def _save(name: str, data) -> None:
    _ensure_dir()
    with open(_path(name), "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


# ── Settings ─────────────────────────────────────────────────────────────

def get_settings() -> dict:
    """Return the stored settings merged onto DEFAULT_SETTINGS."""
    stored = _load(_SETTINGS_FILE, {})
    merged = dict(DEFAULT_SETTINGS)
    if isinstance(stored, dict):
        # Merge with defaults so new keys are always present
        merged.update({k: v for k, v in stored.items() if k in DEFAULT_SETTINGS})
    return merged


def save_settings(settings: dict) -> None:
    """Persist *settings*; unknown keys are dropped."""
    unknown = set(settings) - set(DEFAULT_SETTINGS)
    if unknown:
        logger.warning("Dropping unknown setting(s): %s", ", ".join(sorted(unknown)))
    merged = get_settings()
    merged.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})
    _save(_SETTINGS_FILE, merged)


# ── History ──────────────────────────────────────────────────────────────

def add_history(equation: str, reduced_form: str, answer: str) -> None:
    """Append a solve record (newest first)."""
    history = get_history()
    record = {
        "equation": equation,
        "reduced_form": reduced_form,
        "answer": answer,
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "epoch": time.time(),
    }
    history.insert(0, record)
    _save(_HISTORY_FILE, history[:HISTORY_LIMIT])


def get_history() -> list[dict]:
    """Return the history list (newest first)."""
    history = _load(_HISTORY_FILE, [])
    return history if isinstance(history, list) else []


def clear_history() -> None:
    """Remove all history entries."""
    _save(_HISTORY_FILE, [])
