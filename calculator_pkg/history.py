"""Persistent calculation history.

This module provides:
- Loading the saved history list from a JSON file
- Saving it atomically (write to temp file, then rename)
- Version checking so an incompatible file is ignored rather than misread

History is stored newest first and capped at ``HISTORY_LIMIT`` entries.
"""

from __future__ import annotations

import json
from pathlib import Path

from .config import HISTORY_FILE, HISTORY_LIMIT
from .logging_config import get_logger
from .types import HistoryEntry

logger = get_logger("history")

_HISTORY_VERSION = 1  # Increment when history format changes


def load_history(path: Path | None = None) -> list[HistoryEntry]:
    """Load saved history from disk.

    Args:
        path: History file (defaults to ``config.HISTORY_FILE``)

    Returns:
        Entries newest first; an empty list if the file is missing,
        unreadable, or from another format version
    """
    history_file = Path(path) if path is not None else HISTORY_FILE
    if not history_file.exists():
        return []

    try:
        with open(history_file, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning(f"Failed to load history: {e}, starting with empty history")
        return []

    if not isinstance(data, dict) or data.get("version") != _HISTORY_VERSION:
        logger.info("History version mismatch, ignoring saved history")
        return []

    if not isinstance(data.get("entries", []), list):
        logger.warning("History entries are not a list, starting with empty history")
        return []

    entries = []
    for item in data.get("entries", []):
        try:
            entries.append(HistoryEntry.from_dict(item))
        except (KeyError, TypeError):
            logger.debug(f"Skipping malformed history entry: {item!r}")
    logger.debug(f"Loaded {len(entries)} history entries")
    return entries[:HISTORY_LIMIT]


def save_history(entries: list[HistoryEntry], path: Path | None = None) -> bool:
    """Save history to disk.

    Args:
        entries: Entries newest first; only the first ``HISTORY_LIMIT`` are kept
        path: History file (defaults to ``config.HISTORY_FILE``)

    Returns:
        True if the file was written
    """
    history_file = Path(path) if path is not None else HISTORY_FILE
    payload = {
        "version": _HISTORY_VERSION,
        "entries": [entry.to_dict() for entry in entries[:HISTORY_LIMIT]],
    }
    try:
        history_file.parent.mkdir(parents=True, exist_ok=True)
        temp_file = history_file.with_suffix(".tmp")
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        temp_file.replace(history_file)
    except OSError as e:
        logger.warning(f"Failed to save history: {e}")
        return False
    logger.debug(f"Saved {len(payload['entries'])} history entries")
    return True
