"""Load optional board configuration from `.kanban/config.yaml`."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loguru import logger

from .constants import CONFIG_FILE, DEFAULT_LOG_LEVEL, STATE_DIR_NAME, STORAGE_KEY, VALID_LOG_LEVELS
from .io_utils import _read_yaml_mapping


def load_board_config(project_dir: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional board config file.

    Args:
        project_dir: Directory that holds the `.kanban/` state directory.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = project_dir.resolve() / STATE_DIR_NAME / CONFIG_FILE
    data, err = _read_yaml_mapping(path)
    if err:
        logger.warning("Ignoring unreadable board config: {}", err)
    return data, err


def get_storage_key(config: dict[str, Any]) -> str:
    """Extract the storage key under which the board blob is kept.

    Args:
        config: Board configuration dictionary.

    Returns:
        The configured key, or the default key when unset or not a non-empty string.
    """
    raw = config.get("storage_key")
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return STORAGE_KEY


def get_log_level(config: dict[str, Any]) -> str:
    raw = config.get("log_level")
    if isinstance(raw, str) and raw.upper() in VALID_LOG_LEVELS:
        return raw.upper()
    return DEFAULT_LOG_LEVEL


def get_seed_lists(config: dict[str, Any]) -> list[dict[str, Any]] | None:
    """Extract an optional seed layout override.

    The expected shape is ``seed: [{title, cards: [{title, desc}]}]``. Entries
    that are not mappings, or lack a string title, are skipped. A ``cards``
    value that is not a list is treated as no cards.

    Args:
        config: Board configuration dictionary.

    Returns:
        A normalized list of ``{"title", "cards"}`` dicts, or None when no
        usable override is configured.
    """
    raw = config.get("seed")
    if not isinstance(raw, list):
        return None
    lists: list[dict[str, Any]] = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("title"), str):
            continue
        raw_cards = entry.get("cards")
        cards: list[dict[str, str]] = []
        for card in raw_cards if isinstance(raw_cards, list) else []:
            if not isinstance(card, dict) or not isinstance(card.get("title"), str):
                continue
            desc = card.get("desc", "")
            cards.append({"title": card["title"], "desc": desc if isinstance(desc, str) else ""})
        lists.append({"title": entry["title"], "cards": cards})
    return lists or None
