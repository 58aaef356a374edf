"""JSON settings storage shared by the settings modules."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rental_billing.logging_config import get_logger

logger = get_logger(__name__)


def load_config_data(config_path: Path) -> dict[str, Any]:
    """Load the settings JSON object, or an empty dict when unusable."""
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Impossibile leggere %s, uso impostazioni predefinite.", config_path)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_data(config_path: Path, data: dict[str, Any]) -> None:
    """Persist the settings JSON object to disk."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
    )
