"""Persist last-used UI selections."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from contracts.versioning import make_envelope
from log_config.logger import get_logger

logger = get_logger(__name__)


def state_path(root: Optional[Path] = None) -> Path:
    base = root or Path("configs")
    return base / "app_state.json"


def load_state(root: Optional[Path] = None) -> Dict[str, str]:
    path = state_path(root)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable app state {path}: {e}")
        return {}
    if isinstance(data, dict) and isinstance(data.get("payload"), dict):
        return data["payload"]
    return {}


def save_state(state: Dict[str, str], root: Optional[Path] = None) -> None:
    path = state_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(make_envelope(state), indent=2))
