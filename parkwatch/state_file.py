from __future__ import annotations

import json
import logging
import os
import tempfile

from parkwatch.domain import ParkingState

logger = logging.getLogger(__name__)


def load_state(path: str) -> ParkingState | None:
    """Return the last persisted state, or None when there is no usable one."""
    if not os.path.exists(path):
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
        return ParkingState.from_record(raw)
    except (OSError, ValueError) as e:
        # Corrupted state shouldn't brick the checker; treat as first observation.
        logger.warning("Failed to read state file %s (%s: %s)", path, type(e).__name__, e)
        return None


def save_state(path: str, state: ParkingState) -> bool:
    """Overwrite the state file. Returns False (and logs) when the write failed."""
    folder = os.path.dirname(os.path.abspath(path))

    try:
        if folder and not os.path.exists(folder):
            os.makedirs(folder, exist_ok=True)

        # Atomic write
        with tempfile.NamedTemporaryFile("w", delete=False, encoding="utf-8", dir=folder, suffix=".tmp") as tf:
            json.dump(state.to_record(), tf, ensure_ascii=False, indent=2)
            tmp_name = tf.name

        os.replace(tmp_name, path)
    except OSError as e:
        logger.error("Failed to save state file %s (%s: %s)", path, type(e).__name__, e)
        return False

    return True
