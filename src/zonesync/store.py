"""JSON persistence for the session snapshot (config_dir/state.json).

Shape:
  {"version": 1,
   "reference_date": "2024-01-01",
   "zones": [{"zone_id": "UTC", "local_time": "05:00:00"}, ...]}

A missing or unreadable file loads as None so the session falls back to its
default zones.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .types import ShareSnapshot
from .utils import atomic_write_json

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Loads and saves the last ShareSnapshot for a config directory."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> ShareSnapshot | None:
        if not self.path.is_file():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return ShareSnapshot.from_dict(data)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to read %s: %s", self.path, e)
            return None
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Ignoring malformed snapshot in %s: %s", self.path, e)
            return None

    def save(self, snapshot: ShareSnapshot) -> None:
        atomic_write_json(self.path, snapshot.to_dict())
        logger.debug("Saved %d zone(s) to %s", len(snapshot.zones), self.path)

