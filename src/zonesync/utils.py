"""Shared helpers: config directory resolution and atomic JSON writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def zonesync_dir() -> Path:
    """Config directory: $ZONESYNC_DIR, else ~/.zonesync."""
    env_dir = os.environ.get("ZONESYNC_DIR", "")
    if env_dir:
        return Path(os.path.expanduser(env_dir))
    return Path.home() / ".zonesync"


def atomic_write_json(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON to `path` via a temp file + rename so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=indent, ensure_ascii=False)
    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
