"""Filesystem helpers for reference inputs and scan outputs."""

from __future__ import annotations

import gzip
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any


def ensure_dir(path: Path) -> Path:
    """Create the directory if it does not exist and return it."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def open_reference(path: Path) -> IO[bytes]:
    """Open a reference file for binary line reading, gzip-aware."""

    if path.suffix == ".gz":
        return gzip.open(path, "rb")
    return path.open("rb")


def write_json(path: Path, obj: Any) -> None:
    """Write data as JSON with UTF-8 encoding."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(obj, handle, indent=2)


def now_iso() -> str:
    """Return current UTC timestamp as ISO string."""

    return datetime.now(timezone.utc).isoformat()
