from __future__ import annotations

import contextlib
import os
import random
import tempfile
from datetime import UTC, datetime
from pathlib import Path


def utc_now() -> datetime:
    return datetime.now(UTC)


def make_rng(seed: int | None = None) -> random.Random:
    """Return a random source; ``None`` seeds from system entropy."""
    return random.Random(seed)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        Path(temp_path).replace(path)
    finally:
        if os.path.exists(temp_path):
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
