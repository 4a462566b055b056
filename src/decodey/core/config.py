from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import msgspec

from decodey.core.cipher import PLACEHOLDER, cipher_letters, normalize_text
from decodey.core.models.enums import Difficulty
from decodey.core.scoring import PENALTY_PER_MISTAKE
from decodey.core.utils import atomic_write_bytes

FALLBACK_SOLUTION = "MANNERS MAKETH MAN"


class DecodeyConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    penalty_per_mistake: int = PENALTY_PER_MISTAKE
    default_difficulty: Difficulty = Difficulty.MEDIUM
    placeholder: str = PLACEHOLDER
    fallback_solution: str = FALLBACK_SOLUTION
    quotes_path: str | None = None

    def __post_init__(self) -> None:
        if self.penalty_per_mistake < 0:
            raise ValueError("penalty_per_mistake must be >= 0")
        if len(self.placeholder) != 1:
            raise ValueError("placeholder must be a single character")
        if not cipher_letters(normalize_text(self.fallback_solution)):
            raise ValueError("fallback_solution must contain at least one letter A-Z")


def config_dir() -> Path:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "decodey"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "decodey"
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "decodey"
    return Path.home() / ".config" / "decodey"


def config_path() -> Path:
    override = os.environ.get("DECODEY_CONFIG")
    if override:
        return Path(override)
    return config_dir() / "config.json"


def default_data_dir() -> Path:
    override = os.environ.get("DECODEY_DATA_DIR")
    if override:
        return Path(override)
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "decodey" / "sessions"
    return Path.home() / ".local" / "share" / "decodey" / "sessions"


def load_config(path: Path | None = None) -> DecodeyConfig:
    path = path or config_path()
    if not path.exists():
        return DecodeyConfig()
    try:
        return msgspec.json.decode(path.read_bytes(), type=DecodeyConfig)
    except (OSError, msgspec.DecodeError, msgspec.ValidationError, TypeError, ValueError):
        return DecodeyConfig()


def save_config(config: DecodeyConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    atomic_write_bytes(path, msgspec.json.format(msgspec.json.encode(config)))
    return path


def update_config(config: DecodeyConfig, key: str, value: Any) -> DecodeyConfig:
    """Return a copy of ``config`` with ``key`` set, validating the new value."""
    if key not in DecodeyConfig.__struct_fields__:
        raise ValueError(f"Unknown config key: {key}")
    payload = msgspec.to_builtins(config)
    payload[key] = value
    try:
        return msgspec.convert(payload, type=DecodeyConfig, strict=False)
    except msgspec.ValidationError as exc:
        raise ValueError(str(exc)) from exc
