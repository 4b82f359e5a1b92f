from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional, Tuple

DEFAULT_API_URL = "https://music-analysis.lma.sh/predictions"
DEFAULT_MUSIC_URL = "https://listmate-files.mateffy.me/examples/la_muerte.mp3"
DEFAULT_OUTPUT_DIR = "analysis_results"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_str(name: str, default: str = "") -> str:
    v = os.environ.get(name)
    return (v if v is not None else default).strip() or default


def _env_int(name: str, default: int) -> int:
    v = (os.environ.get(name) or "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    v = (os.environ.get(name) or "").strip()
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def _positive(v: float, default: float) -> float:
    # requests rejects zero or negative timeouts
    return v if v > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    v = (os.environ.get(name) or "").strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    Env (all optional, usually via a .env file):
      MAE_API_URL          prediction endpoint
      MAE_MUSIC_URL        music source used when the CLI gets no URL
      MAE_OUTPUT_DIR       where artifacts are written
      MAE_VISUALIZE        ask the API for a visualization (bool)
      MAE_SONIFY           ask the API for a sonification (bool)
      MAE_WORKERS          artifact writer threads (1 = sequential)
      MAE_CONNECT_TIMEOUT  seconds
      MAE_READ_TIMEOUT     seconds; analysis runs synchronously server-side
    """

    api_url: str = DEFAULT_API_URL
    music_url: str = DEFAULT_MUSIC_URL
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    visualize: bool = True
    sonify: bool = True
    workers: int = 1
    connect_timeout: float = 10.0
    read_timeout: float = 600.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=_env_str("MAE_API_URL", DEFAULT_API_URL),
            music_url=_env_str("MAE_MUSIC_URL", DEFAULT_MUSIC_URL),
            output_dir=Path(_env_str("MAE_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
            visualize=_env_bool("MAE_VISUALIZE", True),
            sonify=_env_bool("MAE_SONIFY", True),
            workers=max(1, _env_int("MAE_WORKERS", 1)),
            connect_timeout=_positive(_env_float("MAE_CONNECT_TIMEOUT", 10.0), 10.0),
            read_timeout=_positive(_env_float("MAE_READ_TIMEOUT", 600.0), 600.0),
        )

    @property
    def timeout(self) -> Tuple[float, float]:
        # requests timeout tuple: (connect, read)
        return (float(self.connect_timeout), float(self.read_timeout))

    def with_overrides(self, **kwargs: Optional[Any]) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        changes = {k: v for k, v in kwargs.items() if v is not None}
        if "output_dir" in changes:
            changes["output_dir"] = Path(changes["output_dir"])
        if "workers" in changes:
            changes["workers"] = max(1, int(changes["workers"]))
        for k, default in (("connect_timeout", 10.0), ("read_timeout", 600.0)):
            if k in changes:
                changes[k] = _positive(float(changes[k]), default)
        return replace(self, **changes)
