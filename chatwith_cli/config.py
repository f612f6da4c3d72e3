"""Runtime configuration resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .paths import config_file, config_home, transcript_file

DEFAULT_URL = "http://localhost:11434/api/chat"
DEFAULT_LOG_LEVEL = "WARNING"


def get_env(name: str) -> Optional[str]:
    """Return an environment value with surrounding whitespace trimmed."""

    value = os.getenv(name)
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Everything a command needs to locate its files and its endpoint."""

    root: Path
    url: str = DEFAULT_URL
    timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def config_path(self) -> Path:
        return config_file(self.root)

    def transcript_path(self, model: str) -> Path:
        return transcript_file(self.root, model)


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def load_runtime_config(root: Optional[Path] = None) -> RuntimeConfig:
    """Build a :class:`RuntimeConfig` from ``CHATWITH_*`` variables.

    ``root`` short-circuits directory resolution, which is how tests point
    the CLI at a temporary directory.
    """

    return RuntimeConfig(
        root=root if root is not None else config_home(),
        url=get_env("CHATWITH_URL") or DEFAULT_URL,
        timeout=_parse_timeout(get_env("CHATWITH_TIMEOUT")),
        log_level=(get_env("CHATWITH_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )


__all__ = ["DEFAULT_URL", "RuntimeConfig", "get_env", "load_runtime_config"]
