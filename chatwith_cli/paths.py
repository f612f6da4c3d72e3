"""Shared path utilities for the entry store and transcripts."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from .errors import ConfigPathUnresolved

APP_DIR_NAME = "chatwith"
CONFIG_FILE_NAME = "chatwith.cfg"
TRANSCRIPT_SUFFIX = ".conv"


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    if not value or not value.strip():
        return None
    return Path(value.strip()).expanduser()


def config_home() -> Path:
    """Return the per-user configuration directory for chatwith."""

    override = _env_path("CHATWITH_CONFIG_HOME")
    if override:
        return override

    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigPathUnresolved(
            "No valid config path found in environment variables."
        ) from exc

    if sys.platform == "win32":
        base = Path(os.getenv("APPDATA", home / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = home / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME") or home / ".config")
    return base / APP_DIR_NAME


def config_file(root: Path) -> Path:
    """Return the entry store file inside ``root``."""

    return root / CONFIG_FILE_NAME


def transcript_file(root: Path, model: str) -> Path:
    """Return the transcript path for ``model``.

    Model identifiers such as ``library/qwen3:8b`` keep their tag but lose
    path separators so the transcript always lands directly in ``root``.
    """

    safe = model.replace("/", "_").replace("\\", "_")
    return root / f"{safe}{TRANSCRIPT_SUFFIX}"


__all__ = ["config_home", "config_file", "transcript_file"]
