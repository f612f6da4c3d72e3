"""Command dispatch for the chatwith CLI.

Usage::

    chatwith help
    chatwith entry NAME MODEL [OPTION ...]
    chatwith remove NAME [NAME ...]
    chatwith show NAME [NAME ...]
    chatwith list
    chatwith NAME [-n] PROMPT ...
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from . import entries
from .config import RuntimeConfig, load_runtime_config
from .errors import ChatwithError
from .log import create_logger
from .session import chat
from .transport import ChatTransport

HELP_TEXT = "Valid commands: help, entry, remove, show, list, <entry_name>"


def _print_lines(lines: Sequence[str], out: TextIO) -> None:
    for line in lines:
        print(line, file=out)


def _dispatch(
    command: str,
    args: List[str],
    config: RuntimeConfig,
    *,
    transport: Optional[ChatTransport],
    out: TextIO,
) -> None:
    store = entries.read_store(config.config_path)
    action = command.lower()

    if action == "entry":
        result = entries.upsert(args, store)
        entries.write_store(store, config.config_path)
        print(result.message(), file=out)
    elif action == "remove":
        store, removed = entries.remove(args, store)
        entries.write_store(store, config.config_path)
        print(f"Removed {removed} entries from config file.", file=out)
    elif action == "show":
        _print_lines(entries.show(args, store), out)
    elif action == "list":
        _print_lines(entries.describe(store), out)
    else:
        chat(command, args, store, config, transport=transport, out=out)


def main(
    argv: Sequence[str],
    *,
    root: Optional[Path] = None,
    transport: Optional[ChatTransport] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr

    if not argv or argv[0].lower() == "help":
        print(HELP_TEXT, file=out)
        return 0

    command, args = argv[0], list(argv[1:])
    try:
        config = load_runtime_config(root)
        create_logger(config.log_level)
        _dispatch(command, args, config, transport=transport, out=out)
    except (ChatwithError, OSError) as exc:
        print(f"Error: {exc}", file=err)
        return 1
    return 0


def run() -> None:
    sys.exit(main(sys.argv[1:]))


__all__ = ["HELP_TEXT", "main", "run"]
