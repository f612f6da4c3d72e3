"""One chat exchange against a configured entry."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, TextIO

from .colors import color
from .config import RuntimeConfig
from .decoder import send
from .entries import Entry, find
from .errors import UnknownEntry
from .log import get_logger
from .transcript import Role, load_conversation, reset_conversation, save_conversation
from .transport import ChatTransport

RESET_FLAG = "-n"

logger = get_logger("session")


def chat(
    name: str,
    args: Sequence[str],
    store: List[Entry],
    config: RuntimeConfig,
    *,
    transport: Optional[ChatTransport] = None,
    out: Optional[TextIO] = None,
) -> bool:
    """Send ``args`` as the next user turn to the entry called ``name``.

    Returns False when no such entry exists. Nothing is written to the
    transcript unless the whole response was received.
    """

    out = out or sys.stdout
    entry = find(name, store)
    if entry is None:
        print(color(str(UnknownEntry(name)), fg="yellow"), file=out)
        return False

    path = config.transcript_path(entry.model)
    prompt_args = list(args)
    if prompt_args and prompt_args[0] == RESET_FLAG:
        reset_conversation(path)
        prompt_args = prompt_args[1:]

    conversation = load_conversation(path, entry.model)
    conversation.append(Role.USER, " ".join(prompt_args))
    logger.debug("sending %d messages to %s", len(conversation.messages), entry.model)

    transport = transport or ChatTransport(config.url, timeout=config.timeout)
    answer = send(conversation, transport, out)

    conversation.append(Role.ASSISTANT, answer)
    save_conversation(conversation, path)
    return True


__all__ = ["RESET_FLAG", "chat"]
