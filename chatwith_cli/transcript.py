"""Transcript codec for the per-model conversation files.

A transcript is a sequence of role-tagged blocks::

    <user>
    hello
    </user>
    <assistant>
    hi there
    </assistant>

Lines between tags are folded into the current message by plain
concatenation, so content that spanned several lines comes back as a single
line after a reload. Apostrophes are stored escaped as ``\\\\'``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from .log import get_logger

ESCAPED_APOSTROPHE = "\\\\'"

logger = get_logger("transcript")


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def open_tag(self) -> str:
        return f"<{self.value}>"

    @property
    def close_tag(self) -> str:
        return f"</{self.value}>"


@dataclass(slots=True)
class Message:
    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(slots=True)
class Conversation:
    model: str
    messages: List[Message] = field(default_factory=list)

    def append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self.messages.append(message)
        return message

    def to_payload(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [message.to_payload() for message in self.messages],
            "stream": True,
        }


_TAGS = {
    Role.USER.open_tag: Role.USER,
    Role.USER.close_tag: None,
    Role.ASSISTANT.open_tag: Role.ASSISTANT,
    Role.ASSISTANT.close_tag: None,
}


def escape(text: str) -> str:
    """Escape apostrophes for storage.

    Existing escapes are normalized first so repeated saves never stack
    backslashes.
    """

    return text.replace(ESCAPED_APOSTROPHE, "'").replace("'", ESCAPED_APOSTROPHE)


def unescape(text: str) -> str:
    return text.replace(ESCAPED_APOSTROPHE, "'")


def split_lines(text: str) -> List[str]:
    """Split on line feeds only, dropping one trailing carriage return per line.

    Other characters that :meth:`str.splitlines` treats as breaks stay in
    the content.
    """

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def decode(text: str, model: str) -> Conversation:
    conversation = Conversation(model=model)
    messages = conversation.messages
    current = None

    for line in split_lines(text):
        if line in _TAGS:
            current = _TAGS[line]
            continue
        if current is None:
            continue
        line = unescape(line)
        if messages and messages[-1].role is current:
            messages[-1].content += line
        else:
            messages.append(Message(role=current, content=line))

    return conversation


def encode(conversation: Conversation) -> str:
    blocks = [
        f"{message.role.open_tag}\n{message.content}\n{message.role.close_tag}\n"
        for message in conversation.messages
    ]
    return escape("".join(blocks))


def load_conversation(path: Path, model: str) -> Conversation:
    if not path.exists():
        return Conversation(model=model)
    return decode(read_text(path), model)


def save_conversation(conversation: Conversation, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(conversation), encoding="utf-8", newline="")
    logger.debug("saved %d messages to %s", len(conversation.messages), path)


def reset_conversation(path: Path) -> None:
    """Truncate an existing transcript; a missing one is left missing."""

    if path.exists():
        path.write_text("", encoding="utf-8")
        logger.debug("reset transcript %s", path)


__all__ = [
    "Conversation",
    "Message",
    "Role",
    "decode",
    "encode",
    "escape",
    "load_conversation",
    "reset_conversation",
    "read_text",
    "save_conversation",
    "split_lines",
    "unescape",
]
