"""chatwith: persisted chats with locally hosted models."""

from __future__ import annotations

from .app import main
from .entries import Entry
from .errors import ChatwithError
from .transcript import Conversation, Message, Role

__version__ = "0.1.0"

__all__ = [
    "main",
    "Entry",
    "ChatwithError",
    "Conversation",
    "Message",
    "Role",
    "__version__",
]
