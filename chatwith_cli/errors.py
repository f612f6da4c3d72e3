"""Exception types raised by the chatwith CLI."""

from __future__ import annotations


class ChatwithError(RuntimeError):
    """Base exception for failures surfaced to the user as ``Error: ...``."""


class ConfigPathUnresolved(ChatwithError):
    """Raised when the environment offers no usable config directory."""


class InvalidConfigLine(ChatwithError):
    """Raised when an entry line is malformed or named after a command."""

    def __init__(self, reason: str, line: str) -> None:
        super().__init__(f"Invalid entry in config. {reason} Line:\n{line}")
        self.reason = reason
        self.line = line


class IncompleteEntry(ChatwithError):
    """Raised when ``entry`` is called without both a name and a model."""


class UnknownEntry(ChatwithError):
    """Raised when a chat is requested against a name missing from the store."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No model with name {name} found in config file.")
        self.name = name


class NetworkError(ChatwithError):
    """Raised when the chat endpoint cannot be reached or fails mid-stream."""


class ParseError(ChatwithError):
    """Raised when a streamed fragment is not a JSON object."""


__all__ = [
    "ChatwithError",
    "ConfigPathUnresolved",
    "InvalidConfigLine",
    "IncompleteEntry",
    "UnknownEntry",
    "NetworkError",
    "ParseError",
]
