"""Streaming decoder for ``/api/chat`` responses.

Each chunk of the response body is one JSON object carrying a slice of the
reply under ``message.content``. The decoder turns chunks into
:class:`StreamFragment` values, tracking whether the model is inside a
``<think>`` block, and :func:`render_stream` prints them as they arrive while
accumulating only the answer text.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, TextIO, Union

from .colors import DEFAULT_FG, THINK_STYLE, color_enabled
from .errors import ParseError
from .log import get_logger
from .transcript import Conversation

THINK_OPEN = "<think>"
THINK_CLOSE = "</think>"
NEWLINE_ESCAPE = "\\n"

logger = get_logger("decoder")


class DecoderState(Enum):
    ANSWERING = "answering"
    THINKING = "thinking"


@dataclass(slots=True)
class StreamFragment:
    """One decoded chunk.

    ``answer`` is the part of the chunk that belongs to the persisted reply:
    the content when it was not produced inside a thinking block, plus the
    reconstructed newlines when the decoder is answering after the chunk.
    """

    content: str
    is_thinking: bool
    newlines: int = 0
    opens_think: bool = False
    closes_think: bool = False
    answer: str = ""


def _message_content(obj: Any) -> Optional[Any]:
    if not isinstance(obj, dict):
        return None
    message = obj.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


def _stringify(content: Any) -> str:
    """Render ``content`` as JSON text without its wrapping quotes."""

    raw = json.dumps(content, ensure_ascii=False)
    if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
        raw = raw[1:-1]
    return raw.replace('\\"', '"')


class StreamDecoder:
    """Classify chunks as thinking or answer content.

    State flips to THINKING on a chunk containing ``<think>`` (that chunk is
    already thinking) and back to ANSWERING after a chunk containing
    ``</think>`` (that chunk is still thinking).
    """

    def __init__(self) -> None:
        self.state = DecoderState.ANSWERING

    @property
    def thinking(self) -> bool:
        return self.state is DecoderState.THINKING

    def feed(self, chunk: Union[str, bytes]) -> StreamFragment:
        try:
            obj = json.loads(chunk)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ParseError(f"Malformed fragment in chat stream: {exc}") from exc
        if not isinstance(obj, dict):
            raise ParseError(f"Expected a JSON object in chat stream, got: {chunk!r}")

        content = _message_content(obj)
        if content is None:
            logger.warning("No value message.content in response json. Response is: %s", chunk)
            return StreamFragment(content="", is_thinking=self.thinking)

        text = _stringify(content)
        newlines = text.count(NEWLINE_ESCAPE)
        if newlines:
            text = text.replace(NEWLINE_ESCAPE, "").replace("\\", "")

        opens = THINK_OPEN in text
        if opens:
            self.state = DecoderState.THINKING
        is_thinking = self.thinking
        closes = THINK_CLOSE in text
        if closes:
            self.state = DecoderState.ANSWERING

        answer = "" if is_thinking else text
        if not self.thinking:
            answer += "\n" * newlines
        return StreamFragment(
            content=text,
            is_thinking=is_thinking,
            newlines=newlines,
            opens_think=opens,
            closes_think=closes,
            answer=answer,
        )


def render_stream(
    chunks: Iterable[Union[str, bytes]],
    decoder: Optional[StreamDecoder] = None,
    out: Optional[TextIO] = None,
) -> str:
    """Print each chunk as it arrives and return the accumulated answer."""

    decoder = decoder or StreamDecoder()
    out = out or sys.stdout
    styled = color_enabled()
    answer: List[str] = []
    last = ""

    for chunk in chunks:
        fragment = decoder.feed(chunk)
        if fragment.opens_think and styled:
            out.write(THINK_STYLE)
        out.write(fragment.content)
        if fragment.closes_think and styled:
            out.write(DEFAULT_FG)
        if fragment.newlines:
            out.write("\n" * fragment.newlines)
            last = "\n"
        elif fragment.content:
            last = fragment.content[-1]
        answer.append(fragment.answer)
        out.flush()

    if decoder.thinking and styled:
        out.write(DEFAULT_FG)
    if last and last != "\n":
        out.write("\n")
    out.flush()
    return "".join(answer)


def send(conversation: Conversation, transport: Any, out: Optional[TextIO] = None) -> str:
    """Stream ``conversation`` to the endpoint and return the final answer."""

    return render_stream(transport.stream(conversation.to_payload()), StreamDecoder(), out)


__all__ = [
    "DecoderState",
    "StreamDecoder",
    "StreamFragment",
    "THINK_CLOSE",
    "THINK_OPEN",
    "render_stream",
    "send",
]
