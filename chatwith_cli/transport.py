"""HTTP transport for the local chat endpoint."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .config import DEFAULT_URL
from .errors import NetworkError
from .log import get_logger

logger = get_logger("transport")


class ChatTransport:
    """Thin wrapper around streaming POSTs to an Ollama-style ``/api/chat``."""

    def __init__(self, url: str = DEFAULT_URL, *, timeout: Optional[float] = None) -> None:
        self.url = url
        self.timeout = timeout

    def stream(self, payload: Dict[str, Any]) -> Iterator[str]:
        """Yield the response body one JSON document at a time.

        The server writes one object per line; blank keep-alive lines are
        skipped. Transport failures surface as :class:`NetworkError`.
        """

        data = json.dumps(payload).encode("utf-8")
        req = Request(self.url, data=data, headers=self._headers(), method="POST")
        logger.debug("POST %s (%d messages)", self.url, len(payload.get("messages") or []))
        try:
            with urlopen(req, timeout=self.timeout) as resp:  # nosec - local endpoint
                charset = resp.headers.get_content_charset() or "utf-8"
                while True:
                    line_bytes = resp.readline()
                    if not line_bytes:
                        break
                    line = line_bytes.decode(charset, errors="replace").strip()
                    if not line:
                        continue
                    yield line
        except HTTPError as he:
            raise NetworkError(_http_error_message(he, suffix=_extract_error_body(he))) from he
        except URLError as ue:
            raise NetworkError(f"Failed to reach {self.url}: {ue.reason}") from ue
        except OSError as oe:
            raise NetworkError(f"Network error talking to {self.url}: {oe}") from oe

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Accept": "application/x-ndjson"}


def _extract_error_body(error: HTTPError) -> str:
    try:
        return error.read().decode("utf-8", errors="replace").strip()
    except Exception:
        return ""


def _http_error_message(error: HTTPError, *, suffix: str = "") -> str:
    status = getattr(error, "code", None)
    reason = getattr(error, "reason", "HTTP error")
    message = f"HTTP {status or ''} {reason} from chat endpoint"
    if status == 404:
        message += ": endpoint or model not found (is the model pulled?)"
    if suffix:
        message = f"{message}\n{suffix}"
    return message


__all__ = ["ChatTransport"]
