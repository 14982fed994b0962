"""Retrying transport adapter and the shared HTTP client built on it."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any, Final

import requests
from requests import PreparedRequest, Response
from requests.adapters import BaseAdapter, HTTPAdapter
from requests.exceptions import (
    ChunkedEncodingError,
    ContentDecodingError,
    ReadTimeout,
    RequestException,
    SSLError,
)
from urllib3.exceptions import DecodeError, ProtocolError, ReadTimeoutError
from urllib3.exceptions import SSLError as _SSLError
from urllib3.response import BaseHTTPResponse

from portal_db_client.config import ClientConfig
from portal_db_client.errors import CallTimeoutError
from portal_db_client.log_events import LogEvents
from portal_db_client.logger import UnifiedLogger

__all__ = ["BACKOFF_UNIT_MS", "backoff_delay", "RetryingTransport", "HTTPClient"]

BACKOFF_UNIT_MS: Final[int] = 100
_BODY_CHUNK_SIZE: Final[int] = 8192


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after attempt ``attempt`` (0-based) fails: ``attempt**2 * 100ms``."""

    return attempt * attempt * BACKOFF_UNIT_MS / 1000


def _sleep(seconds: float) -> None:
    time.sleep(seconds)


def _read_body(body: Any) -> bytes:
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if hasattr(body, "read"):
        data = body.read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    return b"".join(
        chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk) for chunk in body
    )


def _with_cached_body(request: PreparedRequest) -> PreparedRequest:
    """Return a copy of ``request`` whose body is fully materialized bytes."""

    template = request.copy()
    if request.body is None or isinstance(request.body, bytes):
        return template
    body = _read_body(request.body)
    template.body = body
    template.headers.pop("Transfer-Encoding", None)
    template.headers["Content-Length"] = str(len(body))
    return template


class _Deadline:
    """Wall-clock budget for one call, measured with a monotonic clock."""

    __slots__ = ("budget", "expires_at")

    def __init__(self, timeout: Any) -> None:
        if isinstance(timeout, (int, float)) and not isinstance(timeout, bool):
            self.budget: float | None = float(timeout)
            self.expires_at: float | None = time.monotonic() + self.budget
        else:
            self.budget = None
            self.expires_at = None

    def remaining(self) -> float | None:
        if self.expires_at is None:
            return None
        return self.expires_at - time.monotonic()

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0


class RetryingTransport(HTTPAdapter):
    """Transport adapter that re-sends a request on transient failure.

    A transport error or a 5xx response is retried up to ``retries`` times with
    a quadratic backoff between attempts; any other response ends the loop.
    The request body is read once and every attempt sends the same bytes.

    A numeric ``timeout`` passed by the session is treated as the budget for
    the whole call: each attempt gets what is left of it and
    :class:`CallTimeoutError` is raised once it runs out. Unless the caller
    streams, the body of the final response is read here in chunks, so a
    server that trickles its body cannot outlast the budget either.
    """

    def __init__(
        self,
        retries: int = 0,
        *,
        underlying: BaseAdapter | None = None,
        sleep: Callable[[float], None] | None = None,
        **adapter_kwargs: Any,
    ) -> None:
        if retries < 0:
            msg = "retries must be >= 0"
            raise ValueError(msg)
        super().__init__(**adapter_kwargs)
        self.retries = retries
        self._underlying = underlying
        self._sleep = sleep or _sleep
        self._log = UnifiedLogger.get(__name__).bind(component="http.transport")

    def send(
        self,
        request: PreparedRequest,
        stream: bool = False,
        timeout: Any = None,
        verify: bool | str = True,
        cert: Any = None,
        proxies: Mapping[str, str] | None = None,
    ) -> Response:
        template = _with_cached_body(request)
        deadline = _Deadline(timeout)
        url = request.url or ""

        for attempt in range(self.retries + 1):
            attempt_timeout = timeout
            remaining = deadline.remaining()
            if remaining is not None:
                if remaining <= 0:
                    raise self._deadline_exceeded(url, deadline, attempts=attempt)
                attempt_timeout = remaining

            try:
                response = self._send_once(
                    template.copy(),
                    stream=stream,
                    timeout=attempt_timeout,
                    verify=verify,
                    cert=cert,
                    proxies=proxies,
                )
                terminal = response.status_code < 500 or attempt >= self.retries
                if terminal and not stream and deadline.budget is not None:
                    self._load_body(response, deadline, url, attempts=attempt + 1)
            except RequestException as exc:
                if deadline.expired():
                    raise self._deadline_exceeded(url, deadline, attempts=attempt + 1) from exc
                if attempt >= self.retries:
                    raise
                self._log.debug(
                    LogEvents.HTTP_REQUEST_EXCEPTION.value,
                    method=request.method,
                    endpoint=url,
                    attempt=attempt,
                    error=str(exc),
                )
            else:
                if terminal:
                    return response
                self._log.debug(
                    LogEvents.HTTP_REQUEST_RETRY.value,
                    method=request.method,
                    endpoint=url,
                    attempt=attempt,
                    status_code=response.status_code,
                )
                response.close()

            delay = backoff_delay(attempt)
            remaining = deadline.remaining()
            if remaining is not None and remaining <= delay:
                raise self._deadline_exceeded(url, deadline, attempts=attempt + 1)
            self._sleep(delay)

        raise RuntimeError("retry loop ended without a terminal outcome")  # pragma: no cover

    def close(self) -> None:
        super().close()
        if self._underlying is not None:
            self._underlying.close()

    def _send_once(self, request: PreparedRequest, **kwargs: Any) -> Response:
        if self._underlying is not None:
            return self._underlying.send(request, **kwargs)
        return super().send(request, **kwargs)

    def _load_body(
        self, response: Response, deadline: _Deadline, url: str, *, attempts: int
    ) -> None:
        """Read the body into ``response`` chunk by chunk while the budget lasts."""

        if response._content is not False:
            return
        raw = response.raw
        chunks: list[bytes] = []
        try:
            while True:
                if deadline.expired():
                    raise self._deadline_exceeded(url, deadline, attempts=attempts)
                chunk = self._read_chunk(raw)
                if not chunk:
                    break
                chunks.append(chunk)
        except (RequestException, CallTimeoutError):
            response.close()
            raise
        response._content = b"".join(chunks)
        response._content_consumed = True

    @staticmethod
    def _read_chunk(raw: Any) -> bytes:
        if raw is None:
            return b""
        try:
            if isinstance(raw, BaseHTTPResponse):
                return raw.read1(_BODY_CHUNK_SIZE, decode_content=True)
            return bytes(raw.read(_BODY_CHUNK_SIZE))
        except ProtocolError as exc:
            raise ChunkedEncodingError(exc) from exc
        except DecodeError as exc:
            raise ContentDecodingError(exc) from exc
        except ReadTimeoutError as exc:
            raise ReadTimeout(exc) from exc
        except _SSLError as exc:
            raise SSLError(exc) from exc

    def _deadline_exceeded(
        self, url: str, deadline: _Deadline, *, attempts: int
    ) -> CallTimeoutError:
        budget = deadline.budget or 0.0
        self._log.debug(
            LogEvents.HTTP_DEADLINE_EXCEEDED.value,
            endpoint=url,
            attempt=attempts,
            timeout=budget,
        )
        return CallTimeoutError(url, budget, attempts=attempts)


class HTTPClient:
    """A session mounted with :class:`RetryingTransport` plus the call timeout.

    Built once per client handle and shared by all of its calls.
    """

    def __init__(
        self,
        *,
        retries: int = 0,
        timeout: float | None = None,
        transport: RetryingTransport | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport or RetryingTransport(retries)
        self.session = session or requests.Session()
        self.session.mount("http://", self.transport)
        self.session.mount("https://", self.transport)

    @classmethod
    def from_config(cls, config: ClientConfig) -> HTTPClient:
        return cls(retries=config.retries, timeout=config.timeout)

    def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> Response:
        """Send one logical request; transport exceptions propagate unchanged."""

        return self.session.request(
            method,
            url,
            headers=dict(headers),
            data=body,
            timeout=self.timeout,
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
