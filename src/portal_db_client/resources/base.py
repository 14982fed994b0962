"""Shared plumbing for the per-resource operation mixins."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from portal_db_client import pipeline
from portal_db_client.config import ClientConfig
from portal_db_client.errors import InvalidPayloadError, MissingParameterError
from portal_db_client.headers import read_headers, write_headers
from portal_db_client.log_events import LogEvents
from portal_db_client.logger import UnifiedLogger
from portal_db_client.routes import BasePath, QueryParam, build_endpoint
from portal_db_client.transport import HTTPClient

__all__ = ["ResourceClientBase", "require"]


def require(*checks: tuple[str, object]) -> None:
    """Raise :class:`MissingParameterError` for the first empty value, in order."""

    for what, value in checks:
        if not value:
            raise MissingParameterError(what)


class ResourceClientBase:
    """Validated configuration plus the one :class:`HTTPClient` of a handle.

    Construction validates ``config`` and performs no network I/O. Reads go
    out with :func:`read_headers`; writes and deletes with
    :func:`write_headers`.
    """

    def __init__(self, config: ClientConfig, *, http_client: HTTPClient | None = None) -> None:
        config.validate_config()
        self.config = config
        self._http = http_client or HTTPClient.from_config(config)
        self._log = UnifiedLogger.get(__name__).bind(component="client", base_url=config.base_url)
        self._log.debug(
            LogEvents.CLIENT_HANDLE_CREATED.value,
            handle=type(self).__name__,
            version=config.version,
            retries=config.retries,
            timeout=config.timeout,
        )

    @property
    def http_client(self) -> HTTPClient:
        return self._http

    def close(self) -> None:
        self._http.close()
        self._log.debug(LogEvents.CLIENT_HANDLE_CLOSED.value, handle=type(self).__name__)

    def __enter__(self) -> Any:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Helpers for the resource mixins
    # ------------------------------------------------------------------

    def _endpoint(
        self,
        base: BasePath,
        *segments: str | Enum,
        query: Iterable[tuple[QueryParam, str]] = (),
    ) -> str:
        return build_endpoint(
            self.config.base_url, self.config.version, base, *segments, query=query
        )

    def _read_headers(self) -> Mapping[str, str]:
        return read_headers(self.config.api_key.get_secret_value())

    def _write_headers(self) -> Mapping[str, str]:
        return write_headers(self.config.api_key.get_secret_value())

    @staticmethod
    def _encode(value: Any, what: str) -> bytes:
        try:
            return pipeline.type_adapter(type(value)).dump_json(value, by_alias=True)
        except (TypeError, ValueError) as exc:
            raise InvalidPayloadError(what, exc) from exc

    def _get(self, endpoint: str, result_type: Any) -> Any:
        return pipeline.fetch(self._http, endpoint, self._read_headers(), result_type)

    def _post(self, endpoint: str, body: bytes, result_type: Any) -> Any:
        return pipeline.create(self._http, endpoint, self._write_headers(), body, result_type)

    def _put(self, endpoint: str, body: bytes, result_type: Any) -> Any:
        return pipeline.replace(self._http, endpoint, self._write_headers(), body, result_type)

    def _delete(self, endpoint: str, result_type: Any) -> Any:
        return pipeline.remove(self._http, endpoint, self._write_headers(), result_type)
