"""Send-and-decode routine shared by every resource operation.

``fetch``, ``create``, ``replace`` and ``remove`` are thin shapes over
:func:`execute`; they differ only in HTTP method and whether a body is sent.
A call either returns a fully decoded value of the requested type or raises:

* ``requests`` exceptions and :class:`CallTimeoutError` from the transport,
  unchanged;
* :class:`ResponseNotOKError` for any status other than 200;
* :class:`ResponseDecodeError` when a 200 body does not match the type.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from http import HTTPStatus
from typing import Any, Generic, TypeVar, get_origin

from pydantic import TypeAdapter, ValidationError

from portal_db_client.errors import ResponseDecodeError, parse_error_response
from portal_db_client.log_events import LogEvents
from portal_db_client.logger import UnifiedLogger
from portal_db_client.transport import HTTPClient

__all__ = [
    "Decoder",
    "json_decoder",
    "type_adapter",
    "execute",
    "fetch",
    "create",
    "replace",
    "remove",
]

T = TypeVar("T")


@lru_cache(maxsize=None)
def type_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


class Decoder(Generic[T]):
    """Turns a JSON body into ``T`` via a cached :class:`pydantic.TypeAdapter`."""

    __slots__ = ("result_type", "_adapter")

    def __init__(self, result_type: Any) -> None:
        self.result_type = result_type
        self._adapter = type_adapter(result_type)

    @property
    def name(self) -> str:
        if get_origin(self.result_type) is None and hasattr(self.result_type, "__name__"):
            return str(self.result_type.__name__)
        return repr(self.result_type)

    def __call__(self, body: bytes) -> T:
        return self._adapter.validate_json(body)  # type: ignore[no-any-return]


def json_decoder(result_type: type[T] | Any) -> Decoder[T]:
    return Decoder(result_type)


def execute(
    client: HTTPClient,
    method: str,
    endpoint: str,
    headers: Mapping[str, str],
    decoder: Decoder[T],
    body: bytes | None = None,
) -> T:
    log = UnifiedLogger.get(__name__).bind(
        component="http.pipeline", method=method, endpoint=endpoint
    )
    response = client.send(method, endpoint, headers=headers, body=body)
    try:
        if response.status_code != HTTPStatus.OK:
            error = parse_error_response(response)
            log.debug(
                LogEvents.HTTP_REQUEST_FAILED.value,
                status_code=response.status_code,
                error=str(error),
            )
            raise error

        try:
            result = decoder(response.content)
        except ValidationError as exc:
            log.debug(
                LogEvents.HTTP_RESPONSE_DECODE_FAILED.value,
                expected=decoder.name,
                errors=exc.error_count(),
            )
            raise ResponseDecodeError(endpoint, decoder.name) from exc

        log.debug(
            LogEvents.HTTP_REQUEST_COMPLETED.value,
            status_code=response.status_code,
        )
        return result
    finally:
        response.close()


def fetch(client: HTTPClient, endpoint: str, headers: Mapping[str, str], result_type: Any) -> Any:
    """GET ``endpoint`` and decode the body as ``result_type``."""

    return execute(client, "GET", endpoint, headers, json_decoder(result_type))


def create(
    client: HTTPClient,
    endpoint: str,
    headers: Mapping[str, str],
    body: bytes,
    result_type: Any,
) -> Any:
    """POST ``body`` to ``endpoint`` and decode the body as ``result_type``."""

    return execute(client, "POST", endpoint, headers, json_decoder(result_type), body)


def replace(
    client: HTTPClient,
    endpoint: str,
    headers: Mapping[str, str],
    body: bytes,
    result_type: Any,
) -> Any:
    """PUT ``body`` to ``endpoint`` and decode the body as ``result_type``."""

    return execute(client, "PUT", endpoint, headers, json_decoder(result_type), body)


def remove(client: HTTPClient, endpoint: str, headers: Mapping[str, str], result_type: Any) -> Any:
    """DELETE ``endpoint`` and decode the body as ``result_type``."""

    return execute(client, "DELETE", endpoint, headers, json_decoder(result_type))
