"""Exception taxonomy for the Portal DB client.

Transport failures are not wrapped: once retries are exhausted the original
``requests`` exception reaches the caller unchanged. Everything else the client
raises derives from :class:`PortalDBError`.
"""

from __future__ import annotations

from http import HTTPStatus

from pydantic import TypeAdapter, ValidationError
from requests import Response
from requests.exceptions import RequestException

__all__ = [
    "PortalDBError",
    "ConfigurationError",
    "BaseURLNotProvidedError",
    "APIKeyNotProvidedError",
    "APIVersionNotProvidedError",
    "UnsupportedAPIVersionError",
    "ConfigFileError",
    "CallTimeoutError",
    "ResponseNotOKError",
    "ResponseDecodeError",
    "InputValidationError",
    "MissingParameterError",
    "InvalidRoleNameError",
    "InvalidPayloadError",
    "parse_error_response",
]

RESPONSE_NOT_OK = "Response not OK"

_ERROR_BODY = TypeAdapter(dict[str, str])


class PortalDBError(Exception):
    """Base class for errors raised by the client."""


# -- configuration ----------------------------------------------------------


class ConfigurationError(PortalDBError):
    """The client configuration is incomplete or invalid."""


class BaseURLNotProvidedError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("base URL not provided")


class APIKeyNotProvidedError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("API key not provided")


class APIVersionNotProvidedError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("API version not provided")


class UnsupportedAPIVersionError(ConfigurationError):
    """The configured API version is not in the recognized set."""

    def __init__(self, version: str, supported: frozenset[str]) -> None:
        allowed = ", ".join(sorted(supported))
        super().__init__(f"invalid API version {version!r}, must be one of: {allowed}")
        self.version = version


class ConfigFileError(ConfigurationError):
    """A configuration file could not be read or has the wrong shape."""


# -- request execution ------------------------------------------------------


class CallTimeoutError(PortalDBError):
    """The per-call deadline elapsed before a terminal response was received."""

    def __init__(self, url: str, timeout: float, *, attempts: int) -> None:
        super().__init__(
            f"request to {url} exceeded its {timeout:g}s deadline after {attempts} attempt(s)"
        )
        self.url = url
        self.timeout = timeout
        self.attempts = attempts


class ResponseNotOKError(PortalDBError):
    """Non-success HTTP response, optionally carrying the server's message."""

    def __init__(self, status_code: int, status_text: str, message: str | None = None) -> None:
        text = f"{RESPONSE_NOT_OK}. {status_code} {status_text}".rstrip()
        if message is not None:
            text = f"{text}: {message}"
        super().__init__(text)
        self.status_code = status_code
        self.status_text = status_text
        self.message = message


class ResponseDecodeError(PortalDBError):
    """The server answered 200 but the body did not match the expected type.

    The underlying :class:`pydantic.ValidationError` is available as
    ``__cause__``.
    """

    def __init__(self, url: str | None, expected: str) -> None:
        super().__init__(f"unable to decode response from {url} as {expected}")
        self.url = url
        self.expected = expected


# -- input validation -------------------------------------------------------


class InputValidationError(PortalDBError, ValueError):
    """A required argument is missing or invalid; no request was sent."""


class MissingParameterError(InputValidationError):
    def __init__(self, what: str) -> None:
        super().__init__(f"no {what}")
        self.what = what


class InvalidRoleNameError(InputValidationError):
    def __init__(self, role_name: object) -> None:
        super().__init__(f"invalid role name filter provided: {role_name}")
        self.role_name = role_name


class InvalidPayloadError(InputValidationError):
    """A request body could not be serialized to JSON."""

    def __init__(self, what: str, reason: object) -> None:
        super().__init__(f"invalid {what} JSON: {reason}")


def _status_text(response: Response) -> str:
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return response.reason or ""


def parse_error_response(response: Response) -> ResponseNotOKError:
    """Describe a non-success response.

    Always returns an error carrying the status code and its standard text.
    When the body is a flat JSON object of strings with an ``"error"`` key, its
    value is appended. Unreadable or unexpected bodies are not an error here.
    """

    code = response.status_code
    text = _status_text(response)

    try:
        body = response.content
    except RequestException:
        return ResponseNotOKError(code, text)

    try:
        payload = _ERROR_BODY.validate_json(body or b"", strict=True)
    except ValidationError:
        return ResponseNotOKError(code, text)

    return ResponseNotOKError(code, text, payload.get("error"))
