"""Request header sets for read and write calls."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

__all__ = ["AUTHORIZATION", "CONTENT_TYPE", "JSON_CONTENT_TYPE", "read_headers", "write_headers"]

AUTHORIZATION: Final[str] = "Authorization"
CONTENT_TYPE: Final[str] = "Content-Type"
JSON_CONTENT_TYPE: Final[str] = "application/json"


def read_headers(api_key: str) -> Mapping[str, str]:
    """Headers for GET calls: the credential only."""

    return MappingProxyType({AUTHORIZATION: api_key})


def write_headers(api_key: str) -> Mapping[str, str]:
    """Headers for POST/PUT/DELETE calls: the credential plus a JSON content type."""

    return MappingProxyType({AUTHORIZATION: api_key, CONTENT_TYPE: JSON_CONTENT_TYPE})
