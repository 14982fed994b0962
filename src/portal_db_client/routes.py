"""Endpoint URL construction for the versioned Portal DB API."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from urllib.parse import quote

__all__ = ["BasePath", "SubPath", "QueryParam", "build_endpoint"]


class BasePath(str, Enum):
    """Top level resource collections."""

    CHAIN = "chain"
    PORTAL_APP = "portal_app"
    ACCOUNT = "account"
    USER = "user"
    PLAN = "plan"
    BLOCKED_CONTRACT = "blocked_contract"
    MIDDLEWARE = "middleware"


class SubPath(str, Enum):
    """Path segments appended after a resource or resource ID."""

    GIGASTAKE = "gigastake"
    ACTIVATE = "activate"
    INTEGRATION = "integration"
    UPDATE_ROLE = "update_role"
    ACCEPT = "accept"
    REMOVE = "remove"
    PERMISSION = "permission"
    ACTIVE = "active"
    FIRST_DATE_SURPASSED = "first_date_surpassed"


class QueryParam(str, Enum):
    INCLUDE_DELETED = "include_deleted"
    INCLUDE_INACTIVE = "include_inactive"
    EXCLUDE_GIGASTAKE_APPS = "exclude_gigastake_apps"
    ROLE_NAME_FILTERS = "filters"


def _segment(value: str | Enum) -> str:
    raw = value.value if isinstance(value, Enum) else str(value)
    return quote(raw, safe="")


def build_endpoint(
    base_url: str,
    version: str,
    base: BasePath,
    *segments: str | Enum,
    query: Iterable[tuple[QueryParam, str]] = (),
) -> str:
    """Join ``{base_url}/{version}/{base}/{segments...}`` and an optional query.

    Path segments are percent-encoded; query values are emitted as given, in
    order, joined with ``&``.
    """

    path = "/".join(_segment(part) for part in (version, base, *segments))
    endpoint = f"{base_url}/{path}"
    pairs = [f"{param.value}={value}" for param, value in query]
    if pairs:
        endpoint = f"{endpoint}?{'&'.join(pairs)}"
    return endpoint
