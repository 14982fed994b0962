"""Client handles and their constructors."""

from __future__ import annotations

from portal_db_client.config import ClientConfig
from portal_db_client.interfaces import DBClient, DBReader
from portal_db_client.resources.accounts import AccountReadMixin, AccountWriteMixin
from portal_db_client.resources.blocked_contracts import (
    BlockedContractReadMixin,
    BlockedContractWriteMixin,
)
from portal_db_client.resources.chains import ChainReadMixin, ChainWriteMixin
from portal_db_client.resources.plans import PlanReadMixin
from portal_db_client.resources.portal_apps import PortalAppReadMixin, PortalAppWriteMixin
from portal_db_client.resources.users import UserReadMixin, UserWriteMixin
from portal_db_client.transport import HTTPClient

__all__ = ["PortalDBReader", "PortalDBClient", "new_db_client", "new_read_only_db_client"]


class PortalDBReader(
    ChainReadMixin,
    PortalAppReadMixin,
    AccountReadMixin,
    UserReadMixin,
    PlanReadMixin,
    BlockedContractReadMixin,
):
    """Handle exposing only the read operations."""


class PortalDBClient(
    PortalDBReader,
    ChainWriteMixin,
    PortalAppWriteMixin,
    AccountWriteMixin,
    UserWriteMixin,
    BlockedContractWriteMixin,
):
    """Handle exposing every read and write operation."""


def new_db_client(config: ClientConfig, *, http_client: HTTPClient | None = None) -> DBClient:
    """Validate ``config`` and return a read/write handle.

    Raises the matching :class:`~portal_db_client.errors.ConfigurationError`
    subclass when the configuration is incomplete.
    """

    return PortalDBClient(config, http_client=http_client)


def new_read_only_db_client(
    config: ClientConfig, *, http_client: HTTPClient | None = None
) -> DBReader:
    """Validate ``config`` and return a handle without write operations."""

    return PortalDBReader(config, http_client=http_client)
