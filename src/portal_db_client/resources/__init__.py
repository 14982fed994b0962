"""Per-resource operation mixins composed by :mod:`portal_db_client.client`."""

from portal_db_client.resources.accounts import AccountReadMixin, AccountWriteMixin
from portal_db_client.resources.base import ResourceClientBase
from portal_db_client.resources.blocked_contracts import (
    BlockedContractReadMixin,
    BlockedContractWriteMixin,
)
from portal_db_client.resources.chains import ChainReadMixin, ChainWriteMixin
from portal_db_client.resources.plans import PlanReadMixin
from portal_db_client.resources.portal_apps import PortalAppReadMixin, PortalAppWriteMixin
from portal_db_client.resources.users import UserReadMixin, UserWriteMixin

__all__ = [
    "ResourceClientBase",
    "ChainReadMixin",
    "ChainWriteMixin",
    "PortalAppReadMixin",
    "PortalAppWriteMixin",
    "AccountReadMixin",
    "AccountWriteMixin",
    "UserReadMixin",
    "UserWriteMixin",
    "PlanReadMixin",
    "BlockedContractReadMixin",
    "BlockedContractWriteMixin",
]
