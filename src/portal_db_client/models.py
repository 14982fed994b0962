"""Domain records exchanged with the Portal DB API.

Only the fields the client reads or validates are declared. Records keep any
other keys the server returns (``extra="allow"``) and send them back unchanged
when re-serialized, so the models do not need to track every server-side
addition.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "RelayChainID",
    "PortalAppID",
    "AccountID",
    "UserID",
    "ProviderUserID",
    "BlockedAddress",
    "RoleName",
    "PortalDBModel",
    "GigastakeApp",
    "Chain",
    "NewChainInput",
    "UpdateChain",
    "UpdateGigastakeApp",
    "PortalApp",
    "PortalAppLite",
    "UpdatePortalApp",
    "UpdateFirstDateSurpassed",
    "Plan",
    "Account",
    "UpdateAccount",
    "AccountIntegrations",
    "CreateAccountUserAccess",
    "UpdateAccountUserRole",
    "UpdateAcceptAccountUser",
    "UpdateRemoveAccountUser",
    "UserPermissions",
    "User",
    "CreateUser",
    "CreateUserResponse",
    "BlockedContract",
    "GlobalBlockedContracts",
]

RelayChainID = NewType("RelayChainID", str)
PortalAppID = NewType("PortalAppID", str)
AccountID = NewType("AccountID", str)
UserID = NewType("UserID", str)
ProviderUserID = NewType("ProviderUserID", str)
BlockedAddress = NewType("BlockedAddress", str)

_INITIALISMS = {"id": "ID", "ids": "IDs", "url": "URL", "api": "API", "aats": "AATs"}


def _json_alias(name: str) -> str:
    """``portal_app_id`` -> ``portalAppID``; ``icon_url`` -> ``iconURL``."""

    head, *rest = name.split("_")
    parts = [head] + [_INITIALISMS.get(word, word.capitalize()) for word in rest]
    return "".join(parts)


class RoleName(str, Enum):
    """Roles a user can hold on an account's portal apps."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class PortalDBModel(BaseModel):
    """Base record: camelCase JSON keys, unknown keys kept as extras."""

    model_config = ConfigDict(
        alias_generator=_json_alias,
        populate_by_name=True,
        extra="allow",
    )


# -- chains -----------------------------------------------------------------


class GigastakeApp(PortalDBModel):
    id: str = ""
    name: str = ""
    chain_ids: dict[RelayChainID, Any] | None = None


class Chain(PortalDBModel):
    id: RelayChainID = RelayChainID("")
    blockchain: str = ""
    description: str = ""
    active: bool = False
    gigastake_apps: dict[str, GigastakeApp] | None = None


class NewChainInput(PortalDBModel):
    chain: Chain | None = None
    gigastake_app: GigastakeApp | None = None


class UpdateChain(PortalDBModel):
    id: RelayChainID = RelayChainID("")
    blockchain: str = ""
    description: str = ""


class UpdateGigastakeApp(PortalDBModel):
    id: str = ""
    name: str = ""
    chain_ids: list[RelayChainID] = Field(default_factory=list)


# -- portal apps ------------------------------------------------------------


class PortalApp(PortalDBModel):
    id: PortalAppID = PortalAppID("")
    account_id: AccountID = AccountID("")
    name: str = ""
    app_emoji: str = ""
    description: str = ""
    plan_type: str = ""
    first_date_surpassed: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PortalAppLite(PortalDBModel):
    id: PortalAppID = PortalAppID("")
    account_id: AccountID = AccountID("")
    public_key: str = ""
    plan_type: str = ""


class UpdatePortalApp(PortalDBModel):
    app_id: PortalAppID = PortalAppID("")
    name: str = ""
    app_emoji: str = ""
    description: str = ""
    plan_type: str = ""


class UpdateFirstDateSurpassed(PortalDBModel):
    portal_app_ids: list[PortalAppID] = Field(default_factory=list)
    first_date_surpassed: datetime | None = None


# -- accounts ---------------------------------------------------------------


class Plan(PortalDBModel):
    type: str = ""
    chain_ids: list[RelayChainID] | None = None
    daily_limit: int = 0
    monthly_relay_limit: int = 0


class Account(PortalDBModel):
    id: AccountID = AccountID("")
    name: str = ""
    plan_type: str = ""
    portal_apps: dict[PortalAppID, PortalApp] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpdateAccount(PortalDBModel):
    account_id: AccountID = AccountID("")
    name: str | None = None
    plan_type: str | None = None


class AccountIntegrations(PortalDBModel):
    account_id: AccountID = AccountID("")
    covalent_api_key_free: str = ""
    covalent_api_key_paid: str = ""


class CreateAccountUserAccess(PortalDBModel):
    account_id: AccountID = AccountID("")
    portal_app_id: PortalAppID = PortalAppID("")
    email: str = ""
    role_name: RoleName | str = ""


class UpdateAccountUserRole(PortalDBModel):
    account_id: AccountID = AccountID("")
    portal_app_id: PortalAppID = PortalAppID("")
    user_id: UserID = UserID("")
    role_name: RoleName | str = ""


class UpdateAcceptAccountUser(PortalDBModel):
    portal_app_id: PortalAppID = PortalAppID("")
    user_id: UserID = UserID("")
    auth_provider_type: str = ""
    provider_user_id: ProviderUserID = ProviderUserID("")


class UpdateRemoveAccountUser(PortalDBModel):
    account_id: AccountID = AccountID("")
    portal_app_id: PortalAppID = PortalAppID("")
    user_id: UserID = UserID("")


# -- users ------------------------------------------------------------------


class UserPermissions(PortalDBModel):
    user_id: UserID = UserID("")
    portal_apps: dict[PortalAppID, Any] | None = None


class User(PortalDBModel):
    id: UserID = UserID("")
    email: str = ""
    signed_up: bool = False
    auth_providers: dict[str, Any] | None = None


class CreateUser(PortalDBModel):
    email: str = ""
    provider_user_id: ProviderUserID = ProviderUserID("")
    auth_provider_type: str = ""


class CreateUserResponse(PortalDBModel):
    user: User = Field(default_factory=User)
    account_id: AccountID = AccountID("")
    portal_app_id: PortalAppID = PortalAppID("")


# -- blocked contracts ------------------------------------------------------


class BlockedContract(PortalDBModel):
    blocked_address: BlockedAddress = BlockedAddress("")
    blockchain_id: RelayChainID = RelayChainID("")
    description: str = ""
    active: bool = False


class GlobalBlockedContracts(PortalDBModel):
    """Currently blocked addresses; the server encodes the set as an object of empty values."""

    blocked_addresses: dict[BlockedAddress, Any] = Field(default_factory=dict)
