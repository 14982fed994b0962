"""Capability protocols for client handles.

:func:`~portal_db_client.client.new_read_only_db_client` returns a
:class:`DBReader`; :func:`~portal_db_client.client.new_db_client` returns a
:class:`DBClient`, which is both a reader and a :class:`DBWriter`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from portal_db_client.models import (
    Account,
    AccountID,
    AccountIntegrations,
    BlockedAddress,
    BlockedContract,
    Chain,
    CreateAccountUserAccess,
    CreateUser,
    CreateUserResponse,
    GigastakeApp,
    GlobalBlockedContracts,
    NewChainInput,
    Plan,
    PortalApp,
    PortalAppID,
    PortalAppLite,
    ProviderUserID,
    RelayChainID,
    UpdateAcceptAccountUser,
    UpdateAccount,
    UpdateAccountUserRole,
    UpdateChain,
    UpdateFirstDateSurpassed,
    UpdateGigastakeApp,
    UpdatePortalApp,
    UpdateRemoveAccountUser,
    UserID,
    UserPermissions,
)
from portal_db_client.options import AccountOptions, ChainOptions, PortalAppOptions

__all__ = ["DBReader", "DBWriter", "DBClient"]


@runtime_checkable
class DBReader(Protocol):
    """Read-only operations."""

    def get_chain_by_id(self, chain_id: RelayChainID | str) -> Chain | None: ...

    def get_all_chains(self, options: ChainOptions | None = None) -> list[Chain]: ...

    def get_portal_app_by_id(self, portal_app_id: PortalAppID | str) -> PortalApp | None: ...

    def get_all_portal_apps(self, options: PortalAppOptions | None = None) -> list[PortalApp]: ...

    def get_portal_apps_by_user(
        self, user_id: UserID | str, options: PortalAppOptions | None = None
    ) -> list[PortalApp]: ...

    def get_portal_apps_for_middleware(self) -> list[PortalAppLite]: ...

    def get_all_accounts(self, options: AccountOptions | None = None) -> list[Account]: ...

    def get_account_by_id(self, account_id: AccountID | str) -> Account | None: ...

    def get_accounts_by_user(self, user_id: UserID | str) -> list[Account]: ...

    def get_user_permission_by_user_id(
        self, provider_user_id: ProviderUserID | str
    ) -> UserPermissions | None: ...

    def get_portal_user_id_from_provider_user_id(
        self, provider_user_id: ProviderUserID | str
    ) -> UserID: ...

    def get_all_plans(self) -> list[Plan]: ...

    def get_blocked_contracts(self) -> GlobalBlockedContracts: ...

    def close(self) -> None: ...


@runtime_checkable
class DBWriter(Protocol):
    """Create, update and delete operations."""

    def create_chain_and_gigastake_apps(
        self, new_chain_input: NewChainInput
    ) -> NewChainInput | None: ...

    def create_gigastake_app(self, gigastake_app: GigastakeApp) -> GigastakeApp | None: ...

    def update_chain(self, chain_update: UpdateChain) -> Chain | None: ...

    def update_gigastake_app(
        self, update: UpdateGigastakeApp
    ) -> UpdateGigastakeApp | None: ...

    def activate_chain(self, chain_id: RelayChainID | str, active: bool) -> bool: ...

    def create_portal_app(self, portal_app: PortalApp) -> PortalApp | None: ...

    def update_portal_app(self, update: UpdatePortalApp) -> UpdatePortalApp | None: ...

    def delete_portal_app(self, portal_app_id: PortalAppID | str) -> dict[str, str]: ...

    def update_portal_apps_first_date_surpassed(
        self, update: UpdateFirstDateSurpassed
    ) -> dict[str, str]: ...

    def create_account(self, user_id: UserID | str, account: Account) -> Account | None: ...

    def update_account(self, update: UpdateAccount) -> Account | None: ...

    def create_account_integration(
        self, account_id: AccountID | str, integration: AccountIntegrations
    ) -> AccountIntegrations | None: ...

    def update_account_integration(
        self, account_id: AccountID | str, integration: AccountIntegrations
    ) -> AccountIntegrations | None: ...

    def delete_account(self, account_id: AccountID | str) -> dict[str, str]: ...

    def write_account_user(self, access: CreateAccountUserAccess) -> dict[str, UserID]: ...

    def set_account_user_role(self, update: UpdateAccountUserRole) -> dict[str, str]: ...

    def update_accept_account_user(self, accept: UpdateAcceptAccountUser) -> dict[str, str]: ...

    def remove_account_user(self, remove: UpdateRemoveAccountUser) -> dict[str, str]: ...

    def create_user(self, user: CreateUser) -> CreateUserResponse | None: ...

    def delete_user(self, user_id: UserID | str) -> dict[str, str]: ...

    def write_blocked_contract(self, contract: BlockedContract) -> dict[str, str]: ...

    def update_blocked_contract_active(
        self, address: BlockedAddress | str, active: bool
    ) -> dict[str, bool]: ...

    def remove_blocked_contract(self, address: BlockedAddress | str) -> dict[str, str]: ...


@runtime_checkable
class DBClient(DBReader, DBWriter, Protocol):
    """Full read/write handle."""
