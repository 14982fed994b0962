"""Account, account integration and account user operations."""

from __future__ import annotations

from portal_db_client.models import (
    Account,
    AccountID,
    AccountIntegrations,
    CreateAccountUserAccess,
    UpdateAcceptAccountUser,
    UpdateAccount,
    UpdateAccountUserRole,
    UpdateRemoveAccountUser,
    UserID,
)
from portal_db_client.options import AccountOptions
from portal_db_client.resources.base import ResourceClientBase, require
from portal_db_client.routes import BasePath, SubPath

__all__ = ["AccountReadMixin", "AccountWriteMixin"]


class AccountReadMixin(ResourceClientBase):
    def get_all_accounts(self, options: AccountOptions | None = None) -> list[Account]:
        query = (options or AccountOptions()).query()
        return self._get(self._endpoint(BasePath.ACCOUNT, query=query), list[Account])

    def get_account_by_id(self, account_id: AccountID | str) -> Account | None:
        require(("account ID", account_id))
        return self._get(self._endpoint(BasePath.ACCOUNT, account_id), Account | None)

    def get_accounts_by_user(self, user_id: UserID | str) -> list[Account]:
        require(("user ID", user_id))
        return self._get(self._endpoint(BasePath.USER, user_id, BasePath.ACCOUNT), list[Account])


class AccountWriteMixin(ResourceClientBase):
    def create_account(self, user_id: UserID | str, account: Account) -> Account | None:
        """POST ``/v2/user/{id}/account``; the account must carry a plan type."""

        require(("user ID", user_id), ("plan type set", account.plan_type))
        body = self._encode(account, "account")
        endpoint = self._endpoint(BasePath.USER, user_id, BasePath.ACCOUNT)
        return self._post(endpoint, body, Account | None)

    def update_account(self, update: UpdateAccount) -> Account | None:
        require(("account ID", update.account_id))
        body = self._encode(update, "account")
        return self._put(self._endpoint(BasePath.ACCOUNT, update.account_id), body, Account | None)

    def create_account_integration(
        self, account_id: AccountID | str, integration: AccountIntegrations
    ) -> AccountIntegrations | None:
        require(("account ID", account_id))
        body = self._encode(integration, "account integration")
        endpoint = self._endpoint(BasePath.ACCOUNT, account_id, SubPath.INTEGRATION)
        return self._post(endpoint, body, AccountIntegrations | None)

    def update_account_integration(
        self, account_id: AccountID | str, integration: AccountIntegrations
    ) -> AccountIntegrations | None:
        require(("account ID", account_id))
        body = self._encode(integration, "account integration")
        endpoint = self._endpoint(BasePath.ACCOUNT, account_id, SubPath.INTEGRATION)
        return self._put(endpoint, body, AccountIntegrations | None)

    def delete_account(self, account_id: AccountID | str) -> dict[str, str]:
        require(("account ID", account_id))
        return self._delete(self._endpoint(BasePath.ACCOUNT, account_id), dict[str, str])

    # -- account users ---------------------------------------------------

    def write_account_user(self, access: CreateAccountUserAccess) -> dict[str, UserID]:
        require(
            ("account ID", access.account_id),
            ("portal app ID", access.portal_app_id),
            ("email", access.email),
            ("role name", access.role_name),
        )
        body = self._encode(access, "createUser")
        endpoint = self._endpoint(BasePath.ACCOUNT, BasePath.USER)
        return self._post(endpoint, body, dict[str, UserID])

    def set_account_user_role(self, update: UpdateAccountUserRole) -> dict[str, str]:
        require(
            ("portal app ID", update.portal_app_id),
            ("user ID", update.user_id),
            ("account ID", update.account_id),
            ("role name", update.role_name),
        )
        body = self._encode(update, "updateUser")
        endpoint = self._endpoint(BasePath.ACCOUNT, BasePath.USER, SubPath.UPDATE_ROLE)
        return self._put(endpoint, body, dict[str, str])

    def update_accept_account_user(self, accept: UpdateAcceptAccountUser) -> dict[str, str]:
        require(
            ("portal app ID", accept.portal_app_id),
            ("user ID", accept.user_id),
            ("auth provider type", accept.auth_provider_type),
            ("provider user ID", accept.provider_user_id),
        )
        body = self._encode(accept, "acceptUser")
        endpoint = self._endpoint(BasePath.ACCOUNT, BasePath.USER, SubPath.ACCEPT)
        return self._put(endpoint, body, dict[str, str])

    def remove_account_user(self, remove: UpdateRemoveAccountUser) -> dict[str, str]:
        require(
            ("portal app ID", remove.portal_app_id),
            ("user ID", remove.user_id),
            ("account ID", remove.account_id),
        )
        body = self._encode(remove, "removeUser")
        endpoint = self._endpoint(BasePath.ACCOUNT, BasePath.USER, SubPath.REMOVE)
        return self._put(endpoint, body, dict[str, str])
