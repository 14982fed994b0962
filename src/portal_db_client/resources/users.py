"""User lookups and user lifecycle operations."""

from __future__ import annotations

from portal_db_client.models import (
    CreateUser,
    CreateUserResponse,
    ProviderUserID,
    UserID,
    UserPermissions,
)
from portal_db_client.resources.base import ResourceClientBase, require
from portal_db_client.routes import BasePath, SubPath

__all__ = ["UserReadMixin", "UserWriteMixin"]


class UserReadMixin(ResourceClientBase):
    def get_user_permission_by_user_id(
        self, provider_user_id: ProviderUserID | str
    ) -> UserPermissions | None:
        """Portal app permissions of the user behind an auth provider ID."""

        require(("user ID", provider_user_id))
        endpoint = self._endpoint(BasePath.USER, provider_user_id, SubPath.PERMISSION)
        return self._get(endpoint, UserPermissions | None)

    def get_portal_user_id_from_provider_user_id(
        self, provider_user_id: ProviderUserID | str
    ) -> UserID:
        require(("user ID", provider_user_id))
        return self._get(self._endpoint(BasePath.USER, provider_user_id), UserID)


class UserWriteMixin(ResourceClientBase):
    def create_user(self, user: CreateUser) -> CreateUserResponse | None:
        require(("email", user.email))
        body = self._encode(user, "user")
        return self._post(self._endpoint(BasePath.USER), body, CreateUserResponse | None)

    def delete_user(self, user_id: UserID | str) -> dict[str, str]:
        require(("user ID", user_id))
        return self._delete(self._endpoint(BasePath.USER, user_id), dict[str, str])
