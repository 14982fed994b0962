"""Portal application operations."""

from __future__ import annotations

from portal_db_client.models import (
    PortalApp,
    PortalAppID,
    PortalAppLite,
    UpdateFirstDateSurpassed,
    UpdatePortalApp,
    UserID,
)
from portal_db_client.options import PortalAppOptions
from portal_db_client.resources.base import ResourceClientBase, require
from portal_db_client.routes import BasePath, SubPath

__all__ = ["PortalAppReadMixin", "PortalAppWriteMixin"]


class PortalAppReadMixin(ResourceClientBase):
    def get_portal_app_by_id(self, portal_app_id: PortalAppID | str) -> PortalApp | None:
        require(("portal app ID", portal_app_id))
        return self._get(self._endpoint(BasePath.PORTAL_APP, portal_app_id), PortalApp | None)

    def get_all_portal_apps(self, options: PortalAppOptions | None = None) -> list[PortalApp]:
        """GET ``/v2/portal_app``. Role filters are ignored on this listing."""

        query = (options or PortalAppOptions()).query()
        return self._get(self._endpoint(BasePath.PORTAL_APP, query=query), list[PortalApp])

    def get_portal_apps_by_user(
        self,
        user_id: UserID | str,
        options: PortalAppOptions | None = None,
    ) -> list[PortalApp]:
        """GET ``/v2/user/{id}/portal_app``, optionally filtered by the user's role."""

        require(("user ID", user_id))
        query = (options or PortalAppOptions()).query(with_role_filters=True)
        endpoint = self._endpoint(BasePath.USER, user_id, BasePath.PORTAL_APP, query=query)
        return self._get(endpoint, list[PortalApp])

    def get_portal_apps_for_middleware(self) -> list[PortalAppLite]:
        endpoint = self._endpoint(BasePath.MIDDLEWARE, BasePath.PORTAL_APP)
        return self._get(endpoint, list[PortalAppLite])


class PortalAppWriteMixin(ResourceClientBase):
    def create_portal_app(self, portal_app: PortalApp) -> PortalApp | None:
        body = self._encode(portal_app, "portal app")
        return self._post(self._endpoint(BasePath.PORTAL_APP), body, PortalApp | None)

    def update_portal_app(self, update: UpdatePortalApp) -> UpdatePortalApp | None:
        require(("portal app ID", update.app_id))
        body = self._encode(update, "portal app")
        endpoint = self._endpoint(BasePath.PORTAL_APP, update.app_id)
        return self._put(endpoint, body, UpdatePortalApp | None)

    def delete_portal_app(self, portal_app_id: PortalAppID | str) -> dict[str, str]:
        require(("portal app ID", portal_app_id))
        return self._delete(self._endpoint(BasePath.PORTAL_APP, portal_app_id), dict[str, str])

    def update_portal_apps_first_date_surpassed(
        self, update: UpdateFirstDateSurpassed
    ) -> dict[str, str]:
        body = self._encode(update, "first date surpassed update")
        endpoint = self._endpoint(BasePath.PORTAL_APP, SubPath.FIRST_DATE_SURPASSED)
        return self._post(endpoint, body, dict[str, str])
