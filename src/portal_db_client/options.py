"""Optional query flags accepted by the collection read operations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from portal_db_client.errors import InvalidRoleNameError
from portal_db_client.models import RoleName
from portal_db_client.routes import QueryParam

__all__ = ["ChainOptions", "PortalAppOptions", "AccountOptions"]

Query = list[tuple[QueryParam, str]]

_TRUE = "true"


@dataclass(frozen=True, slots=True)
class ChainOptions:
    exclude_gigastake_apps: bool = False
    include_inactive: bool = False
    include_deleted: bool = False

    def query(self) -> Query:
        params: Query = []
        if self.include_inactive:
            params.append((QueryParam.INCLUDE_INACTIVE, _TRUE))
        if self.exclude_gigastake_apps:
            params.append((QueryParam.EXCLUDE_GIGASTAKE_APPS, _TRUE))
        if self.include_deleted:
            params.append((QueryParam.INCLUDE_DELETED, _TRUE))
        return params


@dataclass(frozen=True, slots=True)
class PortalAppOptions:
    """Filters for portal app listings.

    ``role_name_filters`` only applies to the per-user listing; every entry
    must be a :class:`RoleName` value.
    """

    role_name_filters: Sequence[RoleName | str] = field(default_factory=tuple)
    include_deleted: bool = False

    def role_filter(self) -> str:
        """Comma-joined role names; raises :class:`InvalidRoleNameError` on unknown names."""

        names: list[str] = []
        for role in self.role_name_filters:
            try:
                names.append(RoleName(role).value)
            except ValueError:
                raise InvalidRoleNameError(role) from None
        return ",".join(names)

    def query(self, *, with_role_filters: bool = False) -> Query:
        params: Query = []
        if with_role_filters and self.role_name_filters:
            params.append((QueryParam.ROLE_NAME_FILTERS, self.role_filter()))
        if self.include_deleted:
            params.append((QueryParam.INCLUDE_DELETED, _TRUE))
        return params


@dataclass(frozen=True, slots=True)
class AccountOptions:
    include_deleted: bool = False

    def query(self) -> Query:
        if self.include_deleted:
            return [(QueryParam.INCLUDE_DELETED, _TRUE)]
        return []
