"""Global blocked contract list operations."""

from __future__ import annotations

from portal_db_client.models import BlockedAddress, BlockedContract, GlobalBlockedContracts
from portal_db_client.resources.base import ResourceClientBase, require
from portal_db_client.routes import BasePath, SubPath

__all__ = ["BlockedContractReadMixin", "BlockedContractWriteMixin"]


class BlockedContractReadMixin(ResourceClientBase):
    def get_blocked_contracts(self) -> GlobalBlockedContracts:
        return self._get(self._endpoint(BasePath.BLOCKED_CONTRACT), GlobalBlockedContracts)


class BlockedContractWriteMixin(ResourceClientBase):
    def write_blocked_contract(self, contract: BlockedContract) -> dict[str, str]:
        body = self._encode(contract, "blocked contract")
        return self._post(self._endpoint(BasePath.BLOCKED_CONTRACT), body, dict[str, str])

    def update_blocked_contract_active(
        self, address: BlockedAddress | str, active: bool
    ) -> dict[str, bool]:
        """PUT ``{"active": <bool>}`` to ``/v2/blocked_contract/{address}/active``."""

        require(("blocked address provided", address))
        body = self._encode({"active": bool(active)}, "application")
        endpoint = self._endpoint(BasePath.BLOCKED_CONTRACT, address, SubPath.ACTIVE)
        return self._put(endpoint, body, dict[str, bool])

    def remove_blocked_contract(self, address: BlockedAddress | str) -> dict[str, str]:
        require(("blocked address provided", address))
        return self._delete(self._endpoint(BasePath.BLOCKED_CONTRACT, address), dict[str, str])
