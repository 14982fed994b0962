"""Blockchain and Gigastake app operations."""

from __future__ import annotations

from portal_db_client.models import (
    Chain,
    GigastakeApp,
    NewChainInput,
    RelayChainID,
    UpdateChain,
    UpdateGigastakeApp,
)
from portal_db_client.options import ChainOptions
from portal_db_client.resources.base import ResourceClientBase, require
from portal_db_client.routes import BasePath, SubPath

__all__ = ["ChainReadMixin", "ChainWriteMixin"]


class ChainReadMixin(ResourceClientBase):
    def get_chain_by_id(self, chain_id: RelayChainID | str) -> Chain | None:
        """GET ``/v2/chain/{id}``."""

        require(("chain ID", chain_id))
        return self._get(self._endpoint(BasePath.CHAIN, chain_id), Chain | None)

    def get_all_chains(self, options: ChainOptions | None = None) -> list[Chain]:
        """GET ``/v2/chain``, honouring the inactive/deleted/gigastake flags."""

        query = (options or ChainOptions()).query()
        return self._get(self._endpoint(BasePath.CHAIN, query=query), list[Chain])


class ChainWriteMixin(ResourceClientBase):
    def create_chain_and_gigastake_apps(
        self, new_chain_input: NewChainInput
    ) -> NewChainInput | None:
        body = self._encode(new_chain_input, "chain")
        return self._post(self._endpoint(BasePath.CHAIN), body, NewChainInput | None)

    def create_gigastake_app(self, gigastake_app: GigastakeApp) -> GigastakeApp | None:
        body = self._encode(gigastake_app, "gigastake app")
        endpoint = self._endpoint(BasePath.CHAIN, SubPath.GIGASTAKE)
        return self._post(endpoint, body, GigastakeApp | None)

    def update_chain(self, chain_update: UpdateChain) -> Chain | None:
        require(("chain ID", chain_update.id))
        body = self._encode(chain_update, "chain")
        return self._put(self._endpoint(BasePath.CHAIN, chain_update.id), body, Chain | None)

    def update_gigastake_app(self, update: UpdateGigastakeApp) -> UpdateGigastakeApp | None:
        body = self._encode(update, "gigastake app")
        return self._put(
            self._endpoint(BasePath.CHAIN, SubPath.GIGASTAKE), body, UpdateGigastakeApp | None
        )

    def activate_chain(self, chain_id: RelayChainID | str, active: bool) -> bool:
        """PUT ``/v2/chain/{id}/activate`` with a bare JSON boolean body."""

        require(("chain ID", chain_id))
        body = self._encode(bool(active), "active status")
        return self._put(self._endpoint(BasePath.CHAIN, chain_id, SubPath.ACTIVATE), body, bool)
