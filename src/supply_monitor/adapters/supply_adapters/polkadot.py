from __future__ import annotations

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from .base import BaseSupplyAdapter


class PolkadotSupplyAdapter(BaseSupplyAdapter):
    """``Assets`` pallet storage read through a Substrate API Sidecar."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.POLKADOT

    async def fetch_supply(self, config: ChainConfig) -> float:
        body = await self.http.get_json(
            f"{config.rpc_url.rstrip('/')}/pallets/assets/storage/Asset",
            params={"keys[]": config.contract_address},
            chain_id=config.id,
        )
        supply = self._dig(body, "value", "supply")
        if supply is None:
            raise DecodeError("No Polkadot asset supply data", chain_id=config.id)
        return self._scaled(config, supply, "value.supply")
