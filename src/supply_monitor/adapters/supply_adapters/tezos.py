from __future__ import annotations

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from .base import BaseSupplyAdapter


class TezosSupplyAdapter(BaseSupplyAdapter):
    """FA2 token supply from the TzKT indexer (token id 0)."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.TEZOS

    async def fetch_supply(self, config: ChainConfig) -> float:
        body = await self.http.get_json(
            f"{config.rpc_url.rstrip('/')}/v1/tokens",
            params={"contract": config.contract_address, "tokenId": 0, "limit": 1},
            chain_id=config.id,
        )
        if not isinstance(body, list) or not body:
            raise DecodeError("No Tezos token data found", chain_id=config.id)
        total_supply = self._dig(body, 0, "totalSupply")
        if not total_supply:
            raise DecodeError("No totalSupply in Tezos token", chain_id=config.id)
        return self._scaled(config, total_supply, "totalSupply")
