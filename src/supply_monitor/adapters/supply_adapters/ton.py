from __future__ import annotations

from ...domain import ChainConfig, ChainType
from .base import BaseSupplyAdapter


class TonSupplyAdapter(BaseSupplyAdapter):
    """Jetton master supply from the TON API REST endpoint."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.TON

    async def fetch_supply(self, config: ChainConfig) -> float:
        url = f"{config.rpc_url.rstrip('/')}/v2/jettons/{config.contract_address}"
        body = await self.http.get_json(url, chain_id=config.id)
        return self._scaled(config, self._dig(body, "total_supply"), "total_supply")
