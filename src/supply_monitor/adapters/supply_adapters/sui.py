from __future__ import annotations

from ...domain import ChainConfig, ChainType
from .base import BaseSupplyAdapter


class SuiSupplyAdapter(BaseSupplyAdapter):
    @property
    def chain_type(self) -> ChainType:
        return ChainType.SUI

    async def fetch_supply(self, config: ChainConfig) -> float:
        result = await self.http.json_rpc(
            config.rpc_url,
            "suix_getTotalSupply",
            [config.contract_address],
            chain_id=config.id,
        )
        return self._scaled(config, self._dig(result, "value"), "result.value")
