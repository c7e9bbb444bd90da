from __future__ import annotations

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from .base import BaseSupplyAdapter


class NobleSupplyAdapter(BaseSupplyAdapter):
    """Cosmos SDK bank module ``supply/by_denom`` over LCD REST."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.NOBLE

    async def fetch_supply(self, config: ChainConfig) -> float:
        body = await self.http.get_json(
            f"{config.rpc_url.rstrip('/')}/cosmos/bank/v1beta1/supply/by_denom",
            params={"denom": config.contract_address},
            chain_id=config.id,
        )
        amount = self._dig(body, "amount", "amount")
        if amount is None:
            raise DecodeError("No Noble supply data found", chain_id=config.id)
        return self._scaled(config, amount, "amount.amount")
