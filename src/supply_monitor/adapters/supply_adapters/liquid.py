from __future__ import annotations

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from ...units import parse_integer, scale
from .base import BaseSupplyAdapter


class LiquidSupplyAdapter(BaseSupplyAdapter):
    """Issued asset supply from an Esplora-compatible Liquid API.

    Burned amounts are subtracted from the issued amount.
    """

    @property
    def chain_type(self) -> ChainType:
        return ChainType.LIQUID

    async def fetch_supply(self, config: ChainConfig) -> float:
        url = f"{config.rpc_url.rstrip('/')}/asset/{config.contract_address}"
        body = await self.http.get_json(url, chain_id=config.id)
        stats = self._dig(body, "chain_stats")
        if not isinstance(stats, dict):
            raise DecodeError("No Liquid asset data found", chain_id=config.id)
        try:
            issued = parse_integer(stats.get("issued_amount"), "issued_amount")
            burned = parse_integer(stats.get("burned_amount", 0), "burned_amount")
            if burned > issued:
                raise DecodeError(
                    f"Burned amount {burned} exceeds issued amount {issued}"
                )
            return scale(issued - burned, config.decimals)
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
