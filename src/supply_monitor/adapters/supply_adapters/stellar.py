from __future__ import annotations

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from ...units import parse_decimal_amount
from .base import BaseSupplyAdapter


class StellarSupplyAdapter(BaseSupplyAdapter):
    """Horizon ``/assets`` lookup by code and issuer.

    ``balances.authorized`` is a decimal string already in token units.
    """

    @property
    def chain_type(self) -> ChainType:
        return ChainType.STELLAR

    async def fetch_supply(self, config: ChainConfig) -> float:
        body = await self.http.get_json(
            f"{config.rpc_url.rstrip('/')}/assets",
            params={
                "asset_code": config.token,
                "asset_issuer": config.contract_address,
                "limit": 1,
            },
            chain_id=config.id,
        )
        record = self._dig(body, "_embedded", "records", 0)
        if not isinstance(record, dict):
            raise DecodeError("No Stellar asset data found", chain_id=config.id)
        try:
            return parse_decimal_amount(
                self._dig(record, "balances", "authorized"), "balances.authorized"
            )
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
