from __future__ import annotations

import logging

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from ...units import parse_decimal_amount, parse_integer, scale
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


class SolanaSupplyAdapter(BaseSupplyAdapter):
    """SPL token supply via ``getTokenSupply``.

    ``uiAmount`` is already scaled by the mint's decimals, so the configured
    decimals are never applied on top of it.
    """

    @property
    def chain_type(self) -> ChainType:
        return ChainType.SOLANA

    async def fetch_supply(self, config: ChainConfig) -> float:
        result = await self.http.json_rpc(
            config.rpc_url,
            "getTokenSupply",
            [config.contract_address],
            chain_id=config.id,
        )
        value = self._dig(result, "value")
        if not isinstance(value, dict):
            raise DecodeError("No Solana token supply value", chain_id=config.id)

        try:
            ui_amount = value.get("uiAmount")
            if ui_amount is not None:
                return parse_decimal_amount(ui_amount, "uiAmount")
            # uiAmount is null when it would not fit a double; use the raw amount
            raw = parse_integer(value.get("amount"), "amount")
            decimals = parse_integer(value.get("decimals"), "decimals")
            logger.debug("%s uiAmount missing, scaling raw amount %d", config.id, raw)
            return scale(raw, decimals)
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
