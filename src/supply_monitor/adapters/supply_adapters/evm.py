from __future__ import annotations

import logging

from web3 import Web3

from ...constants import TOTAL_SUPPLY_SELECTOR
from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from ...units import parse_hex_integer, scale
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


class EvmSupplyAdapter(BaseSupplyAdapter):
    """Reads ERC-20 ``totalSupply()`` with a raw ``eth_call``."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.EVM

    def _call_target(self, config: ChainConfig) -> str:
        try:
            return Web3.to_checksum_address(config.contract_address)
        except ValueError:
            return config.contract_address.lower()

    async def call_total_supply(self, config: ChainConfig, to: str) -> int:
        result = await self.http.json_rpc(
            config.rpc_url,
            "eth_call",
            [{"to": to, "data": TOTAL_SUPPLY_SELECTOR}, "latest"],
            chain_id=config.id,
        )
        try:
            return parse_hex_integer(result, "result")
        except DecodeError as exc:
            exc.chain_id = config.id
            raise

    async def fetch_supply(self, config: ChainConfig) -> float:
        raw = await self.call_total_supply(config, self._call_target(config))
        logger.debug("%s raw totalSupply: %d", config.id, raw)
        return scale(raw, config.decimals)
