from __future__ import annotations

import logging

from ...clients.http import HttpClient
from ...constants import STARKNET_TOTAL_SUPPLY_KEYS, U128_MASK
from ...domain import ChainConfig, ChainType
from ...errors import ConfigurationError, DecodeError
from ...units import parse_hex_integer, scale
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


class StarknetSupplyAdapter(BaseSupplyAdapter):
    """Raw ``starknet_getStorageAt`` read of the ERC-20 total supply slot.

    Only the low u128 limb is read; the high limb is zero for any
    realistic supply.
    """

    def __init__(self, http: HttpClient, storage_keys: dict[str, str] | None = None):
        super().__init__(http)
        self.storage_keys = {
            address.lower(): key
            for address, key in (storage_keys or STARKNET_TOTAL_SUPPLY_KEYS).items()
        }

    @property
    def chain_type(self) -> ChainType:
        return ChainType.STARKNET

    def storage_key_for(self, config: ChainConfig) -> str:
        key = self.storage_keys.get(config.contract_address.lower())
        if key is None:
            raise ConfigurationError(
                f"Unknown Starknet token contract {config.contract_address}",
                chain_id=config.id,
            )
        return key

    async def fetch_supply(self, config: ChainConfig) -> float:
        key = self.storage_key_for(config)
        result = await self.http.json_rpc(
            config.rpc_url,
            "starknet_getStorageAt",
            {
                "contract_address": config.contract_address,
                "key": key,
                "block_id": "latest",
            },
            chain_id=config.id,
        )
        try:
            low = parse_hex_integer(result, "result") & U128_MASK
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
        logger.debug("%s total_supply.low = %d", config.id, low)
        return scale(low, config.decimals)
