from __future__ import annotations

import logging

from ...addresses import tron_base58_to_hex
from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from .evm import EvmSupplyAdapter

logger = logging.getLogger(__name__)


class TronSupplyAdapter(EvmSupplyAdapter):
    """Tron's JSON-RPC is ``eth_call`` compatible once the address is hex."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.TRON

    def _call_target(self, config: ChainConfig) -> str:
        try:
            target = tron_base58_to_hex(config.contract_address)
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
        logger.debug("%s transcoded %s -> %s", config.id, config.contract_address, target)
        return target
