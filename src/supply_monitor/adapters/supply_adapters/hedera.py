from __future__ import annotations

import logging

from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from ...units import parse_integer, scale
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


class HederaSupplyAdapter(BaseSupplyAdapter):
    """HTS token supply from the mirror node.

    The token's own ``decimals`` in the response wins over the configured value.
    """

    @property
    def chain_type(self) -> ChainType:
        return ChainType.HEDERA

    async def fetch_supply(self, config: ChainConfig) -> float:
        url = f"{config.rpc_url.rstrip('/')}/api/v1/tokens/{config.contract_address}"
        body = await self.http.get_json(url, chain_id=config.id)
        if not isinstance(body, dict) or not body.get("total_supply"):
            raise DecodeError("No Hedera token data found", chain_id=config.id)

        decimals = config.decimals
        response_decimals = body.get("decimals")
        if response_decimals not in (None, ""):
            try:
                decimals = parse_integer(response_decimals, "decimals")
            except DecodeError:
                logger.warning(
                    "%s: ignoring malformed decimals %r in mirror node response",
                    config.id,
                    response_decimals,
                )
            else:
                if decimals != config.decimals:
                    logger.debug(
                        "%s: mirror node decimals %d override configured %d",
                        config.id,
                        decimals,
                        config.decimals,
                    )

        try:
            return scale(parse_integer(body["total_supply"], "total_supply"), decimals)
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
