from __future__ import annotations

import logging

from ...clients.http import HttpClient
from ...constants import ALGORAND_USDC_RESERVE, MAX_UINT64
from ...domain import ChainConfig, ChainType
from ...errors import ConfigurationError, DecodeError
from ...units import parse_integer, scale
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


class AlgorandSupplyAdapter(BaseSupplyAdapter):
    """Circulating ASA supply inferred from the issuer's reserve account.

    The asset is minted with total = MAX_UINT64 into the reserve, so
    circulating supply is MAX_UINT64 minus the reserve's holding.
    """

    def __init__(self, http: HttpClient, reserve_account: str = ALGORAND_USDC_RESERVE):
        super().__init__(http)
        self.reserve_account = reserve_account

    @property
    def chain_type(self) -> ChainType:
        return ChainType.ALGORAND

    async def fetch_supply(self, config: ChainConfig) -> float:
        try:
            asset_id = int(config.contract_address)
        except ValueError as exc:
            raise ConfigurationError(
                f"Algorand asset id must be an integer, got {config.contract_address!r}",
                chain_id=config.id,
            ) from exc

        url = f"{config.rpc_url.rstrip('/')}/v2/accounts/{self.reserve_account}"
        body = await self.http.get_json(url, chain_id=config.id)
        account = self._dig(body, "account")
        if not isinstance(account, dict):
            raise DecodeError("No Algorand account data found", chain_id=config.id)

        holding = next(
            (
                asset
                for asset in account.get("assets") or []
                if isinstance(asset, dict) and asset.get("asset-id") == asset_id
            ),
            None,
        )
        if holding is None:
            raise DecodeError(
                f"Reserve account has no holding of asset {asset_id}",
                chain_id=config.id,
            )

        try:
            reserve_balance = parse_integer(holding.get("amount"), "amount")
            if reserve_balance > MAX_UINT64:
                raise DecodeError(f"Reserve balance {reserve_balance} exceeds uint64")
            circulating = MAX_UINT64 - reserve_balance
            logger.debug(
                "%s reserve balance %d, circulating %d",
                config.id,
                reserve_balance,
                circulating,
            )
            return scale(circulating, config.decimals)
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
