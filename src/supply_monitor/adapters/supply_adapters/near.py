from __future__ import annotations

import json
import logging

from ...constants import NEAR_EMPTY_ARGS_BASE64, NEAR_FT_TOTAL_SUPPLY_METHOD
from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


def decode_view_result(raw_bytes: object) -> object:
    """Decode a NEAR ``call_function`` result.

    The RPC returns the contract's JSON return value as a list of byte
    values, so ``ft_total_supply`` arrives as bytes of ``"123..."`` (a JSON
    string literal) and needs bytes -> text -> JSON.
    """
    if not isinstance(raw_bytes, list) or not all(
        isinstance(b, int) and 0 <= b <= 255 for b in raw_bytes
    ):
        raise DecodeError(f"NEAR result is not a byte array: {raw_bytes!r}")
    try:
        text = bytes(raw_bytes).decode("utf-8")
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(f"NEAR result is not valid JSON: {exc}") from exc


class NearSupplyAdapter(BaseSupplyAdapter):
    """NEP-141 ``ft_total_supply`` view call."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.NEAR

    async def fetch_supply(self, config: ChainConfig) -> float:
        result = await self.http.json_rpc(
            config.rpc_url,
            "query",
            {
                "request_type": "call_function",
                "finality": "final",
                "account_id": config.contract_address,
                "method_name": NEAR_FT_TOTAL_SUPPLY_METHOD,
                "args_base64": NEAR_EMPTY_ARGS_BASE64,
            },
            chain_id=config.id,
        )
        try:
            supply = decode_view_result(self._dig(result, "result"))
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
        if not isinstance(supply, str):
            raise DecodeError(
                f"NEAR ft_total_supply returned {supply!r}, expected a string",
                chain_id=config.id,
            )
        return self._scaled(config, supply, "ft_total_supply")
