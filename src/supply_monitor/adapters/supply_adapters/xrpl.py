from __future__ import annotations

import logging

from web3 import Web3

from ...constants import XRPL_CURRENCY_CODE_BYTES
from ...domain import ChainConfig, ChainType
from ...errors import DecodeError, TransportError
from ...units import parse_decimal_amount
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


def currency_hex_code(code: str) -> str:
    """Encode a currency code as XRPL's 160-bit hex form.

    Codes longer than three characters are stored as ASCII right-padded
    with zero bytes, e.g. ``USDC`` -> ``5553444300...00``.
    """
    encoded = Web3.to_hex(text=code.upper())[2:].upper()
    if len(encoded) > XRPL_CURRENCY_CODE_BYTES * 2:
        raise DecodeError(f"Currency code too long: {code!r}")
    return encoded.ljust(XRPL_CURRENCY_CODE_BYTES * 2, "0")


class XrplSupplyAdapter(BaseSupplyAdapter):
    """Issued token obligations from ``gateway_balances`` on the issuer."""

    @property
    def chain_type(self) -> ChainType:
        return ChainType.XRPL

    async def fetch_supply(self, config: ChainConfig) -> float:
        body = await self.http.post_json(
            config.rpc_url,
            {
                "method": "gateway_balances",
                "params": [
                    {
                        "account": config.contract_address,
                        "hotwallet": [],
                        "ledger_index": "validated",
                    }
                ],
            },
            chain_id=config.id,
        )
        result = self._dig(body, "result")
        if not isinstance(result, dict):
            raise DecodeError("No XRPL result in response", chain_id=config.id)
        if result.get("error"):
            raise TransportError(
                result.get("error_message") or str(result["error"]),
                chain_id=config.id,
            )

        obligations = result.get("obligations")
        if not isinstance(obligations, dict):
            raise DecodeError("No XRPL obligations data", chain_id=config.id)

        hex_code = currency_hex_code(config.token)
        amount = obligations.get(hex_code) or obligations.get(config.token.upper())
        if not amount:
            raise DecodeError(
                f"No {config.token} obligations found on XRPL", chain_id=config.id
            )
        try:
            return parse_decimal_amount(amount, f"obligations.{config.token}")
        except DecodeError as exc:
            exc.chain_id = config.id
            raise
