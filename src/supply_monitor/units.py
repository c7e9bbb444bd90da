from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any

from web3 import Web3

from .errors import DecodeError


def scale(raw: int | None, decimals: int) -> float:
    """Scale a raw on-chain integer by ``10**decimals``.

    Args:
        raw: Unscaled integer amount, arbitrary precision.
        decimals: Non-negative decimal exponent of the token.

    Returns:
        ``raw / 10**decimals`` as a float.

    Raises:
        DecodeError: If ``raw`` is absent, not an integer or negative.

    Notes:
        - The division is done on exact rationals and rounded once, so
          values far above 2**53 keep full float precision.
    """
    if raw is None:
        raise DecodeError("Missing raw supply value")
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise DecodeError(f"Raw supply must be an integer, got {raw!r}")
    if raw < 0:
        raise DecodeError(f"Raw supply must be non-negative, got {raw}")
    if decimals < 0:
        raise DecodeError(f"Decimals must be non-negative, got {decimals}")
    if decimals == 0:
        return float(raw)
    return float(Fraction(raw, 10**decimals))


def parse_integer(value: Any, field: str) -> int:
    """Parse a decimal (or ``0x`` hex) integer field from a response payload."""
    if value is None:
        raise DecodeError(f"Missing field '{field}'")
    if isinstance(value, bool):
        raise DecodeError(f"Field '{field}' is not an integer: {value!r}")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return parse_hex_integer(text, field)
        if not (text.isascii() and text.isdigit()):
            raise DecodeError(f"Field '{field}' is not an integer: {value!r}")
        result = int(text)
    else:
        raise DecodeError(f"Field '{field}' is not an integer: {value!r}")

    if result < 0:
        raise DecodeError(f"Field '{field}' must be non-negative, got {result}")
    return result


def parse_hex_integer(value: Any, field: str) -> int:
    """Parse a ``0x``-prefixed JSON-RPC quantity or ABI word.

    An empty ``0x`` result (no return data) decodes as zero.
    """
    if value is None:
        raise DecodeError(f"Missing field '{field}'")
    if not isinstance(value, str) or not value.lower().startswith("0x"):
        raise DecodeError(f"Field '{field}' is not a hex string: {value!r}")
    if value.lower() == "0x":
        return 0
    try:
        return Web3.to_int(hexstr=value)
    except ValueError as exc:
        raise DecodeError(f"Field '{field}' is not a hex string: {value!r}") from exc


def parse_decimal_amount(value: Any, field: str) -> float:
    """Parse an already-scaled decimal amount (e.g. ``"1234.5670000"``)."""
    if value is None:
        raise DecodeError(f"Missing field '{field}'")
    if isinstance(value, bool):
        raise DecodeError(f"Field '{field}' is not a number: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise DecodeError(f"Field '{field}' is not a number: {value!r}") from exc
    if not amount.is_finite():
        raise DecodeError(f"Field '{field}' is not finite: {value!r}")
    if amount < 0:
        raise DecodeError(f"Field '{field}' must be non-negative, got {value}")
    result = float(amount)
    if not math.isfinite(result):
        raise DecodeError(f"Field '{field}' overflows a float: {value!r}")
    return result
