"""Chain-native address transcoding."""

from __future__ import annotations

from .constants import BASE58_ALPHABET
from .errors import DecodeError

_BASE58_INDEX: dict[str, int] = {char: i for i, char in enumerate(BASE58_ALPHABET)}

# 4-byte checksum suffix, 1-byte network prefix (0x41 on Tron mainnet)
_CHECKSUM_HEX_CHARS = 8
_PREFIX_HEX_CHARS = 2


def base58_to_int(value: str) -> int:
    """Accumulate a base58 string into a single big integer."""
    num = 0
    for char in value:
        idx = _BASE58_INDEX.get(char)
        if idx is None:
            raise DecodeError(f"Invalid base58 character: {char!r}")
        num = num * 58 + idx
    return num


def tron_base58_to_hex(address: str) -> str:
    """Convert a base58-check Tron address to the ``0x`` hex form used by ``eth_call``.

    The checksum is stripped, not verified.

    Args:
        address: Base58-check encoded address, e.g. ``TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t``

    Returns:
        ``0x`` followed by the 20-byte account as 40 lowercase hex characters.

    Raises:
        DecodeError: On any character outside the base58 alphabet or an
            address too short to hold a prefix and checksum.
    """
    if not address:
        raise DecodeError("Empty Tron address")

    hex_str = format(base58_to_int(address), "x")
    if len(hex_str) % 2:
        hex_str = "0" + hex_str

    if len(hex_str) <= _CHECKSUM_HEX_CHARS + _PREFIX_HEX_CHARS:
        raise DecodeError(f"Tron address too short: {address!r}")

    without_checksum = hex_str[:-_CHECKSUM_HEX_CHARS]
    return "0x" + without_checksum[_PREFIX_HEX_CHARS:]
