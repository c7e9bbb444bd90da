"""Error taxonomy for chain supply lookups."""

from __future__ import annotations


class SupplyError(Exception):
    """Base class for failures while fetching a chain's supply.

    Every subclass carries the originating chain so the orchestrator can
    attribute the failure without inspecting the message.
    """

    def __init__(self, message: str, chain_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.chain_id = chain_id

    def __str__(self) -> str:
        return self.message


class DecodeError(SupplyError):
    """Raised when a response carries malformed or out-of-range numeric/address data."""


class ConfigurationError(SupplyError):
    """Raised for an unmapped chain type or a missing adapter-specific lookup."""


class TransportError(SupplyError):
    """Raised on network failure, timeout, non-success status or RPC error object."""

    def __init__(
        self,
        message: str,
        chain_id: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, chain_id=chain_id)
        self.status_code = status_code


class ResolutionError(SupplyError):
    """Raised when Aptos metadata resolution exhausts all candidate strategies."""
