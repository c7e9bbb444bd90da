from __future__ import annotations

from abc import ABC, abstractmethod

from ...clients.http import HttpClient
from ...domain import ChainConfig, ChainType
from ...errors import DecodeError
from ...units import parse_integer, scale


class BaseSupplyAdapter(ABC):
    """Abstract base class for per-chain-family supply adapters."""

    def __init__(self, http: HttpClient):
        """Initialize the adapter with a shared HTTP client.

        Args:
            http: Transport used for every network call of this adapter
        """
        self.http = http

    @property
    @abstractmethod
    def chain_type(self) -> ChainType:
        """Return the chain type this adapter services."""
        ...

    @property
    def adapter_name(self) -> str:
        return self.chain_type.value

    @abstractmethod
    async def fetch_supply(self, config: ChainConfig) -> float:
        """Fetch the unit-adjusted total supply for the given chain config."""
        ...

    def _scaled(self, config: ChainConfig, value: object, field: str) -> float:
        """Parse an integer field and scale it by the configured decimals."""
        try:
            return scale(parse_integer(value, field), config.decimals)
        except DecodeError as exc:
            exc.chain_id = config.id
            raise

    @staticmethod
    def _dig(payload: object, *path: str | int) -> object:
        """Walk nested dicts/lists, returning None when any step is missing."""
        current = payload
        for key in path:
            if isinstance(key, int):
                if not isinstance(current, list) or len(current) <= key:
                    return None
                current = current[key]
            else:
                if not isinstance(current, dict):
                    return None
                current = current.get(key)
        return current
