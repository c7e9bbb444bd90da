"""Dispatch of a chain configuration to its chain-family adapter."""

from __future__ import annotations

import logging

from .adapters.supply_adapters import (
    ADAPTER_REGISTRY,
    AptosSupplyAdapter,
    BaseSupplyAdapter,
    resolve_chain_type,
)
from .cache import MetadataCache
from .clients.http import HttpClient
from .constants import DEFAULT_CATALOG_TIMEOUT_SECONDS, DEFAULT_RPC_TIMEOUT_SECONDS
from .domain import ChainConfig, ChainType
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class SupplyRouter:
    """Routes ``ChainConfig`` records to one adapter instance per chain type.

    Owns the shared HTTP client and the Aptos metadata cache so both can be
    injected in tests.
    """

    def __init__(
        self,
        http: HttpClient | None = None,
        metadata_cache: MetadataCache | None = None,
        catalog_timeout: float = DEFAULT_CATALOG_TIMEOUT_SECONDS,
        adapters: dict[ChainType, BaseSupplyAdapter] | None = None,
    ):
        self.http = http if http is not None else HttpClient(DEFAULT_RPC_TIMEOUT_SECONDS)
        self.metadata_cache = (
            metadata_cache if metadata_cache is not None else MetadataCache()
        )
        self.catalog_timeout = catalog_timeout
        self._adapters: dict[ChainType, BaseSupplyAdapter] = dict(adapters or {})

    def _build_adapter(self, chain_type: ChainType) -> BaseSupplyAdapter:
        adapter_class = ADAPTER_REGISTRY.get(chain_type)
        if adapter_class is None:
            raise ConfigurationError(f"No adapter registered for chain type '{chain_type.value}'")
        if adapter_class is AptosSupplyAdapter:
            return AptosSupplyAdapter(
                self.http,
                cache=self.metadata_cache,
                catalog_timeout=self.catalog_timeout,
            )
        return adapter_class(self.http)

    def adapter_for(self, chain_type: str) -> BaseSupplyAdapter:
        """Return (building on first use) the adapter for a chain type tag.

        Raises:
            ConfigurationError: If the tag maps to no adapter
        """
        resolved = resolve_chain_type(chain_type)
        adapter = self._adapters.get(resolved)
        if adapter is None:
            adapter = self._build_adapter(resolved)
            self._adapters[resolved] = adapter
        return adapter

    async def route(self, config: ChainConfig) -> float:
        """Fetch the supply for ``config`` through its adapter.

        Raises:
            ConfigurationError: For an unknown chain type, before any network call
            SupplyError: Any adapter failure, tagged with the chain id
        """
        try:
            adapter = self.adapter_for(config.chain_type)
        except ConfigurationError as exc:
            exc.chain_id = config.id
            raise
        logger.debug("Routing %s to %s adapter", config.id, adapter.adapter_name)
        return await adapter.fetch_supply(config)
