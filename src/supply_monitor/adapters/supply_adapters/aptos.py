from __future__ import annotations

import logging

from ...cache import MetadataCache
from ...clients.http import HttpClient
from ...constants import (
    APTOS_METADATA_MODULES,
    APTOS_METADATA_RESOURCE,
    APTOS_SUPPLY_FUNCTION,
    DEFAULT_CATALOG_TIMEOUT_SECONDS,
)
from ...domain import ChainConfig, ChainType
from ...errors import DecodeError, ResolutionError, SupplyError, TransportError
from .base import BaseSupplyAdapter

logger = logging.getLogger(__name__)


class AptosSupplyAdapter(BaseSupplyAdapter):
    """Fungible-asset supply via the ``0x1::fungible_asset::supply`` view.

    Some tokens are configured by package address rather than by their
    metadata object, so the object address is resolved (and cached) first.
    """

    def __init__(
        self,
        http: HttpClient,
        cache: MetadataCache | None = None,
        catalog_timeout: float = DEFAULT_CATALOG_TIMEOUT_SECONDS,
        modules: tuple[str, ...] = APTOS_METADATA_MODULES,
    ):
        super().__init__(http)
        self.cache = cache if cache is not None else MetadataCache()
        self.catalog_timeout = catalog_timeout
        self.modules = modules

    @property
    def chain_type(self) -> ChainType:
        return ChainType.APTOS

    async def _view(self, rpc_url: str, payload: dict, chain_id: str | None) -> object:
        body = await self.http.post_json(
            f"{rpc_url.rstrip('/')}/view", payload, chain_id=chain_id
        )
        if isinstance(body, dict) and body.get("error_code"):
            raise TransportError(
                body.get("message") or "Aptos view error", chain_id=chain_id
            )
        return body

    async def _resolve_uncached(
        self, rpc_url: str, contract_address: str, chain_id: str | None
    ) -> str:
        base = rpc_url.rstrip("/")
        probe_url = f"{base}/accounts/{contract_address}/resource/{APTOS_METADATA_RESOURCE}"
        try:
            if await self.http.exists(
                probe_url, timeout=self.catalog_timeout, chain_id=chain_id
            ):
                logger.debug("%s is a fungible asset metadata object", contract_address)
                return contract_address
        except TransportError as exc:
            logger.debug("Metadata probe for %s failed: %s", contract_address, exc)

        for module in self.modules:
            function = f"{contract_address}::{module}::{module}_address"
            try:
                body = await self._view(
                    rpc_url,
                    {"function": function, "type_arguments": [], "arguments": []},
                    chain_id,
                )
            except SupplyError as exc:
                logger.debug("View %s failed: %s", function, exc)
                continue
            candidate = self._dig(body, 0)
            if isinstance(candidate, str) and candidate:
                logger.debug("Resolved %s via %s -> %s", contract_address, function, candidate)
                return candidate

        raise ResolutionError(
            f"Cannot resolve Aptos metadata address for {contract_address}",
            chain_id=chain_id,
        )

    async def resolve_metadata_address(
        self, rpc_url: str, contract_address: str, chain_id: str | None = None
    ) -> str:
        """Return the metadata object address to query for ``contract_address``.

        Raises:
            ResolutionError: If neither the direct probe nor any module view succeeds.
        """
        return await self.cache.get_or_resolve(
            contract_address,
            lambda: self._resolve_uncached(rpc_url, contract_address, chain_id),
        )

    async def fetch_supply(self, config: ChainConfig) -> float:
        metadata_address = await self.resolve_metadata_address(
            config.rpc_url, config.contract_address, config.id
        )
        body = await self._view(
            config.rpc_url,
            {
                "function": APTOS_SUPPLY_FUNCTION,
                "type_arguments": [APTOS_METADATA_RESOURCE],
                "arguments": [metadata_address],
            },
            config.id,
        )
        # Option<u128> is encoded as {"vec": []} or {"vec": ["123"]}
        value = self._dig(body, 0, "vec", 0)
        if value is None:
            raise DecodeError("No supply data from Aptos", chain_id=config.id)
        return self._scaled(config, value, "supply")
