"""Process-wide memo of resolved Aptos metadata object addresses."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class MetadataCache:
    """Maps a contract address to the address actually queried for supply.

    Entries are append-only and never invalidated. Concurrent first-time
    lookups of the same address share one in-flight resolution. The lock
    only guards the containers and is never held across an await.
    """

    def __init__(self, seed: dict[str, str] | None = None):
        self._resolved: dict[str, str] = dict(seed or {})
        self._pending: dict[str, asyncio.Future[str]] = {}
        self._lock = threading.Lock()

    def get(self, contract_address: str) -> str | None:
        with self._lock:
            return self._resolved.get(contract_address)

    def set(self, contract_address: str, query_address: str) -> str:
        """Record a resolution; an existing entry is kept and returned."""
        with self._lock:
            return self._resolved.setdefault(contract_address, query_address)

    def __contains__(self, contract_address: object) -> bool:
        with self._lock:
            return contract_address in self._resolved

    def __len__(self) -> int:
        with self._lock:
            return len(self._resolved)

    def _discard_pending(self, contract_address: str) -> None:
        with self._lock:
            self._pending.pop(contract_address, None)

    async def get_or_resolve(
        self,
        contract_address: str,
        resolver: Callable[[], Awaitable[str]],
    ) -> str:
        """Return the cached address or run ``resolver`` once to obtain it.

        Failures are not cached; the next call retries the resolution.
        """
        with self._lock:
            cached = self._resolved.get(contract_address)
            if cached is not None:
                return cached
            waiting_on = self._pending.get(contract_address)
            if waiting_on is None:
                pending = asyncio.get_running_loop().create_future()
                self._pending[contract_address] = pending

        if waiting_on is not None:
            logger.debug("Joining in-flight metadata resolution for %s", contract_address)
            return await asyncio.shield(waiting_on)

        try:
            resolved = await resolver()
        except asyncio.CancelledError:
            self._discard_pending(contract_address)
            pending.cancel()
            raise
        except Exception as exc:
            self._discard_pending(contract_address)
            pending.set_exception(exc)
            pending.exception()  # retrieved; waiters (if any) get their own copy
            raise

        with self._lock:
            resolved = self._resolved.setdefault(contract_address, resolved)
            self._pending.pop(contract_address, None)
        if not pending.done():
            pending.set_result(resolved)
        logger.debug("Cached metadata address %s -> %s", contract_address, resolved)
        return resolved
