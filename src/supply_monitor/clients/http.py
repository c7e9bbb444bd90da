"""Thin asyncio wrapper over ``requests`` for REST and JSON-RPC endpoints."""

from __future__ import annotations

import asyncio
import functools
import json
import logging
from typing import Any

import requests

from ..constants import DEFAULT_RPC_TIMEOUT_SECONDS
from ..errors import DecodeError, TransportError
from ..logger import TRACE

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def _error_detail(response: requests.Response) -> str | None:
    """Best-effort extraction of an error message from a JSON error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    for key in ("message", "error_message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"]
    return None


class HttpClient:
    """Issues single-attempt HTTP requests bounded by a fixed timeout.

    Every failure mode (connection error, timeout, non-2xx, non-JSON body)
    surfaces as ``TransportError``. Nothing is retried here.
    """

    def __init__(self, timeout: float = DEFAULT_RPC_TIMEOUT_SECONDS):
        self.timeout = timeout

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        payload: Any = None,
        timeout: float | None = None,
        chain_id: str | None = None,
    ) -> requests.Response:
        effective_timeout = timeout if timeout is not None else self.timeout
        logger.debug("%s %s (timeout=%.1fs)", method, url, effective_timeout)
        if method == "GET":
            call = functools.partial(
                requests.get,
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=effective_timeout,
            )
        else:
            call = functools.partial(
                requests.post,
                url,
                data=json.dumps(payload),
                headers=JSON_HEADERS,
                timeout=effective_timeout,
            )
        # requests' timeout bounds each socket read, not the whole exchange
        try:
            return await asyncio.wait_for(asyncio.to_thread(call), effective_timeout)
        except (TimeoutError, requests.exceptions.Timeout) as exc:
            raise TransportError(
                f"Request to {url} timed out after {effective_timeout:g}s",
                chain_id=chain_id,
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(
                f"Request to {url} failed: {exc}", chain_id=chain_id
            ) from exc

    def _check_status(
        self, response: requests.Response, chain_id: str | None
    ) -> None:
        if response.ok:
            return
        detail = _error_detail(response)
        message = f"HTTP {response.status_code} from {response.url}"
        if detail:
            message = f"{message}: {detail}"
        raise TransportError(message, chain_id=chain_id, status_code=response.status_code)

    def _decode(self, response: requests.Response, chain_id: str | None) -> Any:
        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, "Response from %s: %s", response.url, response.text)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON from {response.url}", chain_id=chain_id
            ) from exc

    async def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
        chain_id: str | None = None,
    ) -> Any:
        response = await self._send(
            "GET", url, params=params, timeout=timeout, chain_id=chain_id
        )
        self._check_status(response, chain_id)
        return self._decode(response, chain_id)

    async def post_json(
        self,
        url: str,
        payload: Any,
        *,
        timeout: float | None = None,
        chain_id: str | None = None,
    ) -> Any:
        response = await self._send(
            "POST", url, payload=payload, timeout=timeout, chain_id=chain_id
        )
        self._check_status(response, chain_id)
        return self._decode(response, chain_id)

    async def exists(
        self,
        url: str,
        *,
        timeout: float | None = None,
        chain_id: str | None = None,
    ) -> bool:
        """Return True when ``url`` answers with a 2xx status."""
        response = await self._send("GET", url, timeout=timeout, chain_id=chain_id)
        return response.ok

    async def json_rpc(
        self,
        url: str,
        method: str,
        params: Any,
        *,
        chain_id: str | None = None,
    ) -> Any:
        """Call a JSON-RPC 2.0 method and return its ``result`` member.

        Raises:
            TransportError: On transport failure or an RPC ``error`` object.
            DecodeError: If the response has no ``result``.
        """
        body = await self.post_json(
            url,
            {"jsonrpc": "2.0", "id": 1, "method": method, "params": params},
            chain_id=chain_id,
        )
        if not isinstance(body, dict):
            raise DecodeError(f"Unexpected {method} response: {body!r}", chain_id=chain_id)
        error = body.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise TransportError(
                f"{method} RPC error: {message or error}", chain_id=chain_id
            )
        if "result" not in body or body["result"] is None:
            raise DecodeError(f"{method} response has no result", chain_id=chain_id)
        return body["result"]
