from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Callable

import pytest
import requests

from supply_monitor.clients.http import HttpClient
from supply_monitor.domain import ChainConfig
from supply_monitor.errors import TransportError


def make_response(body: Any = None, status: int = 200, url: str = "", raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response.url = url
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    response._content = raw if raw is not None else json.dumps(body).encode()
    return response


@dataclass
class RecordedCall:
    method: str
    url: str
    params: dict[str, Any] | None
    payload: Any
    timeout: float | None


Handler = Callable[["RecordedCall"], Any]


class FakeHttpClient(HttpClient):
    """HttpClient double that serves canned responses per (method, url).

    A route is either a ``(body, status)`` tuple, a response body, an
    exception to raise, or a callable receiving the recorded call and
    returning one of those.
    """

    def __init__(self):
        super().__init__(timeout=10.0)
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[RecordedCall] = []

    def on(self, method: str, url: str, response: Any) -> FakeHttpClient:
        self.routes[(method.upper(), url)] = response
        return self

    def calls_to(self, url: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.url == url]

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
        await asyncio.sleep(0)
        call = RecordedCall(method, url, params, payload, timeout)
        self.calls.append(call)
        route = self.routes.get((method, url))
        if route is None:
            raise TransportError(f"Request to {url} failed: no route", chain_id=chain_id)
        if callable(route):
            route = route(call)
        if isinstance(route, BaseException):
            if isinstance(route, TransportError):
                route.chain_id = chain_id
            raise route
        if isinstance(route, requests.Response):
            return route
        if isinstance(route, tuple):
            body, status = route
            return make_response(body, status=status, url=url)
        return make_response(route, url=url)


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def make_chain() -> Callable[..., ChainConfig]:
    def _make(**overrides: Any) -> ChainConfig:
        fields: dict[str, Any] = {
            "id": "ethereum",
            "name": "Ethereum",
            "token": "USDC",
            "contract_address": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            "decimals": 6,
            "rpc_url": "https://rpc.example",
            "explorer_url": "https://etherscan.io",
            "explorer_address_path": "/token/",
            "chain_type": "evm",
            "color": "#627EEA",
        }
        fields.update(overrides)
        return ChainConfig(**fields)

    return _make
