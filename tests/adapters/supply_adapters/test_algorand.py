from __future__ import annotations

import pytest

from supply_monitor.adapters.supply_adapters.algorand import AlgorandSupplyAdapter
from supply_monitor.constants import ALGORAND_USDC_RESERVE
from supply_monitor.errors import ConfigurationError, DecodeError

INDEXER = "https://indexer.example"
ACCOUNT_URL = f"{INDEXER}/v2/accounts/{ALGORAND_USDC_RESERVE}"


@pytest.fixture
def chain(make_chain):
    return make_chain(
        id="algorand",
        chain_type="algorand",
        contract_address="31566704",
        rpc_url=INDEXER,
        decimals=6,
    )


def _account(*assets):
    return {"account": {"address": ALGORAND_USDC_RESERVE, "assets": list(assets)}}


@pytest.mark.asyncio
async def test_circulating_is_max_uint64_minus_reserve(fake_http, chain):
    fake_http.on(
        "GET",
        ACCOUNT_URL,
        _account(
            {"asset-id": 1, "amount": 5},
            {"asset-id": 31566704, "amount": 100},
        ),
    )

    supply = await AlgorandSupplyAdapter(fake_http).fetch_supply(chain)

    assert supply == (2**64 - 1 - 100) / 10**6


@pytest.mark.asyncio
async def test_missing_holding_is_hard_failure(fake_http, chain):
    fake_http.on("GET", ACCOUNT_URL, _account({"asset-id": 1, "amount": 5}))

    with pytest.raises(DecodeError, match="no holding of asset 31566704"):
        await AlgorandSupplyAdapter(fake_http).fetch_supply(chain)


@pytest.mark.asyncio
async def test_missing_account_is_hard_failure(fake_http, chain):
    fake_http.on("GET", ACCOUNT_URL, {"message": "no accounts found"})

    with pytest.raises(DecodeError, match="No Algorand account data"):
        await AlgorandSupplyAdapter(fake_http).fetch_supply(chain)


@pytest.mark.asyncio
async def test_non_numeric_asset_id_is_configuration_error(fake_http, make_chain):
    chain = make_chain(id="algorand", chain_type="algorand", contract_address="USDC", rpc_url=INDEXER)

    with pytest.raises(ConfigurationError):
        await AlgorandSupplyAdapter(fake_http).fetch_supply(chain)
    assert fake_http.calls == []


@pytest.mark.asyncio
async def test_custom_reserve_account(fake_http, chain):
    fake_http.on(
        "GET",
        f"{INDEXER}/v2/accounts/RESERVE",
        _account({"asset-id": 31566704, "amount": 2**64 - 1}),
    )

    supply = await AlgorandSupplyAdapter(fake_http, reserve_account="RESERVE").fetch_supply(chain)

    assert supply == 0.0
