"""Tests for settings configuration loading."""

from __future__ import annotations

from textwrap import dedent

import pytest
from pydantic import ValidationError

from supply_monitor.settings import OutputFormat, SupplySettings

CONFIG = dedent(
    """
    [supply_monitor]
    rpc_timeout_seconds = 4.5
    output_format = "json"

    [[chains]]
    id = "ethereum"
    name = "Ethereum"
    token = "USDC"
    contract_address = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
    decimals = 6
    rpc_url = "https://eth.example"
    chain_type = "evm"

    [[chains]]
    id = "tron"
    name = "Tron"
    token = "USDT"
    contract_address = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
    decimals = 6
    rpc_url = "https://tron.example/jsonrpc"
    chain_type = "tron"
    color = "#FF0013"
    """
).strip()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in (
        "SUPPLY_MONITOR_CONFIG",
        "SUPPLY_MONITOR_TOKENS",
        "SUPPLY_MONITOR_RPC_TIMEOUT_SECONDS",
        "SUPPLY_MONITOR_OUTPUT_FORMAT",
        "SUPPLY_MONITOR_MAX_CONCURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "chains.toml"
    path.write_text(CONFIG)
    monkeypatch.setenv("SUPPLY_MONITOR_CONFIG", str(path))
    return path


def test_defaults_without_config_file():
    settings = SupplySettings()

    assert settings.chains == []
    assert settings.tokens == []
    assert settings.rpc_timeout_seconds == 10.0
    assert settings.catalog_timeout_seconds == 15.0
    assert settings.max_concurrency is None
    assert settings.output_format is OutputFormat.TABLE


def test_loads_table_and_top_level_chains(config_path):
    settings = SupplySettings()

    assert settings.rpc_timeout_seconds == 4.5
    assert settings.output_format is OutputFormat.JSON
    assert [c.id for c in settings.chains] == ["ethereum", "tron"]
    tron = settings.chains[1]
    assert tron.chain_type == "tron"
    assert tron.color == "#FF0013"
    assert settings.chains[0].color == "#888888"


def test_local_config_file_is_discovered(tmp_path):
    (tmp_path / "supply-monitor.toml").write_text(CONFIG)

    settings = SupplySettings()

    assert len(settings.chains) == 2


def test_env_overrides_file_and_cli_overrides_env(config_path, monkeypatch):
    monkeypatch.setenv("SUPPLY_MONITOR_RPC_TIMEOUT_SECONDS", "7")

    assert SupplySettings().rpc_timeout_seconds == 7.0
    assert SupplySettings(rpc_timeout_seconds=2.0).rpc_timeout_seconds == 2.0


def test_tokens_env_accepts_comma_separated_list(config_path, monkeypatch):
    monkeypatch.setenv("SUPPLY_MONITOR_TOKENS", "usdt, ")

    settings = SupplySettings()

    assert settings.tokens == ["usdt"]
    assert [c.id for c in settings.selected_chains()] == ["tron"]


def test_selected_chains_without_filter_returns_all(config_path):
    assert [c.id for c in SupplySettings().selected_chains()] == ["ethereum", "tron"]


def test_duplicate_chain_ids_rejected(tmp_path, monkeypatch):
    path = tmp_path / "dup.toml"
    ethereum_block = CONFIG.split("[[chains]]")[1]
    path.write_text(f"[[chains]]{ethereum_block}[[chains]]{ethereum_block}")
    monkeypatch.setenv("SUPPLY_MONITOR_CONFIG", str(path))

    with pytest.raises(ValidationError, match="Duplicate chain ids"):
        SupplySettings()


def test_negative_decimals_rejected():
    chain = {
        "id": "x",
        "name": "X",
        "token": "USDC",
        "contract_address": "0x1",
        "decimals": -1,
        "rpc_url": "https://rpc",
        "chain_type": "evm",
    }

    with pytest.raises(ValidationError):
        SupplySettings(chains=[chain])


@pytest.mark.parametrize("field", ["rpc_timeout_seconds", "max_concurrency"])
def test_non_positive_limits_rejected(field):
    with pytest.raises(ValidationError):
        SupplySettings(**{field: 0})


def test_as_safe_dict_is_json_friendly(config_path):
    dumped = SupplySettings().as_safe_dict()

    assert dumped["output_format"] == "json"
    assert dumped["chains"][1]["contract_address"] == "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
