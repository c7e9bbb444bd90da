from __future__ import annotations

from ...domain import ChainType
from ...errors import ConfigurationError
from .algorand import AlgorandSupplyAdapter
from .aptos import AptosSupplyAdapter
from .base import BaseSupplyAdapter
from .evm import EvmSupplyAdapter
from .hedera import HederaSupplyAdapter
from .liquid import LiquidSupplyAdapter
from .near import NearSupplyAdapter
from .noble import NobleSupplyAdapter
from .polkadot import PolkadotSupplyAdapter
from .solana import SolanaSupplyAdapter
from .starknet import StarknetSupplyAdapter
from .stellar import StellarSupplyAdapter
from .sui import SuiSupplyAdapter
from .tezos import TezosSupplyAdapter
from .ton import TonSupplyAdapter
from .tron import TronSupplyAdapter
from .xrpl import XrplSupplyAdapter

ADAPTER_REGISTRY: dict[ChainType, type[BaseSupplyAdapter]] = {
    ChainType.EVM: EvmSupplyAdapter,
    ChainType.TRON: TronSupplyAdapter,
    ChainType.SOLANA: SolanaSupplyAdapter,
    ChainType.TON: TonSupplyAdapter,
    ChainType.NEAR: NearSupplyAdapter,
    ChainType.STELLAR: StellarSupplyAdapter,
    ChainType.ALGORAND: AlgorandSupplyAdapter,
    ChainType.APTOS: AptosSupplyAdapter,
    ChainType.HEDERA: HederaSupplyAdapter,
    ChainType.NOBLE: NobleSupplyAdapter,
    ChainType.POLKADOT: PolkadotSupplyAdapter,
    ChainType.STARKNET: StarknetSupplyAdapter,
    ChainType.SUI: SuiSupplyAdapter,
    ChainType.XRPL: XrplSupplyAdapter,
    ChainType.LIQUID: LiquidSupplyAdapter,
    ChainType.TEZOS: TezosSupplyAdapter,
}

SUPPLY_ADAPTERS: list[type[BaseSupplyAdapter]] = list(ADAPTER_REGISTRY.values())


def resolve_chain_type(chain_type: str) -> ChainType:
    """Map a configured chain type tag onto the closed ``ChainType`` enumeration.

    Raises:
        ConfigurationError: If the tag names no known chain family
    """
    try:
        return ChainType(chain_type.lower())
    except ValueError as exc:
        raise ConfigurationError(
            f"Unknown chain type '{chain_type}'. "
            f"Available: {', '.join(t.value for t in ADAPTER_REGISTRY)}"
        ) from exc


def get_adapter_class(chain_type: str) -> type[BaseSupplyAdapter]:
    """Get adapter class by chain type tag (case-insensitive).

    Raises:
        ConfigurationError: If the tag is not recognized
    """
    return ADAPTER_REGISTRY[resolve_chain_type(chain_type)]


__all__ = [
    "ADAPTER_REGISTRY",
    "SUPPLY_ADAPTERS",
    "AlgorandSupplyAdapter",
    "AptosSupplyAdapter",
    "BaseSupplyAdapter",
    "EvmSupplyAdapter",
    "HederaSupplyAdapter",
    "LiquidSupplyAdapter",
    "NearSupplyAdapter",
    "NobleSupplyAdapter",
    "PolkadotSupplyAdapter",
    "SolanaSupplyAdapter",
    "StarknetSupplyAdapter",
    "StellarSupplyAdapter",
    "SuiSupplyAdapter",
    "TezosSupplyAdapter",
    "TonSupplyAdapter",
    "TronSupplyAdapter",
    "XrplSupplyAdapter",
    "get_adapter_class",
    "resolve_chain_type",
]
