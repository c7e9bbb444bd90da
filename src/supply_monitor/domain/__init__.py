"""Domain types shared across adapters, router and orchestrator."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChainType(str, Enum):
    EVM = "evm"
    TRON = "tron"
    SOLANA = "solana"
    TON = "ton"
    NEAR = "near"
    STELLAR = "stellar"
    ALGORAND = "algorand"
    APTOS = "aptos"
    HEDERA = "hedera"
    NOBLE = "noble"
    POLKADOT = "polkadot"
    STARKNET = "starknet"
    SUI = "sui"
    XRPL = "xrpl"
    LIQUID = "liquid"
    TEZOS = "tezos"


class ChainConfig(BaseModel):
    """Static description of one token deployment on one chain.

    ``chain_type`` is kept as a plain string so that an unmapped tag reaches
    the router and is reported as a configuration error for that chain only.
    """

    id: str
    name: str
    token: str
    contract_address: str
    decimals: int = Field(ge=0)
    rpc_url: str
    explorer_url: str = ""
    explorer_address_path: str = ""
    chain_type: str
    color: str = "#888888"

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def explorer_link(self) -> str | None:
        if not self.explorer_url:
            return None
        return f"{self.explorer_url.rstrip('/')}{self.explorer_address_path}{self.contract_address}"


@dataclass(frozen=True)
class SupplyResult:
    """Outcome of a single chain query; exactly one of supply/error is set."""

    chain_id: str
    chain_name: str
    token: str
    supply: float | None
    error: str | None
    color: str
    contract_address: str
    explorer_url: str
    explorer_address_path: str

    def __post_init__(self) -> None:
        if (self.supply is None) == (self.error is None):
            raise ValueError(
                f"SupplyResult for {self.chain_id} must carry exactly one of supply or error"
            )

    @classmethod
    def success(cls, config: ChainConfig, supply: float) -> SupplyResult:
        return cls(error=None, supply=supply, **_carried_fields(config))

    @classmethod
    def failure(cls, config: ChainConfig, error: str) -> SupplyResult:
        return cls(error=error or "Failed to fetch", supply=None, **_carried_fields(config))

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _carried_fields(config: ChainConfig) -> dict[str, str]:
    return {
        "chain_id": config.id,
        "chain_name": config.name,
        "token": config.token,
        "color": config.color,
        "contract_address": config.contract_address,
        "explorer_url": config.explorer_url,
        "explorer_address_path": config.explorer_address_path,
    }


@dataclass(frozen=True)
class TokenSummary:
    """Per-token rollup of an aggregate report."""

    token: str
    total_supply: float
    chains_configured: int
    chains_reporting: int

    @property
    def chains_failed(self) -> int:
        return self.chains_configured - self.chains_reporting


@dataclass
class AggregateReport:
    """Results of one fan-out, in input configuration order."""

    results: list[SupplyResult]
    timestamp: int  # milliseconds since epoch
    tokens: list[str] = field(init=False)

    def __post_init__(self) -> None:
        self.tokens = list(dict.fromkeys(result.token for result in self.results))

    @property
    def succeeded(self) -> list[SupplyResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> list[SupplyResult]:
        return [result for result in self.results if not result.ok]

    def summaries(self) -> list[TokenSummary]:
        """Total supply per token; failed chains still count as configured."""
        summaries = []
        for token in self.tokens:
            token_results = [r for r in self.results if r.token == token]
            reporting = [r for r in token_results if r.supply is not None]
            summaries.append(
                TokenSummary(
                    token=token,
                    total_supply=sum(r.supply for r in reporting if r.supply is not None),
                    chains_configured=len(token_results),
                    chains_reporting=len(reporting),
                )
            )
        return summaries

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [result.to_dict() for result in self.results],
            "timestamp": self.timestamp,
        }
