import asyncio
import logging

import pytest

from supply_monitor.domain import ChainConfig
from supply_monitor.errors import TransportError
from supply_monitor.orchestrator import aggregate


class StubRouter:
    """Router double answering from a chain id -> supply/exception map."""

    def __init__(self, outcomes: dict[str, float | BaseException], delay: float = 0.0):
        self.outcomes = outcomes
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.routed: list[str] = []

    async def route(self, config: ChainConfig) -> float:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.routed.append(config.id)
            await asyncio.sleep(self.delay)
            outcome = self.outcomes[config.id]
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1


@pytest.fixture
def chains(make_chain):
    return [
        make_chain(id="ethereum", name="Ethereum"),
        make_chain(id="arbitrum", name="Arbitrum"),
        make_chain(id="solana", name="Solana", chain_type="solana"),
        make_chain(id="tron", name="Tron", token="USDT", chain_type="tron"),
    ]


@pytest.mark.asyncio
async def test_one_failing_chain_does_not_affect_the_others(chains, caplog):
    router = StubRouter(
        {
            "ethereum": 100.0,
            "arbitrum": TransportError("HTTP 503 from https://rpc.example", chain_id="arbitrum"),
            "solana": 50.5,
            "tron": 7.0,
        }
    )

    with caplog.at_level(logging.ERROR, logger="supply_monitor.orchestrator"):
        report = await aggregate(chains, router=router)

    assert [r.chain_id for r in report.results] == ["ethereum", "arbitrum", "solana", "tron"]
    assert [r.supply for r in report.results] == [100.0, None, 50.5, 7.0]
    failed = report.results[1]
    assert failed.error == "HTTP 503 from https://rpc.example"
    assert len(report.failed) == 1
    assert "arbitrum" in caplog.text


@pytest.mark.asyncio
async def test_results_keep_input_order_when_completion_order_differs(make_chain):
    slow = make_chain(id="slow")
    fast = make_chain(id="fast")

    class UnevenRouter(StubRouter):
        async def route(self, config: ChainConfig) -> float:
            await asyncio.sleep(0.02 if config.id == "slow" else 0)
            return self.outcomes[config.id]

    report = await aggregate([slow, fast], router=UnevenRouter({"slow": 1.0, "fast": 2.0}))

    assert [r.chain_id for r in report.results] == ["slow", "fast"]


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_failure_result(make_chain):
    chain = make_chain(id="broken")
    router = StubRouter({"broken": RuntimeError("boom")})

    report = await aggregate([chain], router=router)

    assert report.results[0].supply is None
    assert report.results[0].error == "boom"


@pytest.mark.asyncio
async def test_exception_without_message_reports_class_name(make_chain):
    router = StubRouter({"ethereum": KeyError()})

    report = await aggregate([make_chain()], router=router)

    assert report.results[0].error == "KeyError"


@pytest.mark.asyncio
async def test_empty_configuration_yields_empty_report():
    report = await aggregate([], router=StubRouter({}))

    assert report.results == []
    assert report.timestamp > 0


@pytest.mark.asyncio
async def test_repeated_runs_differ_only_in_timestamp(chains):
    outcomes = {"ethereum": 1.0, "arbitrum": 2.0, "solana": TransportError("down"), "tron": 4.0}

    first = await aggregate(chains, router=StubRouter(outcomes))
    second = await aggregate(chains, router=StubRouter(outcomes))

    assert first.results == second.results


@pytest.mark.asyncio
async def test_max_concurrency_bounds_in_flight_queries(make_chain):
    configs = [make_chain(id=f"chain-{i}") for i in range(6)]
    router = StubRouter({c.id: 1.0 for c in configs}, delay=0.01)

    report = await aggregate(configs, router=router, max_concurrency=2)

    assert router.max_in_flight == 2
    assert len(report.succeeded) == 6


@pytest.mark.asyncio
async def test_unbounded_fan_out_starts_every_query(make_chain):
    configs = [make_chain(id=f"chain-{i}") for i in range(6)]
    router = StubRouter({c.id: 1.0 for c in configs}, delay=0.01)

    await aggregate(configs, router=router)

    assert router.max_in_flight == 6
