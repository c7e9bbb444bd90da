from __future__ import annotations

import asyncio
import time
from typing import Sequence

from .domain import AggregateReport, ChainConfig, SupplyResult
from .errors import SupplyError
from .logger import get_logger
from .router import SupplyRouter

logger = get_logger(__name__)


def _error_message(exc: BaseException) -> str:
    if isinstance(exc, SupplyError):
        return exc.message or type(exc).__name__
    return str(exc) or type(exc).__name__


def _process_results(
    configs: Sequence[ChainConfig],
    outcomes: Sequence[float | BaseException],
) -> list[SupplyResult]:
    """Convert gathered outcomes into results, positionally aligned with configs."""
    results: list[SupplyResult] = []
    for config, outcome in zip(configs, outcomes):
        match outcome:
            case SupplyError() as e:
                logger.error(
                    "Chain '%s' (%s) failed [%s]: %s",
                    config.id,
                    config.chain_type,
                    type(e).__name__,
                    e,
                )
                results.append(SupplyResult.failure(config, _error_message(e)))
            case BaseException() as e:
                logger.error(
                    "Chain '%s' (%s) failed unexpectedly: %r",
                    config.id,
                    config.chain_type,
                    e,
                    exc_info=e,
                )
                results.append(SupplyResult.failure(config, _error_message(e)))
            case _:
                logger.debug("Chain '%s' supply: %s", config.id, outcome)
                results.append(SupplyResult.success(config, float(outcome)))
    return results


async def aggregate(
    configs: Sequence[ChainConfig],
    router: SupplyRouter | None = None,
    max_concurrency: int | None = None,
) -> AggregateReport:
    """Query every configured chain concurrently and assemble a report.

    Never raises for a chain failure: each failing chain is reported with
    its error and ``supply=None``. Results keep the input order.

    Args:
        configs: Chains to query, in report order
        router: Router to dispatch through (a fresh one if omitted)
        max_concurrency: Optional bound on in-flight chain queries

    Returns:
        AggregateReport stamped once all chains have settled
    """
    router = router if router is not None else SupplyRouter()
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _route(config: ChainConfig) -> float:
        if semaphore is None:
            return await router.route(config)
        async with semaphore:
            return await router.route(config)

    logger.info("Fetching supply from %d chains...", len(configs))
    outcomes = await asyncio.gather(
        *[_route(config) for config in configs], return_exceptions=True
    )

    results = _process_results(configs, outcomes)
    report = AggregateReport(results=results, timestamp=int(time.time() * 1000))
    logger.info(
        "Supply fetch complete: %d/%d chains reporting",
        len(report.succeeded),
        len(report.results),
    )
    return report
