"""High-level pipeline orchestration."""

from __future__ import annotations

from ..cache import MetadataCache
from ..clients.http import HttpClient
from ..domain import AggregateReport
from ..orchestrator import aggregate
from ..report import publish_report
from ..router import SupplyRouter
from ..state import AppState


def build_router(
    state: AppState, metadata_cache: MetadataCache | None = None
) -> SupplyRouter:
    """Wire a router from settings."""
    s = state.settings
    return SupplyRouter(
        http=HttpClient(timeout=s.rpc_timeout_seconds),
        metadata_cache=metadata_cache,
        catalog_timeout=s.catalog_timeout_seconds,
    )


async def run_report(
    state: AppState,
    router: SupplyRouter | None = None,
    publish: bool = True,
) -> AggregateReport:
    """Fetch supply for every selected chain and publish the report.

    Args:
        state: Application state containing settings and logger
        router: Router override, built from settings when omitted
        publish: Write the report to stdout

    Returns:
        The assembled report
    """
    s = state.settings
    log = state.logger

    chains = s.selected_chains()
    log.info(
        "Starting supply report",
        extra={"chains": len(chains), "tokens": s.tokens or "all"},
    )

    report = await aggregate(
        chains,
        router=router if router is not None else build_router(state),
        max_concurrency=s.max_concurrency,
    )

    if publish:
        publish_report(s, report)

    log.info(
        "Report completed",
        extra={"reporting": len(report.succeeded), "failed": len(report.failed)},
    )
    return report
