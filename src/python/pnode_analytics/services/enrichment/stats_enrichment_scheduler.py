"""Background job that keeps per-node stats warm.

Every ``interval_seconds`` the timer spawns a run. A run takes the current
node set, keeps the online nodes, and fetches stats from each node directly
in batches of ``batch_size`` with a short pause between batches. Results
land in the per-node stats keys that ``StatsEnrichmentService`` merges on
read.

At most one run is in progress at any time. A tick that finds the run-lock
held is skipped, not queued.
"""

import asyncio
import logging
from time import time
from typing import Optional
from injector import inject, singleton
from prometheus_client import Counter, Gauge, Histogram
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.constants import STATUS_ONLINE
from pnode_analytics.models import EnrichmentRunResult, NodeStats, PNodeDetails
from pnode_analytics.services.pnodes import NodeStatsService, PNodeCacheService

ENRICHMENT_RUN_COUNTER = Counter("pna_enrichment_run_total", "Total number of enrichment runs started")
ENRICHMENT_SKIPPED_COUNTER = Counter("pna_enrichment_skipped_total", "Total number of enrichment ticks skipped because a run was in progress")
ENRICHMENT_NODE_COUNTER = Counter("pna_enrichment_node_total", "Total number of per-node stats fetches during enrichment", ["result"])
ENRICHMENT_DURATION_HISTOGRAM = Histogram("pna_enrichment_run_duration_seconds", "Duration of enrichment runs in seconds")
ENRICHMENT_IN_PROGRESS = Gauge("pna_enrichment_in_progress", "Whether an enrichment run is currently in progress")


@singleton
class StatsEnrichmentScheduler:

    @inject
    def __init__(self,
                 config: AnalyticsConfig,
                 pnode_cache_service: PNodeCacheService,
                 node_stats_service: NodeStatsService):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__interval_seconds = config.enrichment_interval_seconds
        self.__batch_size = config.enrichment_batch_size
        self.__batch_delay_seconds = config.enrichment_batch_delay_seconds
        self.__fetch_timeout_seconds = config.enrichment_fetch_timeout_seconds
        self.__pnode_cache_service = pnode_cache_service
        self.__node_stats_service = node_stats_service
        self.__run_lock = asyncio.Lock()
        self.__timer_task: Optional[asyncio.Task] = None
        self.__run_tasks: set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self.__timer_task is not None and not self.__timer_task.done()

    @property
    def is_run_in_progress(self) -> bool:
        return self.__run_lock.locked()

    def start(self) -> None:
        """Start the timer. Must be called from within the running event loop."""
        if self.is_running:
            return
        self.__timer_task = asyncio.get_running_loop().create_task(self.__timer_loop())
        self.__logger.info(
            f"Stats enrichment started (interval={self.__interval_seconds}s, batch_size={self.__batch_size})"
        )

    async def stop(self) -> None:
        """Cancel the timer and abandon any in-flight run.

        Cache writes are idempotent, so an abandoned run only leaves fewer
        entries warm.
        """
        tasks: list[asyncio.Task] = list(self.__run_tasks)
        if self.__timer_task is not None:
            tasks.append(self.__timer_task)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.__timer_task = None
        self.__run_tasks.clear()
        self.__logger.info("Stats enrichment stopped")

    async def run_once(self) -> EnrichmentRunResult:
        if self.__run_lock.locked():
            ENRICHMENT_SKIPPED_COUNTER.inc()
            self.__logger.info("Previous enrichment run still in progress, skipping this tick")
            return EnrichmentRunResult(skipped=True)
        async with self.__run_lock:
            ENRICHMENT_IN_PROGRESS.set(1)
            try:
                return await self.__run()
            finally:
                ENRICHMENT_IN_PROGRESS.set(0)

    async def __timer_loop(self) -> None:
        while True:
            run_task: asyncio.Task = asyncio.create_task(self.run_once())
            self.__run_tasks.add(run_task)
            run_task.add_done_callback(self.__run_tasks.discard)
            await asyncio.sleep(self.__interval_seconds)

    async def __run(self) -> EnrichmentRunResult:
        start_time: float = time()
        ENRICHMENT_RUN_COUNTER.inc()
        result: EnrichmentRunResult = EnrichmentRunResult()
        try:
            # Get online nodes
            nodes: list[PNodeDetails] = await self.__pnode_cache_service.get_all_pnodes()
            online_nodes: list[PNodeDetails] = [node for node in nodes if node.status == STATUS_ONLINE]
            result.total_nodes = len(nodes)
            result.online_nodes = len(online_nodes)

            # Fetch stats in batches
            for offset in range(0, len(online_nodes), self.__batch_size):
                if offset > 0:
                    await asyncio.sleep(self.__batch_delay_seconds)
                batch: list[PNodeDetails] = online_nodes[offset:offset + self.__batch_size]
                outcomes = await asyncio.gather(
                    *(self.__node_stats_service.fetch_and_cache(node, self.__fetch_timeout_seconds) for node in batch),
                    return_exceptions=True
                )
                result.batches += 1
                for node, outcome in zip(batch, outcomes):
                    if isinstance(outcome, NodeStats):
                        result.enriched_nodes += 1
                        ENRICHMENT_NODE_COUNTER.labels(result="enriched").inc()
                    else:
                        if isinstance(outcome, Exception):
                            self.__logger.debug(f"Enrichment of node {node.pubkey} failed: {outcome}")
                        result.failed_nodes += 1
                        ENRICHMENT_NODE_COUNTER.labels(result="failed").inc()
        except Exception:
            self.__logger.exception("Stats enrichment run error")
        finally:
            result.duration_seconds = time() - start_time
            ENRICHMENT_DURATION_HISTOGRAM.observe(result.duration_seconds)

        self.__logger.info(
            f"Stats enrichment run finished: {result.enriched_nodes}/{result.online_nodes} online nodes enriched, "
            f"{result.failed_nodes} failed, {result.batches} batch(es) in {result.duration_seconds:.2f}s"
        )
        return result
