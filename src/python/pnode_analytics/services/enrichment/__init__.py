from .stats_enrichment_scheduler import StatsEnrichmentScheduler

__all__ = [
    "StatsEnrichmentScheduler"
]
