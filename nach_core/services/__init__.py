"""Services built on the parsing layer and a transaction store."""

from nach_core.services.ingestion import IngestionService
from nach_core.services.reprocessor import Reprocessor
from nach_core.services.stats import StatsService, TransactionFilter, compute_stats

__all__ = [
    "IngestionService",
    "Reprocessor",
    "StatsService",
    "TransactionFilter",
    "compute_stats",
]
