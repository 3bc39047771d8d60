#!/usr/bin/env python3
"""Ingest a NACH batch file, optionally reprocess its errors, and print stats.

Usage:
    python scripts/process_file.py local/ACH-DR-BDBL-03062024-TPZ000433633-P3FC-INW.txt
    python scripts/process_file.py FILE --reprocess --actor ADMIN
    python scripts/process_file.py FILE --postgres
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from nach_core.config import NachConfig
from nach_core.exceptions import NachError
from nach_core.logging import setup_logging
from nach_core.models.enums import TransactionStatus
from nach_core.serialization import to_dict
from nach_core.services import IngestionService, Reprocessor, StatsService
from nach_core.store import InMemoryTransactionStore, TransactionStore

logger = logging.getLogger(__name__)


def build_store(config: NachConfig, use_postgres: bool) -> TransactionStore:
    if not use_postgres:
        return InMemoryTransactionStore()

    from nach_core.store.postgres import PostgresTransactionStore

    store = PostgresTransactionStore(config.postgres.connection_string)
    store.create_schema()
    return store


def main() -> int:
    parser = argparse.ArgumentParser(description="Process a NACH batch file")
    parser.add_argument("file", type=Path, help="Path to the batch file")
    parser.add_argument("--postgres", action="store_true", help="Persist to PostgreSQL (POSTGRES_* env vars)")
    parser.add_argument("--reprocess", action="store_true", help="Reprocess ERROR records after ingestion")
    parser.add_argument("--actor", default=None)
    parser.add_argument("--reason", default=None)
    parser.add_argument("--log-format", choices=["standard", "json"], default="standard")
    args = parser.parse_args()

    config = NachConfig.from_env()
    setup_logging(config.log_level, args.log_format)

    try:
        store = build_store(config, args.postgres)
        ingestion = IngestionService(store, config)
        result = ingestion.ingest(args.file.read_bytes(), args.file.name)
        output: dict = {"ingestion": to_dict(result)}

        if args.reprocess:
            ids = [t.id for t in store.get_by_status(TransactionStatus.ERROR) if t.id is not None]
            if ids:
                reprocessor = Reprocessor(store, config.reprocess, config.parser.acceptance_rule)
                for start in range(0, len(ids), config.reprocess.max_batch_size):
                    chunk = ids[start : start + config.reprocess.max_batch_size]
                    outcome = reprocessor.reprocess(chunk, args.actor, args.reason)
                    output.setdefault("reprocess", []).append(to_dict(outcome))

        output["stats"] = to_dict(StatsService(store).dashboard())
    except NachError as e:
        logger.error("Processing failed: %s", e)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
