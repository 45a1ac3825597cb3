"""
Ingestion Worker
================

RQ worker for the ingestion queues. Single-case jobs are listened to first so
re-fetches are not stuck behind a long sequential batch.

    python -m court_sync.jobs.worker                 # both queues
    python -m court_sync.jobs.worker --queues ingest --burst
"""

import argparse
import logging
from typing import List, Optional

from rq import Worker

from ..config import get_settings
from .queue import ALL_QUEUES, get_redis_connection

logger = logging.getLogger(__name__)


def start_worker(queues: Optional[List[str]] = None, burst: bool = False, log_level: Optional[str] = None):
    """Run an RQ worker until stopped (or until the queues drain in burst mode)"""
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    queues = queues or list(ALL_QUEUES)
    unknown = [q for q in queues if q not in ALL_QUEUES]
    if unknown:
        logger.warning(f"Listening on queues nothing enqueues to: {unknown}")

    worker = Worker(queues, connection=get_redis_connection())
    logger.info(f"Ingestion worker listening on {queues} (burst={burst})")
    worker.work(burst=burst)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Court case ingestion worker")
    parser.add_argument("--queues", "-q", nargs="+", default=list(ALL_QUEUES),
                        help=f"Queues in priority order (default: {' '.join(ALL_QUEUES)})")
    parser.add_argument("--burst", "-b", action="store_true", help="Exit once the queues are empty")
    parser.add_argument("--log-level", "-l", default=None, help="Logging level (default: LOG_LEVEL)")
    return parser


def run_worker_cli(argv=None):
    args = build_parser().parse_args(argv)
    start_worker(queues=args.queues, burst=args.burst, log_level=args.log_level)


if __name__ == "__main__":
    run_worker_cli()
