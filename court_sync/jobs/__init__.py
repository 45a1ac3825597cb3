"""
Job Queue Package
=================

Batch ingestion with Redis Queue (RQ).
"""

from .queue import enqueue_job, get_job_status
from .tasks import task_ingest_case, ingest_batch, enqueue_ingest_batch, enqueue_sequential_batch

__all__ = [
    # Queue management
    "enqueue_job", "get_job_status",
    # Tasks
    "task_ingest_case",
    "ingest_batch",
    "enqueue_ingest_batch",
    "enqueue_sequential_batch",
]
