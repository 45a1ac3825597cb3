"""
Ingestion Queue
===============

RQ queues for case ingestion. Single-case jobs go to `ingest`; whole
sequential batches (which sleep between cases) go to `ingest_batch` so they
never hold up interactive re-fetches.

When Redis is unreachable a job runs inline and its record says so.
"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any, Callable, List

from redis import Redis
from rq import Queue, Retry
from rq.job import Job

from ..config import get_settings

logger = logging.getLogger(__name__)

QUEUE_INGEST = "ingest"
QUEUE_BATCH = "ingest_batch"
ALL_QUEUES: List[str] = [QUEUE_INGEST, QUEUE_BATCH]

RETRY_INTERVALS = [10, 30, 60]


def get_redis_connection() -> Redis:
    return Redis.from_url(get_settings().redis_url)


def get_queue(queue_name: str = QUEUE_INGEST) -> Queue:
    return Queue(queue_name, connection=get_redis_connection())


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _run_inline(func: Callable, args: tuple, kwargs: Dict[str, Any], job_id: Optional[str]) -> Dict[str, Any]:
    record = {"job_id": job_id or f"inline-{func.__name__}", "queue": None}
    try:
        record["result"] = func(*args, **kwargs)
        record["status"] = "finished"
    except Exception as e:
        logger.exception(f"Inline job {func.__name__} failed")
        record["status"] = "failed"
        record["error"] = str(e)
    return record


def enqueue_job(
    func: Callable,
    *args,
    queue_name: str = QUEUE_INGEST,
    job_id: str = None,
    timeout: Optional[int] = None,
    retry: int = 0,
    meta: Dict[str, Any] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Enqueue an ingestion job.

    Args:
        func: Task function
        *args: Positional arguments for the task
        queue_name: `ingest` or `ingest_batch`
        job_id: Optional custom job ID
        timeout: Job timeout in seconds (default: settings.job_timeout)
        retry: Retries on failure, spaced by RETRY_INTERVALS
        meta: Job metadata (the case id for single-case jobs)
        **kwargs: Keyword arguments for the task

    Returns:
        Job record: job_id, status, queue and enqueued_at. Inline runs carry
        result or error instead of enqueued_at.
    """
    try:
        queue = get_queue(queue_name)
        job = queue.enqueue(
            func,
            *args,
            job_id=job_id,
            job_timeout=timeout or get_settings().job_timeout,
            retry=Retry(max=retry, interval=RETRY_INTERVALS) if retry > 0 else None,
            meta=meta or {},
            **kwargs
        )
    except Exception as e:
        logger.warning(f"Could not enqueue {func.__name__} on {queue_name}, running inline: {e}")
        return _run_inline(func, args, kwargs, job_id)

    logger.info(f"Enqueued {func.__name__} as {job.id} on {queue_name}")
    return {
        "job_id": job.id,
        "status": job.get_status(),
        "queue": queue_name,
        "enqueued_at": datetime.utcnow().isoformat(),
    }


def get_job_status(job_id: str) -> Dict[str, Any]:
    """
    Status of an ingestion job.

    Returns status `not_found` when the job (or Redis) is unavailable.
    """
    try:
        job = Job.fetch(job_id, connection=get_redis_connection())
    except Exception as e:
        return {"job_id": job_id, "status": "not_found", "error": str(e)}

    status = {
        "job_id": job_id,
        "case_id": job.meta.get("case_id"),
        "status": job.get_status(),
        "progress": job.meta.get("progress", 0),
        "message": job.meta.get("message"),
        "enqueued_at": _isoformat(job.enqueued_at),
        "started_at": _isoformat(job.started_at),
        "ended_at": _isoformat(job.ended_at),
    }
    if job.is_finished:
        status["result"] = job.result
    elif job.is_failed:
        status["error"] = job.meta.get("error_message") or "Ingestion failed"
    return status
