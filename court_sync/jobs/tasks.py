"""
Job Tasks
=========

Ingestion tasks run by RQ workers or inline.

Cases are independent: a batch is either run sequentially with a fixed
courtesy delay between cases (`ingest_batch`), or fanned out as one job
per case (`enqueue_ingest_batch`).
"""

import logging
import time
from typing import Dict, Any, List, Optional

from rq import get_current_job

from ..config import get_settings
from ..ingest.base import MapperError
from ..schemas import SearchType
from ..upsert import CaseNotFoundError, ingest_case
from .queue import QUEUE_BATCH, enqueue_job

logger = logging.getLogger(__name__)


def update_job_progress(progress: int, message: str = None):
    """Update job progress (for RQ meta); no-op outside a worker"""
    job = get_current_job()
    if job:
        job.meta['progress'] = progress
        if message:
            job.meta['message'] = message
        job.save_meta()


def _set_job_error_message(message: str) -> None:
    job = get_current_job()
    if job:
        job.meta["error_message"] = message
        job.save_meta()


def task_ingest_case(
    case_id: str,
    payload: Any,
    search_type: Optional[str] = None
) -> Dict[str, Any]:
    """
    Ingest one provider payload into one case.

    Args:
        case_id: Case to update
        payload: Decoded provider JSON
        search_type: Classifier value; detected from the payload when omitted

    Returns:
        IngestionResult as a dict
    """
    from ..db.session import get_db_session
    from ..db.store import SQLAlchemyCaseStore

    try:
        with get_db_session() as db:
            result = ingest_case(
                SQLAlchemyCaseStore(db),
                case_id,
                payload,
                SearchType(search_type) if search_type else None,
            )
        return result.model_dump(mode="json")

    except Exception as e:
        logger.exception(f"Failed to ingest case {case_id}")
        _set_job_error_message(str(e))
        raise


def ingest_batch(items: List[Dict[str, Any]], delay: Optional[float] = None) -> List[Dict[str, Any]]:
    """
    Ingest several cases one after another.

    A failing case is recorded and the batch continues.

    Args:
        items: Dicts with case_id, payload and optional search_type
        delay: Seconds to wait between cases (default: settings.batch_delay_seconds)

    Returns:
        One result dict per item, in order
    """
    if delay is None:
        delay = get_settings().batch_delay_seconds

    results = []
    for index, item in enumerate(items):
        if index and delay > 0:
            time.sleep(delay)
        case_id = item["case_id"]
        try:
            results.append(task_ingest_case(case_id, item["payload"], item.get("search_type")))
        except (MapperError, CaseNotFoundError, ValueError) as e:
            logger.warning(f"Skipping case {case_id} in batch: {e}")
            results.append({"case_id": case_id, "status": "failed", "error": str(e)})
        except Exception as e:
            logger.exception(f"Case {case_id} failed in batch, continuing")
            results.append({"case_id": case_id, "status": "failed", "error": str(e)})
        update_job_progress(int(100 * (index + 1) / len(items)), f"Ingested {index + 1}/{len(items)}")

    failed = sum(1 for r in results if r.get("status") == "failed")
    logger.info(f"Batch ingestion finished: {len(results) - failed} ok, {failed} failed")
    return results


def enqueue_ingest_batch(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Enqueue one ingestion job per case.

    Returns:
        One enqueue_job result per item, in order
    """
    jobs = []
    for item in items:
        job = enqueue_job(
            task_ingest_case,
            item["case_id"],
            item["payload"],
            item.get("search_type"),
            meta={"case_id": item["case_id"]},
        )
        jobs.append({"case_id": item["case_id"], **job})
    logger.info(f"Enqueued {len(jobs)} ingestion jobs")
    return jobs


def enqueue_sequential_batch(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Enqueue the whole batch as a single `ingest_batch` job on the batch queue.

    Returns:
        A one-element list with the job record, shaped like enqueue_ingest_batch
    """
    case_ids = [item["case_id"] for item in items]
    job = enqueue_job(
        ingest_batch,
        items,
        queue_name=QUEUE_BATCH,
        meta={"case_ids": case_ids},
    )
    logger.info(f"Enqueued sequential batch of {len(items)} cases")
    return [{"case_ids": case_ids, **job}]
