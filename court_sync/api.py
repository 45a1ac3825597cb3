"""
Court Sync API
==============

FastAPI endpoints for case payload ingestion.

Endpoints:
- GET  /health                          - Health check
- POST /api/v1/cases/{case_id}/ingest   - Map and store one provider payload
- POST /api/v1/ingest/batch             - Enqueue ingestion jobs for several cases
- GET  /api/v1/jobs/{job_id}            - Get job status

Run with:
    uvicorn court_sync.api:app --host 0.0.0.0 --port 8000
"""

import logging
from datetime import datetime

from fastapi import FastAPI, HTTPException, Depends
from sqlalchemy.orm import Session

from .config import get_settings
from .db.session import get_db, init_db
from .db.store import SQLAlchemyCaseStore
from .ingest.base import PayloadStructureError, UnsupportedSourceError
from .jobs.queue import get_job_status
from .jobs.tasks import enqueue_ingest_batch, enqueue_sequential_batch
from .schemas import (
    BatchIngestRequest,
    BatchIngestResponse,
    HealthResponse,
    IngestionResult,
    IngestRequest,
)
from .upsert import CaseNotFoundError, ingest_case

logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Court Sync",
    description="Normalization of court case-status payloads into a canonical case store",
    version=get_settings().service_version,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    settings = get_settings()
    logger.info(f"Starting Court Sync v{settings.service_version}")
    init_db()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        version=get_settings().service_version,
        timestamp=datetime.now()
    )


@app.post("/api/v1/cases/{case_id}/ingest", response_model=IngestionResult, tags=["Ingestion"])
def ingest_case_payload(
    case_id: str,
    request: IngestRequest,
    db: Session = Depends(get_db)
):
    """
    Map a raw provider payload and apply it to the case.

    Child collections owned by the payload type are replaced; case fields
    are only overwritten by non-empty values.
    """
    try:
        result = ingest_case(SQLAlchemyCaseStore(db), case_id, request.payload, request.search_type)
        db.commit()
    except CaseNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except PayloadStructureError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))
    except UnsupportedSourceError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise

    return result


@app.post("/api/v1/ingest/batch", response_model=BatchIngestResponse, tags=["Ingestion"])
def ingest_batch_payloads(request: BatchIngestRequest):
    """Enqueue one independent ingestion job per case, or one sequential batch job"""
    items = [item.model_dump(mode="json") for item in request.items]
    if request.sequential:
        return BatchIngestResponse(jobs=enqueue_sequential_batch(items))
    return BatchIngestResponse(jobs=enqueue_ingest_batch(items))


@app.get("/api/v1/jobs/{job_id}", tags=["Jobs"])
def job_status(job_id: str):
    """Get job status"""
    status = get_job_status(job_id)
    if status.get("status") == "not_found":
        raise HTTPException(status_code=404, detail=f"Job not found: {job_id}")
    return status
