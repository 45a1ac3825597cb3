"""
Relational Upsert
=================

Applies a mapped payload to the case store:

1. Case fields merge with overwrite-if-non-empty semantics: a value the
   payload did not carry never clears a stored one.
2. Every collection the payload type owns is replaced wholesale (delete all
   rows for the case, insert the new ones). Re-ingesting the same payload
   therefore leaves identical contents.
3. Collections are independent. A failure on one is logged and recorded,
   the others still run, and the result is reported as partial.

A payload that parses but carries nothing usable is reported as `no_data`
and leaves every collection untouched.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .db.store import CaseStore
from .ingest.factory import map_payload
from .schemas import IngestionResult, IngestStatus, MappedCase, SearchType

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Provider response contained no usable case data"


class CaseNotFoundError(Exception):
    """Raised when ingesting into a case id the store does not know"""
    pass


def merge_case_fields(existing: Dict[str, Any], mapped: MappedCase) -> Dict[str, Any]:
    """
    Fields to write: every populated mapped field whose value differs.

    Args:
        existing: Stored case fields
        mapped: Mapper output

    Returns:
        Dict of field name -> new value
    """
    changes = {}
    for name, value in mapped.case.populated().items():
        if existing.get(name) != value:
            changes[name] = value
    return changes


def ingest_case(
    store: CaseStore,
    case_id: str,
    payload: Any,
    search_type: Optional[SearchType] = None
) -> IngestionResult:
    """
    Map a raw provider payload and apply it to one case.

    Args:
        store: Case store
        case_id: Case to update
        payload: Decoded JSON body from the provider
        search_type: Classifier; detected from the payload when omitted

    Returns:
        IngestionResult with status, changed fields and per-collection counts

    Raises:
        CaseNotFoundError: If the case does not exist
        PayloadStructureError: If the payload is not a JSON object
        UnsupportedSourceError: If the classifier has no per-case mapper
    """
    existing = store.get_case(case_id)
    if existing is None:
        raise CaseNotFoundError(f"Case not found: {case_id}")

    mapped = map_payload(payload, search_type)
    return apply_mapped_case(store, case_id, mapped, existing, payload)


def apply_mapped_case(
    store: CaseStore,
    case_id: str,
    mapped: MappedCase,
    existing: Dict[str, Any],
    payload: Any = None
) -> IngestionResult:
    """Write an already-mapped case; see `ingest_case`"""
    result = IngestionResult(
        case_id=case_id,
        search_type=mapped.search_type,
        status=IngestStatus.SUCCESS,
    )
    bookkeeping = {
        "fetched_data": payload,
        "last_fetched_at": datetime.utcnow(),
    }

    if mapped.is_empty():
        logger.warning(f"No usable data for case {case_id} ({mapped.search_type.value})")
        result.status = IngestStatus.NO_DATA
        store.update_case(case_id, {
            **bookkeeping,
            "fetch_status": result.status.value,
            "fetch_message": NO_DATA_MESSAGE,
        })
        return result

    changes = merge_case_fields(existing, mapped)
    if changes:
        store.update_case(case_id, changes)
    result.fields_updated = sorted(changes)

    for collection, rows in mapped.collections().items():
        try:
            result.collections[collection.value] = store.replace_collection(case_id, collection, rows)
        except Exception as e:
            logger.exception(f"Failed to replace {collection.value} for case {case_id}")
            result.errors[collection.value] = str(e)

    if result.errors:
        result.status = IngestStatus.PARTIAL

    store.update_case(case_id, {
        **bookkeeping,
        "fetch_status": result.status.value,
        "fetch_message": _fetch_message(result),
    })

    logger.info(
        f"Ingested case {case_id}: status={result.status.value} "
        f"fields={len(result.fields_updated)} collections={result.collections} "
        f"errors={list(result.errors)}"
    )
    return result


def _fetch_message(result: IngestionResult) -> str:
    if result.errors:
        return f"Failed collections: {', '.join(sorted(result.errors))}"
    total = sum(result.collections.values())
    return f"Stored {total} rows across {len(result.collections)} collections"
