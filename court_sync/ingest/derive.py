"""
Order and Hearing Derivation
============================

Locates the orders and hearing-history arrays across the key paths providers
are known to use, and synthesizes orders when no orders array exists.

Derived orders come from:
- hearing rows whose purpose mentions an order, judgment, disposal or final stage
- document rows whose name or type mentions an order or judgment

Each derived order carries `is_derived=True` and a summary naming its source,
so consumers can tell authoritative rows from inferred ones.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from ..schemas import CaseDocument, Hearing, Order
from .base import probe_rows, row_link, row_text, with_data_variants
from .dates import normalize_date

logger = logging.getLogger(__name__)

DERIVED_FROM_HEARINGS = "Derived from hearing history"
DERIVED_FROM_DOCUMENTS = "Derived from documents"

ORDER_PATHS = with_data_variants(
    ("order_details",),
    ("orders",),
    ("case_orders",),
    ("order_history",),
    ("interim_orders",),
    ("final_orders",),
    ("judgement_orders",),
    ("judgment_orders",),
    ("case_status", "orders"),
    ("case_status_details", "orders"),
)

HEARING_PATHS = with_data_variants(
    ("case_history",),
    ("history_of_case_hearing",),
    ("hearings",),
    ("hearing_history",),
    ("history",),
)

# Matched as word prefixes: a preceding letter blocks "border", while "_" and digits do not
HEARING_ORDER_PATTERN = re.compile(r"(?<![a-z])(?:order|judge?ment|disposed|final)", re.IGNORECASE)
DOCUMENT_ORDER_PATTERN = re.compile(r"(?<![a-z])(?:order|judge?ment)", re.IGNORECASE)


# =============================================================================
# LOCATING
# =============================================================================

def map_order_row(row: Dict[str, Any]) -> Order:
    return Order(
        judge=row_text(row, "judge", "judge_name", "coram"),
        hearing_date=normalize_date(row_text(row, "hearing_date", "date_of_hearing")),
        order_date=normalize_date(row_text(row, "order_date", "date_of_order", "date")),
        order_number=row_text(row, "order_number", "order_no", "sr_no"),
        bench=row_text(row, "bench", "bench_type"),
        details=row_text(row, "order_details", "details", "order", "description"),
        summary=row_text(row, "summary"),
        link=row_link(row, "order_link", "pdf_link", "link", "url", "pdf_url"),
    )


def map_hearing_row(row: Dict[str, Any]) -> Hearing:
    return Hearing(
        date=normalize_date(row_text(row, "hearing_date", "date", "next_date")),
        judge=row_text(row, "judge", "judge_name", "coram"),
        cause_list_type=row_text(row, "cause_list_type", "list_type"),
        business_on_date=normalize_date(row_text(row, "business_on_date", "business_date")),
        purpose=row_text(row, "purpose_of_hearing", "purpose", "hearing_purpose", "business"),
    )


def locate_orders(payload: Any) -> Optional[List[Order]]:
    """
    Authoritative orders, or None when the payload has no orders array.

    An empty array counts as absent.
    """
    rows = probe_rows(payload, ORDER_PATHS)
    if rows is None:
        return None
    return [map_order_row(row) for row in rows]


def locate_hearings(payload: Any) -> List[Hearing]:
    """Hearing history rows; rows without a date or purpose are dropped"""
    rows = probe_rows(payload, HEARING_PATHS) or []
    hearings = []
    for row in rows:
        hearing = map_hearing_row(row)
        if hearing.date or hearing.business_on_date or hearing.purpose:
            hearings.append(hearing)
    return hearings


# =============================================================================
# DERIVING
# =============================================================================

def orders_from_hearings(hearings: List[Hearing]) -> List[Order]:
    derived = []
    for hearing in hearings:
        if not hearing.purpose or not HEARING_ORDER_PATTERN.search(hearing.purpose):
            continue
        derived.append(Order(
            judge=hearing.judge,
            hearing_date=hearing.date,
            order_date=hearing.business_on_date or hearing.date,
            details=hearing.purpose,
            summary=DERIVED_FROM_HEARINGS,
            is_derived=True,
        ))
    return derived


def orders_from_documents(documents: List[CaseDocument]) -> List[Order]:
    derived = []
    for document in documents:
        label = " ".join(filter(None, [document.filed_document_name, document.type]))
        if not label or not DOCUMENT_ORDER_PATTERN.search(label):
            continue
        derived.append(Order(
            order_date=document.received_date,
            order_number=document.doc_number,
            details=document.filed_document_name or document.type,
            summary=DERIVED_FROM_DOCUMENTS,
            link=document.url,
            is_derived=True,
        ))
    return derived


def derive_orders(
    payload: Any,
    hearings: List[Hearing],
    documents: List[CaseDocument]
) -> List[Order]:
    """
    Orders for a case: the authoritative array when present, else derived.

    Args:
        payload: Raw provider payload
        hearings: Already-mapped hearing history
        documents: Already-mapped documents

    Returns:
        List of Order, authoritative or tagged as derived
    """
    authoritative = locate_orders(payload)
    if authoritative is not None:
        return authoritative

    derived = orders_from_hearings(hearings) + orders_from_documents(documents)
    if derived:
        logger.info(
            f"No orders array in payload; derived {len(derived)} orders "
            f"from {len(hearings)} hearings and {len(documents)} documents"
        )
    return derived
