"""
Mapper Factory
==============

Selects the mapper for a provider classifier and maps payloads.
"""

import logging
from typing import Any, Optional

from ..schemas import MappedCase, SearchType
from .base import CaseMapper, UnsupportedSourceError, get_path, probe_text, with_data_variants
from .court_record import CourtRecordMapper
from .supreme_court import SupremeCourtMapper

logger = logging.getLogger(__name__)


# Initialize mappers
_court_record_mapper = CourtRecordMapper()
_supreme_court_mapper = SupremeCourtMapper()

# Classifier to mapper mapping
_mappers = {
    SearchType.HIGH_COURT: _court_record_mapper,
    SearchType.DISTRICT_COURT: _court_record_mapper,
    SearchType.DISTRICT_CAUSE_LIST: _court_record_mapper,
    SearchType.SUPREME_COURT: _supreme_court_mapper,
}

SUPREME_COURT_CNR_PREFIX = "SCIN"

_DIARY_PATHS = with_data_variants(
    ("diary_number",), ("case_details", "Diary Number"), ("case_details", "Diary Info"),
)
_CNR_PATHS = with_data_variants(
    ("cnr_number",), ("case_details", "CNR Number"),
)


def get_mapper(search_type: SearchType) -> Optional[CaseMapper]:
    """
    Get mapper for a classifier.

    Args:
        search_type: Provider classifier

    Returns:
        CaseMapper or None if the classifier has no per-case mapper
    """
    return _mappers.get(search_type)


def detect_search_type(payload: Any) -> SearchType:
    """
    Guess the classifier of an untagged payload.

    Supreme court payloads carry a diary number or an SCIN-prefixed CNR;
    anything else is treated as a district court payload.
    """
    if probe_text(payload, _DIARY_PATHS):
        return SearchType.SUPREME_COURT
    cnr = probe_text(payload, _CNR_PATHS) or ""
    if cnr.replace("-", "").upper().startswith(SUPREME_COURT_CNR_PREFIX):
        return SearchType.SUPREME_COURT
    if isinstance(get_path(payload, ("search_type",)), str):
        try:
            return SearchType(payload["search_type"])
        except ValueError:
            logger.warning(f"Ignoring unknown search_type {payload['search_type']!r} in payload")
    return SearchType.DISTRICT_COURT


def map_payload(payload: Any, search_type: Optional[SearchType] = None) -> MappedCase:
    """
    Map a raw provider payload with the mapper for its classifier.

    Args:
        payload: Decoded JSON body from the provider
        search_type: Classifier; detected from the payload when omitted

    Returns:
        MappedCase

    Raises:
        UnsupportedSourceError: If the classifier has no per-case mapper
        PayloadStructureError: If the payload is not a JSON object
    """
    if search_type is None:
        search_type = detect_search_type(payload)
        logger.debug(f"Detected search type {search_type.value}")

    if not is_supported(search_type):
        raise UnsupportedSourceError(
            f"No case mapper for search type {search_type.value}. "
            f"Supported: {[t.value for t in _mappers]}"
        )
    return get_mapper(search_type).map(payload, search_type)


def is_supported(search_type: SearchType) -> bool:
    """Check if a classifier has a per-case mapper"""
    return search_type in _mappers
