"""
Ingest Pipeline
===============

Payload mapping for district, high and supreme court feeds.
Produces one canonical output: case fields + child collections.
"""

from .base import CaseMapper, MapperError, PayloadStructureError, UnsupportedSourceError
from .dates import normalize_date
from .parties import parse_party_list, parse_numbered_lines
from .acts import parse_acts_and_sections
from .derive import derive_orders, locate_orders, locate_hearings
from .court_record import CourtRecordMapper
from .supreme_court import (
    SupremeCourtMapper, parse_diary_info, parse_listed_on, parse_verified_on, parse_registered_on,
    normalize_advocates,
)
from .factory import get_mapper, map_payload, detect_search_type, is_supported

__all__ = [
    # Base types
    "CaseMapper", "MapperError", "PayloadStructureError", "UnsupportedSourceError",
    # Parsers
    "normalize_date", "parse_party_list", "parse_numbered_lines", "parse_acts_and_sections",
    "derive_orders", "locate_orders", "locate_hearings",
    "parse_diary_info", "parse_listed_on", "parse_verified_on", "parse_registered_on",
    "normalize_advocates",
    # Mappers
    "CourtRecordMapper", "SupremeCourtMapper",
    # Factory
    "get_mapper", "map_payload", "detect_search_type", "is_supported",
]
