"""
Ingest Base Types
=================

Shared helpers for all payload mappers:

- exception hierarchy
- text cleaning with null-token handling
- the ordered path probe ("try N known key locations, first usable value wins")
- tolerant row access for human-labelled column names
- the abstract mapper interface
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..schemas import CaseStatus, MappedCase, SearchType

logger = logging.getLogger(__name__)

Path = Tuple[str, ...]


class MapperError(Exception):
    """Base exception for mapper errors"""
    pass


class PayloadStructureError(MapperError):
    """Payload is not a JSON object the mappers can walk"""
    pass


class UnsupportedSourceError(MapperError):
    """Classifier has no per-case mapper"""
    pass


# Values providers use to mean "nothing here"
NULL_TOKENS = frozenset({
    "", "-", "--", "—", "#", "n/a", "na", "nil", "null", "undefined",
})


def is_null_token(value: Any) -> bool:
    """True for None and for strings that are placeholders for missing data"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() in NULL_TOKENS
    return False


def clean_text(value: Any) -> Optional[str]:
    """
    Normalize a scalar to a single-line string.

    Collapses whitespace and maps null tokens to None. Containers are not
    text and also give None.
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    if isinstance(value, bool):
        return None
    text = " ".join(str(value).split())
    if is_null_token(text):
        return None
    return text


def is_present(value: Any) -> bool:
    """A probed value counts only if it carries something"""
    if value is None:
        return False
    if isinstance(value, str):
        return not is_null_token(value)
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


# =============================================================================
# PATH PROBING
# =============================================================================

def get_path(payload: Any, path: Sequence[str]) -> Any:
    """Walk nested dicts; any missing step gives None"""
    current = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def with_data_variants(*paths: Sequence[str]) -> List[Path]:
    """
    Expand every path into [path, ("data",) + path].

    Providers wrap the same body in a `data` envelope inconsistently; the
    unwrapped location is tried first for each path.
    """
    expanded: List[Path] = []
    for path in paths:
        path = tuple(path)
        expanded.append(path)
        expanded.append(("data",) + path)
    return expanded


def probe(payload: Any, paths: Iterable[Sequence[str]], default: Any = None) -> Any:
    """
    Return the first usable value found along `paths`, in order.

    The order of `paths` is the priority order: when several locations are
    populated and disagree, the earliest one wins.
    """
    for path in paths:
        value = get_path(payload, path)
        if is_present(value):
            return value
    return default


def probe_text(payload: Any, paths: Iterable[Sequence[str]]) -> Optional[str]:
    """Probe and clean; non-text hits are skipped"""
    for path in paths:
        value = clean_text(get_path(payload, path))
        if value is not None:
            return value
    return None


def probe_rows(payload: Any, paths: Iterable[Sequence[str]]) -> Optional[List[Dict[str, Any]]]:
    """
    Probe for a list of row objects.

    A single object is accepted as a one-row list. Returns None when no path
    holds any row, so callers can tell "absent" from "found".
    """
    for path in paths:
        value = get_path(payload, path)
        rows = as_rows(value)
        if rows:
            return rows
    return None


def as_rows(value: Any) -> List[Dict[str, Any]]:
    """Tolerate a single object or an array; keep only dict entries"""
    if isinstance(value, dict):
        return [value] if value else []
    if isinstance(value, list):
        return [row for row in value if isinstance(row, dict) and row]
    return []


# =============================================================================
# ROW ACCESS
# =============================================================================

_KEY_NOISE = re.compile(r"[^a-z0-9]")


def normalize_key(key: str) -> str:
    """'Order Date', 'order_date' and 'ORDER-DATE' all become 'orderdate'"""
    return _KEY_NOISE.sub("", str(key).lower())


def row_value(row: Dict[str, Any], *names: str) -> Any:
    """
    First usable value in `row` under any of `names`.

    Names are compared after `normalize_key`, so callers list logical
    variants only, not spelling variants.
    """
    if not isinstance(row, dict):
        return None
    index = {normalize_key(k): v for k, v in row.items()}
    for name in names:
        value = index.get(normalize_key(name))
        if is_present(value):
            return value
    return None


def row_text(row: Dict[str, Any], *names: str) -> Optional[str]:
    return clean_text(row_value(row, *names))


def row_link(row: Dict[str, Any], *names: str) -> Optional[str]:
    """Links come either as plain strings or as {text, url} objects"""
    value = row_value(row, *names)
    if isinstance(value, dict):
        value = value.get("url") or value.get("href") or value.get("link")
    return clean_text(value)


def require_object(payload: Any) -> Dict[str, Any]:
    """Reject payloads that are not JSON objects"""
    if not isinstance(payload, dict):
        raise PayloadStructureError(
            f"Expected a JSON object payload, got {type(payload).__name__}"
        )
    if "data" in payload and payload["data"] is not None and not isinstance(payload["data"], dict):
        raise PayloadStructureError(
            f"'data' wrapper must be an object, got {type(payload['data']).__name__}"
        )
    return payload


def normalize_cnr(value: Any) -> Optional[str]:
    """CNRs are stored without dashes or whitespace, upper-cased"""
    text = clean_text(value)
    if text is None:
        return None
    cnr = re.sub(r"[-\s]", "", text).upper()
    return cnr or None


DISPOSED_PATTERN = re.compile(r"dispos|decided|dismiss|withdrawn|close", re.IGNORECASE)


def derive_status(stage: Optional[str]) -> Optional[CaseStatus]:
    """pending/disposed from free-text stage"""
    if not stage:
        return None
    if DISPOSED_PATTERN.search(stage):
        return CaseStatus.DISPOSED
    return CaseStatus.PENDING


# =============================================================================
# MAPPER INTERFACE
# =============================================================================

class CaseMapper(ABC):
    """
    Abstract base class for provider payload mappers.
    """

    @property
    @abstractmethod
    def supported_types(self) -> List[SearchType]:
        """Classifiers this mapper handles"""
        pass

    @abstractmethod
    def map(self, payload: Any, search_type: Optional[SearchType] = None) -> MappedCase:
        """
        Map a raw provider payload.

        Args:
            payload: Decoded JSON body from the provider
            search_type: Classifier the payload was fetched with

        Returns:
            MappedCase with canonical fields and child rows

        Raises:
            PayloadStructureError: If the payload is not a JSON object
        """
        pass

    def can_map(self, search_type: SearchType) -> bool:
        """Check if this mapper supports the classifier"""
        return search_type in self.supported_types
