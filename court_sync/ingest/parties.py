"""
Party List Parsing
==================

Provider party strings bundle every party on one side, numbered, each
optionally followed by its advocate:

    "1) RAM KUMAR Advocate- A.K. SHARMA 2) SITA DEVI Advocate - P. VERMA"

Separators after "Advocate" vary ('-', ':', none) and entries carry
parenthetical annotations such as enrollment numbers. Entries whose name is
empty, purely numeric, or shorter than three characters are dropped.
"""

import logging
import re
from typing import Any, List, Optional

from ..schemas import Party, PartyType

logger = logging.getLogger(__name__)

# "1)" at an entry start; the lookbehind keeps "12)" from splitting at "2)"
ENTRY_SPLIT = re.compile(r"(?<!\d)(?=\d+\))")
LEADING_NUMBER = re.compile(r"^\s*\d+\)\s*")
ADVOCATE_MARKER = re.compile(r"\badvocates?\b\s*[-:]?\s*", re.IGNORECASE)
NUMERIC_ONLY = re.compile(r"^[\d.\s]+$")

# Supreme court lists: one party per line, "1 NAME"
NUMBERED_LINE = re.compile(r"^\s*\d+\s+(.+)$")

MIN_NAME_LENGTH = 3


def _strip_annotation(text: str) -> str:
    """Drop everything from the first '(' on"""
    return text.split("(", 1)[0].strip()


def is_valid_party_name(name: Optional[str]) -> bool:
    if not name:
        return False
    if NUMERIC_ONLY.match(name):
        return False
    return len(name) >= MIN_NAME_LENGTH


def parse_party_list(value: Any, party_type: Optional[PartyType] = None) -> List[Party]:
    """
    Parse a numbered party/advocate string into parties, in source order.

    Args:
        value: Party string; a list of such strings is parsed element-wise
        party_type: Side to tag each party with

    Returns:
        List of Party; empty for empty or absent input
    """
    if isinstance(value, (list, tuple)):
        parties: List[Party] = []
        for item in value:
            parties.extend(parse_party_list(item, party_type))
        return parties

    if not isinstance(value, str) or not value.strip():
        return []

    parties = []
    for entry in ENTRY_SPLIT.split(value):
        if not entry.strip():
            continue
        cleaned = LEADING_NUMBER.sub("", entry, count=1)
        parts = ADVOCATE_MARKER.split(cleaned, maxsplit=1)

        name = _strip_annotation(" ".join(parts[0].split()))
        advocate = None
        if len(parts) > 1:
            advocate = _strip_annotation(" ".join(parts[1].split())) or None

        if not is_valid_party_name(name):
            logger.debug(f"Dropped party entry {entry.strip()!r}")
            continue
        parties.append(Party(name=name, advocate=advocate, party_type=party_type))

    return parties


def parse_numbered_lines(
    value: Any,
    advocates: Optional[str] = None,
    party_type: Optional[PartyType] = None
) -> List[Party]:
    """
    Parse a line-per-party list ("1 NAME\\n2 NAME").

    Advocate text for the whole side, when given, is attached to the first
    party. Text that is not line-numbered falls back to `parse_party_list`.
    """
    if not isinstance(value, str) or not value.strip():
        return []

    names = []
    for line in value.splitlines():
        match = NUMBERED_LINE.match(line)
        if match:
            names.append(_strip_annotation(" ".join(match.group(1).split())))

    if not names:
        parties = parse_party_list(value, party_type)
    else:
        parties = [
            Party(name=name, party_type=party_type)
            for name in names
            if is_valid_party_name(name)
        ]

    if parties and advocates and not parties[0].advocate:
        parties[0] = parties[0].model_copy(update={"advocate": advocates})
    return parties
