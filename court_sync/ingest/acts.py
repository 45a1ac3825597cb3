"""
Acts and Sections
=================

Act/section rows arrive as one object or an array, under `under_act`/`act`
and `under_section`/`section` style keys.
"""

from typing import Any, List

from ..schemas import ActOrSection
from .base import as_rows, row_text

ACT_KEYS = ("under_act", "under_acts", "act", "acts", "act_name")
SECTION_KEYS = ("under_section", "under_sections", "section", "sections")


def parse_acts_and_sections(value: Any) -> List[ActOrSection]:
    """Normalize act/section rows; pairs with neither value are dropped"""
    pairs = []
    for row in as_rows(value):
        pair = ActOrSection(
            under_act=row_text(row, *ACT_KEYS),
            under_section=row_text(row, *SECTION_KEYS),
        )
        if pair.under_act or pair.under_section:
            pairs.append(pair)
    return pairs
