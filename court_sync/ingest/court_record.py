"""
District / High Court Mapper
============================

Maps eCourts-style payloads (district court, high court, district cause list)
onto the canonical case record and the seven general child collections.

District and high court feeds use different section names for the same
facts (`case_info` vs `case_details`, `case_status` vs `case_status_details`,
`category_info` vs `category_details`), may wrap everything in `data`, and
sometimes flatten fields to the top level. Every canonical field is resolved
by probing its known locations in a fixed priority order.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..schemas import (
    MappedCase, SearchType, CaseFields, PartyType,
    InterlocutoryApplication, Objection, CaseDocument, ActOrSection,
)
from .acts import parse_acts_and_sections
from .base import (
    CaseMapper, Path, as_rows, probe, probe_rows, probe_text, require_object,
    row_link, row_text, with_data_variants, normalize_cnr, derive_status,
)
from .dates import normalize_date
from .derive import derive_orders, locate_hearings
from .parties import parse_party_list

logger = logging.getLogger(__name__)

DEFAULT_IA_STATUS = "Pending"

CASE_SECTIONS = ("case_info", "case_details")
STATUS_SECTIONS = ("case_status", "case_status_details")
CATEGORY_SECTIONS = ("category_info", "category_details")


def field_paths(
    keys: Sequence[str],
    sections: Sequence[str] = (),
    top_level: bool = True
) -> List[Path]:
    """
    Candidate locations for one field: each key in each section, then each
    key at the top level, every one also tried under `data`.
    """
    paths: List[Path] = []
    for section in sections:
        for key in keys:
            paths.append((section, key))
    if top_level:
        for key in keys:
            paths.append((key,))
    return with_data_variants(*paths)


# Ordered candidate locations per canonical field. Order is priority.
FIELD_PATHS: Dict[str, List[Path]] = {
    "cnr_number": field_paths(("cnr_number", "cnr", "CNR"), CASE_SECTIONS),
    "case_title": field_paths(("case_title", "title", "matter_title"), CASE_SECTIONS),
    "filing_number": field_paths(("filing_number", "filing_no"), CASE_SECTIONS),
    "filing_date": field_paths(("filing_date", "date_of_filing"), CASE_SECTIONS),
    "registration_number": field_paths(("registration_number", "reg_no"), CASE_SECTIONS),
    "registration_date": field_paths(("registration_date", "date_of_registration"), CASE_SECTIONS),
    "stage": field_paths(("stage_of_case", "case_stage", "stage"), STATUS_SECTIONS + CASE_SECTIONS),
    "first_hearing_date": field_paths(
        ("first_hearing_date", "date_of_first_hearing", "first_listing_date"),
        STATUS_SECTIONS + CASE_SECTIONS,
    ),
    "next_hearing_date": field_paths(
        ("next_hearing_date", "date_next_hearing", "next_date"),
        STATUS_SECTIONS + CASE_SECTIONS,
    ),
    "coram": field_paths(("coram", "judge_name"), STATUS_SECTIONS + CASE_SECTIONS),
    "bench_type": field_paths(("bench_type",), STATUS_SECTIONS + CASE_SECTIONS),
    "judicial_branch": field_paths(("judicial_branch",), STATUS_SECTIONS + CASE_SECTIONS),
    "state": field_paths(("state", "state_name"), STATUS_SECTIONS + CASE_SECTIONS),
    "district": field_paths(("district", "district_name"), STATUS_SECTIONS + CASE_SECTIONS),
    "category": field_paths(("category", "case_category"), CATEGORY_SECTIONS),
    "sub_category": field_paths(("sub_category", "case_sub_category"), CATEGORY_SECTIONS),
    "case_type": field_paths(("case_type", "type"), CASE_SECTIONS, top_level=False)
    + with_data_variants(("case_type",)),
    "court_and_judge": field_paths(
        ("court_number_and_judge", "court_and_judge", "court", "court_name"),
        STATUS_SECTIONS,
    ),
}

DATE_FIELDS = {"filing_date", "registration_date", "first_hearing_date", "next_hearing_date"}

PETITIONER_PATHS = with_data_variants(
    ("petitioner_and_advocate",),
    ("petitioner_and_advocate_details",),
    ("petitioners",),
    ("parties", "petitioner"),
    ("petitioner",),
)
RESPONDENT_PATHS = with_data_variants(
    ("respondent_and_advocate",),
    ("respondent_and_advocate_details",),
    ("respondents",),
    ("parties", "respondent"),
    ("respondent",),
)
IA_PATHS = with_data_variants(("ia_details",), ("ia_detail",), ("interlocutory_applications",))
ACT_PATHS = with_data_variants(
    ("acts",), ("acts_and_sections",), ("act_details",), ("under_acts",),
    ("case_info", "acts"), ("case_details", "acts"),
)
ACT_FIELD_PATHS = with_data_variants(
    ("case_info",), ("case_details",), (),
)
OBJECTION_PATHS = with_data_variants(("objections",), ("objection_details",), ("objection",))
DOCUMENT_PATHS = with_data_variants(
    ("documents",), ("document_details",), ("documents_filed",), ("document_history",),
)


# =============================================================================
# ROW MAPPERS
# =============================================================================

def map_ia_rows(value: Any) -> List[InterlocutoryApplication]:
    """IA entries; a single object or an array. Entries with no number and no party are dropped"""
    applications = []
    for row in as_rows(value):
        ia = InterlocutoryApplication(
            ia_number=row_text(row, "ia_number", "ia_no", "application_number"),
            party=row_text(row, "party", "party_name", "filed_by"),
            date_of_filing=normalize_date(row_text(row, "date_of_filing", "filing_date")),
            next_date=normalize_date(row_text(row, "next_date", "next_hearing_date")),
            status=row_text(row, "ia_status", "status"),
        )
        if not ia.ia_number and not ia.party:
            continue
        if not ia.status:
            ia.status = DEFAULT_IA_STATUS
        applications.append(ia)
    return applications


def map_objection_row(row: Dict[str, Any]) -> Objection:
    return Objection(
        sr_no=row_text(row, "sr_no", "s_no", "serial_no"),
        text=row_text(row, "objection", "objection_text", "text", "description"),
        receipt_date=normalize_date(row_text(row, "receipt_date", "objection_receipt_date")),
        scrutiny_date=normalize_date(row_text(row, "scrutiny_date")),
        compliance_date=normalize_date(
            row_text(row, "objection_compliance_date", "compliance_date")
        ),
    )


def map_document_row(row: Dict[str, Any]) -> CaseDocument:
    return CaseDocument(
        sr_no=row_text(row, "sr_no", "s_no", "serial_no"),
        filed_document_name=row_text(row, "document_filed", "document_name", "filed_document", "document"),
        filed_by=row_text(row, "filed_by"),
        advocate=row_text(row, "advocate", "advocate_name"),
        doc_number=row_text(row, "document_no", "document_number", "doc_no"),
        received_date=normalize_date(row_text(row, "date_of_receiving", "receiving_date", "received_date", "date")),
        type=row_text(row, "document_type", "type"),
        url=row_link(row, "document_url", "url", "link", "pdf_url"),
    )


# =============================================================================
# MAPPER
# =============================================================================

class CourtRecordMapper(CaseMapper):
    """
    Mapper for district court, high court and district cause-list payloads.
    """

    @property
    def supported_types(self) -> List[SearchType]:
        return [SearchType.DISTRICT_COURT, SearchType.HIGH_COURT, SearchType.DISTRICT_CAUSE_LIST]

    def map(self, payload: Any, search_type: Optional[SearchType] = None) -> MappedCase:
        payload = require_object(payload)
        search_type = search_type or SearchType.DISTRICT_COURT

        fields = self.map_case_fields(payload)
        fields.court_type = search_type.value.replace("_", " ")

        petitioners = parse_party_list(probe(payload, PETITIONER_PATHS), PartyType.PETITIONER)
        respondents = parse_party_list(probe(payload, RESPONDENT_PATHS), PartyType.RESPONDENT)
        self._apply_party_summary(fields, petitioners, respondents)

        acts = self.map_acts(payload)
        if acts:
            fields.under_act = fields.under_act or acts[0].under_act
            fields.under_section = fields.under_section or acts[0].under_section

        hearings = locate_hearings(payload)
        documents = [map_document_row(row) for row in probe_rows(payload, DOCUMENT_PATHS) or []]
        documents = [d for d in documents if d.filed_document_name or d.doc_number or d.url]
        objections = [map_objection_row(row) for row in probe_rows(payload, OBJECTION_PATHS) or []]
        objections = [o for o in objections if o.text or o.sr_no]

        mapped = MappedCase(
            search_type=search_type,
            case=fields,
            parties=petitioners + respondents,
            interlocutory_applications=map_ia_rows(probe(payload, IA_PATHS)),
            acts=acts,
            orders=derive_orders(payload, hearings, documents),
            hearings=hearings,
            objections=objections,
            documents=documents,
        )

        logger.info(
            f"Mapped {search_type.value} payload: "
            f"petitioners={len(petitioners)} respondents={len(respondents)} "
            f"ias={len(mapped.interlocutory_applications)} acts={len(acts)} "
            f"orders={len(mapped.orders)} hearings={len(hearings)} "
            f"objections={len(objections)} documents={len(documents)}"
        )
        return mapped

    def map_case_fields(self, payload: Dict[str, Any]) -> CaseFields:
        """Resolve every canonical field; unresolved fields stay None"""
        values: Dict[str, Any] = {}
        for name, paths in FIELD_PATHS.items():
            value = probe_text(payload, paths)
            values[name] = normalize_date(value) if name in DATE_FIELDS else value

        values["cnr_number"] = normalize_cnr(values["cnr_number"])
        values["status"] = derive_status(values["stage"])
        return CaseFields(**values)

    def map_acts(self, payload: Dict[str, Any]) -> List[ActOrSection]:
        acts = parse_acts_and_sections(probe(payload, ACT_PATHS))
        if acts:
            return acts
        # Flat under_act/under_section on the case section or top level
        for path in ACT_FIELD_PATHS:
            section = probe(payload, [path])
            acts = parse_acts_and_sections(section if isinstance(section, dict) else None)
            if acts:
                return acts
        return []

    @staticmethod
    def _apply_party_summary(fields: CaseFields, petitioners, respondents) -> None:
        if petitioners:
            fields.petitioner = petitioners[0].name
            fields.petitioner_advocate = petitioners[0].advocate
        if respondents:
            fields.respondent = respondents[0].name
            fields.respondent_advocate = respondents[0].advocate
        if not fields.case_title and petitioners and respondents:
            fields.case_title = f"{petitioners[0].name} vs {respondents[0].name}"
