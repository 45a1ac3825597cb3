"""
Supreme Court Mapper
====================

Supreme court payloads carry human-labelled sections ("Case Details",
"Diary Info", "Present/Last Listed On", "Case Number") whose values bundle
several facts into one string:

    "Diary No. - 12345/2023 Filed on 07-03-2023 10:22 AM [SECTION: III-B] PENDING"
    "02-03-2021 [HON'BLE MR. JUSTICE A, HON'BLE MR. JUSTICE B and HON'BLE MS. JUSTICE C]"
    "SLP(C) No. 001234 - / 2023 Registered on 10-03-2023 Verified On 11-03-2023"

Each compound string goes through a small, separately testable extractor.
List-valued sections are mapped row by row; every date column goes through
`normalize_date` and "-" placeholders become None.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..schemas import (
    MappedCase, SearchType, CaseFields, PartyType, Order, Hearing, CaseDocument,
    EarlierCourtDetail, TaggedMatter, ListingDate, Notice, Defect,
    JudgementOrder, OfficeReport,
)
from .base import (
    CaseMapper, as_rows, clean_text, derive_status, normalize_cnr, probe,
    probe_text, require_object, row_link, row_text, row_value, with_data_variants,
)
from .dates import normalize_date
from .parties import parse_numbered_lines

logger = logging.getLogger(__name__)

DATE_TOKEN = (
    r"\d{4}-\d{2}-\d{2}"
    r"|\d{1,2}[-/.]\d{1,2}[-/.]\d{4}"
    r"|\d{1,2}(?:st|nd|rd|th)?\s+[A-Za-z]{3,9}\.?,?\s+\d{4}"
)

DIARY_NUMBER = re.compile(r"Diary\s*No\.?\s*[-:]?\s*(.+?)(?=\s*Filed\s+on|\s*\[|$)", re.IGNORECASE | re.DOTALL)
FILED_ON = re.compile(rf"Filed\s+on\s*:?\s*({DATE_TOKEN})", re.IGNORECASE)
SECTION = re.compile(r"SECTION\s*:\s*([^\]]+?)\s*\]", re.IGNORECASE)
TRAILING_STATUS = re.compile(r"\]\s*([A-Za-z]+(?:\s+[A-Za-z]+)*)\s*$")
LEADING_DATE = re.compile(rf"^\s*({DATE_TOKEN})")
BRACKETED = re.compile(r"\[(.*?)\]", re.DOTALL)
BENCH_SEPARATOR = re.compile(r",|\band\b|\n", re.IGNORECASE)
VERIFIED_ON = re.compile(rf"Verified\s+On\s*:?\s*({DATE_TOKEN})", re.IGNORECASE)
REGISTERED_ON = re.compile(rf"Registered\s+on\s*:?\s*({DATE_TOKEN})", re.IGNORECASE)
CATEGORY_CODE = re.compile(r"^\s*(\d+)\s*[-:]")
ADVOCATE_MARKERS = [
    (re.compile(r"\(\s*Dead\s*\)", re.IGNORECASE), "\u2020"),
    (re.compile(r"\(\s*Retired\s*\)", re.IGNORECASE), "(R)"),
    (re.compile(r"\(\s*Elevated[^)]*\)", re.IGNORECASE), "(E)"),
]

CASE_DETAILS_PATHS = with_data_variants(("case_details",), ("Case Details",))
PETITIONER_PATHS = with_data_variants(("petitioner",))
RESPONDENT_PATHS = with_data_variants(("respondent",))
DIARY_NUMBER_PATHS = with_data_variants(("diary_number",))
CNR_PATHS = with_data_variants(("cnr_number",))
STATUS_PATHS = with_data_variants(("status",))


# =============================================================================
# COMPOUND STRING EXTRACTORS
# =============================================================================

@dataclass
class DiaryInfo:
    number: Optional[str] = None
    filed_on: Optional[str] = None
    section: Optional[str] = None
    status: Optional[str] = None
    verified_on: Optional[str] = None


@dataclass
class ListedOn:
    date: Optional[str] = None
    bench: List[str] = field(default_factory=list)


def _text(value: Any) -> Optional[str]:
    """Like clean_text but keeps line breaks, which separate facts here"""
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def parse_diary_info(value: Any) -> DiaryInfo:
    """
    Split a diary string into number, filed-on date, section, status and
    verified-on date.

    Both the "Diary No. - N Filed on ..." form and the bare
    "N\\nFiled on: ..." form are accepted.
    """
    text = _text(value)
    if text is None:
        return DiaryInfo()

    info = DiaryInfo()
    match = DIARY_NUMBER.search(text)
    if match:
        info.number = clean_text(match.group(1))
    else:
        first_line = text.strip().splitlines()[0]
        info.number = clean_text(re.split(r"Filed\s+on|\[", first_line, flags=re.IGNORECASE)[0])

    match = FILED_ON.search(text)
    if match:
        info.filed_on = normalize_date(match.group(1))
    match = SECTION.search(text)
    if match:
        info.section = clean_text(match.group(1))
    match = TRAILING_STATUS.search(text)
    if match:
        info.status = clean_text(match.group(1))
    info.verified_on = parse_verified_on(text)
    return info


def split_bench(value: Any) -> List[str]:
    """Judges separated by commas, 'and' or line breaks"""
    text = _text(value)
    if text is None:
        return []
    members = [clean_text(part) for part in BENCH_SEPARATOR.split(text)]
    return [m for m in members if m]


def parse_listed_on(value: Any) -> ListedOn:
    """Leading listing date plus the bracketed bench members"""
    text = _text(value)
    if text is None:
        return ListedOn()

    listed = ListedOn()
    match = LEADING_DATE.match(text)
    if match:
        listed.date = normalize_date(match.group(1))
    match = BRACKETED.search(text)
    if match:
        listed.bench = split_bench(match.group(1))
    return listed


def parse_verified_on(value: Any) -> Optional[str]:
    text = _text(value)
    if text is None:
        return None
    match = VERIFIED_ON.search(text)
    return normalize_date(match.group(1)) if match else None


def normalize_advocates(value: Any) -> Optional[str]:
    """Shorten advocate status markers: (Dead) -> \u2020, (Retired) -> (R), (Elevated ...) -> (E)"""
    text = clean_text(value)
    if text is None:
        return None
    for pattern, marker in ADVOCATE_MARKERS:
        text = pattern.sub(marker, text)
    return text


def parse_registered_on(value: Any) -> Optional[str]:
    text = _text(value)
    if text is None:
        return None
    match = REGISTERED_ON.search(text)
    return normalize_date(match.group(1)) if match else None


def parse_registration_number(value: Any) -> Optional[str]:
    """Case number text before any 'Registered on'/'Verified On' tail"""
    text = _text(value)
    if text is None:
        return None
    head = re.split(r"Registered\s+on|Verified\s+On", text, flags=re.IGNORECASE)[0]
    return clean_text(head)


def parse_category_code(value: Any) -> Optional[str]:
    text = clean_text(value)
    if text is None:
        return None
    match = CATEGORY_CODE.match(text)
    return match.group(1) if match else None


# =============================================================================
# ROW MAPPERS
# =============================================================================

def _date(row: Dict[str, Any], *names: str) -> Optional[str]:
    return normalize_date(row_text(row, *names))


def map_earlier_court_row(row: Dict[str, Any]) -> EarlierCourtDetail:
    return EarlierCourtDetail(
        sr_no=row_text(row, "sr_no", "#", "s_no"),
        court=row_text(row, "court"),
        agency_state=row_text(row, "agency_state", "state"),
        agency_code=row_text(row, "agency_code"),
        case_number=row_text(row, "case_no", "case_number"),
        order_date=_date(row, "order_date"),
        cnr_designation=row_text(row, "cnr_no_designation", "cnr_designation", "cnr"),
        judgement_challenged=row_text(row, "judgement_challenged", "judgment_challenged"),
        judgement_type=row_text(row, "judgement_type", "judgment_type"),
    )


def map_tagged_matter_row(row: Dict[str, Any]) -> TaggedMatter:
    return TaggedMatter(
        matter_type=row_text(row, "type", "matter_type"),
        case_number=row_text(row, "case_number", "case_no"),
        petitioner=row_text(row, "petitioner_name", "petitioner"),
        respondent=row_text(row, "respondent_name", "respondent"),
        list_status=row_text(row, "list", "list_status"),
        status=row_text(row, "status"),
        entry_date=_date(row, "entry_date"),
    )


def map_listing_date_row(row: Dict[str, Any]) -> ListingDate:
    return ListingDate(
        cl_date=_date(row, "cl_date", "date"),
        misc_or_regular=row_text(row, "misc_regular", "misc_or_regular"),
        stage=row_text(row, "stage"),
        purpose=row_text(row, "purpose"),
        proposed_or_list_in=row_text(row, "proposed_list_in", "proposed_or_list_in"),
        judges=split_bench(row_value(row, "judges", "bench")),
        remarks=row_text(row, "remarks"),
        listed=row_text(row, "listed"),
    )


def map_notice_row(row: Dict[str, Any]) -> Notice:
    return Notice(
        sr_no=row_text(row, "serial_number", "sr_no", "#"),
        process_id=row_text(row, "process_id"),
        notice_type=row_text(row, "notice_type"),
        name=row_text(row, "name"),
        state_district=row_text(row, "state_district"),
        station=row_text(row, "station"),
        issue_date=_date(row, "issue_date"),
        returnable_date=_date(row, "returnable_date"),
        dispatch_date=_date(row, "dispatch_date"),
    )


def map_defect_row(row: Dict[str, Any]) -> Defect:
    return Defect(
        sr_no=row_text(row, "sr_no", "s_no", "#"),
        description=row_text(row, "default", "defect", "description"),
        remarks=row_text(row, "remarks"),
        notification_date=_date(row, "notification_date"),
        removed_on_date=_date(row, "removed_on_date", "removed_on"),
    )


def map_judgement_order_row(row: Dict[str, Any]) -> JudgementOrder:
    return JudgementOrder(
        order_date=_date(row, "order_date", "date"),
        description=row_text(row, "description", "order", "details"),
        link=row_link(row, "link", "pdf_link", "url"),
    )


def map_office_report_row(row: Dict[str, Any]) -> OfficeReport:
    return OfficeReport(
        sr_no=row_text(row, "sr_no", "#"),
        process_id=row_text(row, "process_id"),
        order_date=_date(row, "order_date", "date"),
        received_on=_date(row, "received_on"),
        link=row_link(row, "link", "pdf_link", "url"),
    )


def map_ia_document_row(row: Dict[str, Any]) -> CaseDocument:
    return CaseDocument(
        sr_no=row_text(row, "sr_no", "#"),
        filed_document_name=row_text(row, "document_type", "particular", "document"),
        filed_by=row_text(row, "filed_by"),
        doc_number=row_text(row, "document_no", "ia_no", "document_number"),
        received_date=_date(row, "date", "entered_on", "filed_on"),
        type=row_text(row, "document_type"),
        url=row_link(row, "link", "url"),
    )


# Label variants per list section, matched through normalize_key
SECTION_ROW_MAPPERS = {
    "sc_earlier_courts": (("earlier_court_details", "earlier_courts"), map_earlier_court_row),
    "sc_tagged_matters": (("tagged_matters",), map_tagged_matter_row),
    "sc_listing_dates": (("listing_dates",), map_listing_date_row),
    "sc_notices": (("notices",), map_notice_row),
    "sc_defects": (("defects",), map_defect_row),
    "sc_judgement_orders": (("judgement_orders", "judgment_orders"), map_judgement_order_row),
    "sc_office_reports": (("office_report", "office_reports"), map_office_report_row),
    "documents": (("interlocutory_application_documents", "ia_documents"), map_ia_document_row),
}


# =============================================================================
# MAPPER
# =============================================================================

class SupremeCourtMapper(CaseMapper):
    """
    Mapper for supreme court case-status payloads.
    """

    @property
    def supported_types(self) -> List[SearchType]:
        return [SearchType.SUPREME_COURT]

    def map(self, payload: Any, search_type: Optional[SearchType] = None) -> MappedCase:
        payload = require_object(payload)
        details = probe(payload, CASE_DETAILS_PATHS)
        if not isinstance(details, dict):
            details = {}

        fields = self.map_case_fields(payload, details)

        petitioners = parse_numbered_lines(
            row_value(details, "Petitioner(s)"),
            normalize_advocates(row_value(details, "Petitioner Advocate(s)")),
            PartyType.PETITIONER,
        )
        respondents = parse_numbered_lines(
            row_value(details, "Respondent(s)"),
            normalize_advocates(row_value(details, "Respondent Advocate(s)")),
            PartyType.RESPONDENT,
        )
        fields.petitioner = fields.petitioner or (petitioners[0].name if petitioners else None)
        fields.respondent = fields.respondent or (respondents[0].name if respondents else None)
        fields.petitioner_advocate = petitioners[0].advocate if petitioners else None
        fields.respondent_advocate = respondents[0].advocate if respondents else None

        sections = {
            name: [mapper(row) for row in as_rows(row_value(details, *labels))]
            for name, (labels, mapper) in SECTION_ROW_MAPPERS.items()
        }

        mapped = MappedCase(
            search_type=SearchType.SUPREME_COURT,
            case=fields,
            parties=petitioners + respondents,
            orders=self.orders_from_judgements(sections["sc_judgement_orders"]),
            hearings=self.hearings_from_listings(sections["sc_listing_dates"]),
            **sections,
        )

        logger.info(
            f"Mapped supreme_court payload: diary={fields.diary_number} "
            f"parties={len(mapped.parties)} listings={len(mapped.sc_listing_dates)} "
            f"orders={len(mapped.sc_judgement_orders)} notices={len(mapped.sc_notices)} "
            f"defects={len(mapped.sc_defects)}"
        )
        return mapped

    def map_case_fields(self, payload: Dict[str, Any], details: Dict[str, Any]) -> CaseFields:
        diary = parse_diary_info(row_value(details, "Diary Info", "Diary Number"))
        listed = parse_listed_on(row_value(details, "Present/Last Listed On"))
        case_number = row_value(details, "Case Number")
        category = row_text(details, "Category")

        petitioner = probe_text(payload, PETITIONER_PATHS)
        respondent = probe_text(payload, RESPONDENT_PATHS)
        title = None
        if petitioner and respondent:
            title = f"{petitioner} vs. {respondent}"

        stage = row_text(details, "Status/Stage") or probe_text(payload, STATUS_PATHS)

        return CaseFields(
            cnr_number=normalize_cnr(row_text(details, "CNR Number") or probe_text(payload, CNR_PATHS)),
            case_title=title or row_text(details, "Case Title"),
            registration_number=parse_registration_number(case_number),
            registration_date=parse_registered_on(case_number),
            verification_date=parse_verified_on(case_number) or diary.verified_on,
            stage=stage,
            status=derive_status(stage),
            category=category,
            category_code=parse_category_code(category),
            next_hearing_date=normalize_date(row_text(
                details, "Tentatively case may be listed on (likely to be listed on)", "Next Date",
            )),
            coram=", ".join(listed.bench) or None,
            court_type="supreme court",
            petitioner=petitioner,
            respondent=respondent,
            diary_number=diary.number or probe_text(payload, DIARY_NUMBER_PATHS),
            diary_filed_on=diary.filed_on,
            diary_section=diary.section,
            diary_status=diary.status,
            present_last_listed_on=listed.date,
            bench_composition=listed.bench,
        )

    @staticmethod
    def orders_from_judgements(judgements: List[JudgementOrder]) -> List[Order]:
        return [
            Order(order_date=j.order_date, details=j.description, link=j.link)
            for j in judgements
            if j.order_date or j.description or j.link
        ]

    @staticmethod
    def hearings_from_listings(listings: List[ListingDate]) -> List[Hearing]:
        return [
            Hearing(
                date=listing.cl_date,
                judge=", ".join(listing.judges) or None,
                cause_list_type=listing.misc_or_regular,
                purpose=listing.purpose or listing.stage,
            )
            for listing in listings
            if listing.cl_date
        ]
