"""
Pydantic Schemas for Court Sync
===============================

Canonical, provider-independent shapes produced by the mappers.

Every date field holds an ISO `YYYY-MM-DD` string or None. Child rows keep
the order in which they appeared in the provider payload.
"""

from datetime import datetime
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================

class SearchType(str, Enum):
    """Provider feed classifier"""
    HIGH_COURT = "high_court"
    DISTRICT_COURT = "district_court"
    SUPREME_COURT = "supreme_court"
    GUJARAT_DISPLAY_BOARD = "gujarat_display_board"
    DISTRICT_CAUSE_LIST = "district_cause_list"


class PartyType(str, Enum):
    """Side of the litigation"""
    PETITIONER = "petitioner"
    RESPONDENT = "respondent"


class CaseStatus(str, Enum):
    """Coarse lifecycle status derived from the stage text"""
    PENDING = "pending"
    DISPOSED = "disposed"


class IngestStatus(str, Enum):
    """Outcome of one ingestion"""
    SUCCESS = "success"
    PARTIAL = "partial"      # at least one collection failed to persist
    NO_DATA = "no_data"      # payload parsed but carried nothing usable


class Collection(str, Enum):
    """Child collections replaced on every ingestion"""
    PARTIES = "parties"
    INTERLOCUTORY_APPLICATIONS = "interlocutory_applications"
    ACTS = "acts"
    ORDERS = "orders"
    HEARINGS = "hearings"
    OBJECTIONS = "objections"
    DOCUMENTS = "documents"
    # Supreme court only
    SC_EARLIER_COURTS = "sc_earlier_courts"
    SC_TAGGED_MATTERS = "sc_tagged_matters"
    SC_LISTING_DATES = "sc_listing_dates"
    SC_NOTICES = "sc_notices"
    SC_DEFECTS = "sc_defects"
    SC_JUDGEMENT_ORDERS = "sc_judgement_orders"
    SC_OFFICE_REPORTS = "sc_office_reports"


GENERAL_COLLECTIONS: List[Collection] = [
    Collection.PARTIES,
    Collection.INTERLOCUTORY_APPLICATIONS,
    Collection.ACTS,
    Collection.ORDERS,
    Collection.HEARINGS,
    Collection.OBJECTIONS,
    Collection.DOCUMENTS,
]

SUPREME_COURT_COLLECTIONS: List[Collection] = [
    Collection.PARTIES,
    Collection.INTERLOCUTORY_APPLICATIONS,
    Collection.ORDERS,
    Collection.HEARINGS,
    Collection.DOCUMENTS,
    Collection.SC_EARLIER_COURTS,
    Collection.SC_TAGGED_MATTERS,
    Collection.SC_LISTING_DATES,
    Collection.SC_NOTICES,
    Collection.SC_DEFECTS,
    Collection.SC_JUDGEMENT_ORDERS,
    Collection.SC_OFFICE_REPORTS,
]


# =============================================================================
# CASE RECORD
# =============================================================================

class CaseFields(BaseModel):
    """
    Canonical case-level fields.

    Merged into the stored case with overwrite-if-non-empty semantics, so a
    None here never clears a stored value.
    """
    cnr_number: Optional[str] = None
    case_title: Optional[str] = None
    filing_number: Optional[str] = None
    filing_date: Optional[str] = None
    registration_number: Optional[str] = None
    registration_date: Optional[str] = None
    stage: Optional[str] = None
    status: Optional[CaseStatus] = None
    first_hearing_date: Optional[str] = None
    next_hearing_date: Optional[str] = None
    coram: Optional[str] = None
    bench_type: Optional[str] = None
    judicial_branch: Optional[str] = None
    state: Optional[str] = None
    district: Optional[str] = None
    category: Optional[str] = None
    sub_category: Optional[str] = None
    case_type: Optional[str] = None
    court_and_judge: Optional[str] = None
    court_type: Optional[str] = None
    petitioner: Optional[str] = None
    petitioner_advocate: Optional[str] = None
    respondent: Optional[str] = None
    respondent_advocate: Optional[str] = None
    under_act: Optional[str] = None
    under_section: Optional[str] = None

    # Supreme court
    diary_number: Optional[str] = None
    diary_filed_on: Optional[str] = None
    diary_section: Optional[str] = None
    diary_status: Optional[str] = None
    present_last_listed_on: Optional[str] = None
    bench_composition: List[str] = Field(default_factory=list)
    category_code: Optional[str] = None
    verification_date: Optional[str] = None

    def populated(self) -> Dict[str, Any]:
        """Fields carrying a usable value (non-None, non-blank, non-empty)"""
        values = {}
        for name, value in self.model_dump(mode="json").items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            if isinstance(value, list) and not value:
                continue
            values[name] = value
        return values


# =============================================================================
# CHILD ROWS - GENERAL
# =============================================================================

class Party(BaseModel):
    """Petitioner or respondent with optional advocate"""
    name: str
    advocate: Optional[str] = None
    party_type: Optional[PartyType] = None


class InterlocutoryApplication(BaseModel):
    ia_number: Optional[str] = None
    party: Optional[str] = None
    date_of_filing: Optional[str] = None
    next_date: Optional[str] = None
    status: Optional[str] = None


class ActOrSection(BaseModel):
    under_act: Optional[str] = None
    under_section: Optional[str] = None


class Order(BaseModel):
    """
    Court order.

    Derived orders are synthesized from hearing history or documents when the
    payload has no orders array; `summary` then names the source.
    """
    judge: Optional[str] = None
    hearing_date: Optional[str] = None
    order_date: Optional[str] = None
    order_number: Optional[str] = None
    bench: Optional[str] = None
    details: Optional[str] = None
    summary: Optional[str] = None
    link: Optional[str] = None
    is_derived: bool = False


class Hearing(BaseModel):
    date: Optional[str] = None
    judge: Optional[str] = None
    cause_list_type: Optional[str] = None
    business_on_date: Optional[str] = None
    purpose: Optional[str] = None


class Objection(BaseModel):
    sr_no: Optional[str] = None
    text: Optional[str] = None
    receipt_date: Optional[str] = None
    scrutiny_date: Optional[str] = None
    compliance_date: Optional[str] = None


class CaseDocument(BaseModel):
    sr_no: Optional[str] = None
    filed_document_name: Optional[str] = None
    filed_by: Optional[str] = None
    advocate: Optional[str] = None
    doc_number: Optional[str] = None
    received_date: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None


# =============================================================================
# CHILD ROWS - SUPREME COURT
# =============================================================================

class EarlierCourtDetail(BaseModel):
    sr_no: Optional[str] = None
    court: Optional[str] = None
    agency_state: Optional[str] = None
    agency_code: Optional[str] = None
    case_number: Optional[str] = None
    order_date: Optional[str] = None
    cnr_designation: Optional[str] = None
    judgement_challenged: Optional[str] = None
    judgement_type: Optional[str] = None


class TaggedMatter(BaseModel):
    matter_type: Optional[str] = None
    case_number: Optional[str] = None
    petitioner: Optional[str] = None
    respondent: Optional[str] = None
    list_status: Optional[str] = None
    status: Optional[str] = None
    entry_date: Optional[str] = None


class ListingDate(BaseModel):
    cl_date: Optional[str] = None
    misc_or_regular: Optional[str] = None
    stage: Optional[str] = None
    purpose: Optional[str] = None
    proposed_or_list_in: Optional[str] = None
    judges: List[str] = Field(default_factory=list)
    remarks: Optional[str] = None
    listed: Optional[str] = None


class Notice(BaseModel):
    sr_no: Optional[str] = None
    process_id: Optional[str] = None
    notice_type: Optional[str] = None
    name: Optional[str] = None
    state_district: Optional[str] = None
    station: Optional[str] = None
    issue_date: Optional[str] = None
    returnable_date: Optional[str] = None
    dispatch_date: Optional[str] = None


class Defect(BaseModel):
    sr_no: Optional[str] = None
    description: Optional[str] = None
    remarks: Optional[str] = None
    notification_date: Optional[str] = None
    removed_on_date: Optional[str] = None


class JudgementOrder(BaseModel):
    order_date: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None


class OfficeReport(BaseModel):
    sr_no: Optional[str] = None
    process_id: Optional[str] = None
    order_date: Optional[str] = None
    received_on: Optional[str] = None
    link: Optional[str] = None


# =============================================================================
# MAPPER OUTPUT
# =============================================================================

class MappedCase(BaseModel):
    """Full mapper output for one case payload"""
    search_type: SearchType
    case: CaseFields = Field(default_factory=CaseFields)

    parties: List[Party] = Field(default_factory=list)
    interlocutory_applications: List[InterlocutoryApplication] = Field(default_factory=list)
    acts: List[ActOrSection] = Field(default_factory=list)
    orders: List[Order] = Field(default_factory=list)
    hearings: List[Hearing] = Field(default_factory=list)
    objections: List[Objection] = Field(default_factory=list)
    documents: List[CaseDocument] = Field(default_factory=list)

    sc_earlier_courts: List[EarlierCourtDetail] = Field(default_factory=list)
    sc_tagged_matters: List[TaggedMatter] = Field(default_factory=list)
    sc_listing_dates: List[ListingDate] = Field(default_factory=list)
    sc_notices: List[Notice] = Field(default_factory=list)
    sc_defects: List[Defect] = Field(default_factory=list)
    sc_judgement_orders: List[JudgementOrder] = Field(default_factory=list)
    sc_office_reports: List[OfficeReport] = Field(default_factory=list)

    @property
    def petitioners(self) -> List[Party]:
        return [p for p in self.parties if p.party_type == PartyType.PETITIONER]

    @property
    def respondents(self) -> List[Party]:
        return [p for p in self.parties if p.party_type == PartyType.RESPONDENT]

    def collection_names(self) -> List[Collection]:
        """Collections this payload type owns (and therefore replaces)"""
        if self.search_type == SearchType.SUPREME_COURT:
            return list(SUPREME_COURT_COLLECTIONS)
        return list(GENERAL_COLLECTIONS)

    def collections(self) -> Dict[Collection, List[Dict[str, Any]]]:
        """Collection -> rows as plain dicts, ready for the store"""
        return {
            name: [row.model_dump(mode="json") for row in getattr(self, name.value)]
            for name in self.collection_names()
        }

    def is_empty(self) -> bool:
        """True when the payload carried no usable case field and no child row"""
        populated = self.case.populated()
        populated.pop("court_type", None)
        if populated:
            return False
        return not any(getattr(self, name.value) for name in self.collection_names())


# =============================================================================
# INGESTION RESULT
# =============================================================================

class IngestRequest(BaseModel):
    """Request body for a single-case ingestion"""
    search_type: Optional[SearchType] = None
    payload: Any


class BatchIngestItem(BaseModel):
    case_id: str
    search_type: Optional[SearchType] = None
    payload: Any


class BatchIngestRequest(BaseModel):
    items: List[BatchIngestItem]
    sequential: bool = Field(False, description="Run as one job with a courtesy delay between cases")


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Service version")
    timestamp: datetime = Field(..., description="Current timestamp")


class BatchIngestResponse(BaseModel):
    """One enqueue record per case"""
    jobs: List[Dict[str, Any]] = Field(default_factory=list)


class IngestionResult(BaseModel):
    """What one ingestion did to the store"""
    case_id: str
    search_type: SearchType
    status: IngestStatus
    fields_updated: List[str] = Field(default_factory=list)
    collections: Dict[str, int] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)
