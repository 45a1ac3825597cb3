"""
SQLAlchemy Models for the Case Store
====================================

Schema for normalized court case data:
- cases: canonical case record plus fetch bookkeeping
- one table per child collection, replaced wholesale on every ingestion

Every child row carries `position`, its index in the provider payload.
Dates are ISO `YYYY-MM-DD` strings.

Supports both PostgreSQL and SQLite via SQLAlchemy.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Text, Integer, Boolean, DateTime, ForeignKey,
    UniqueConstraint, Index, JSON
)
from sqlalchemy.orm import relationship, declarative_base

from ..schemas import Collection

# Use JSON for cross-database compatibility (works with both PostgreSQL and SQLite)
JSONB = JSON

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


# =============================================================================
# CASE
# =============================================================================

class Case(Base):
    """Canonical case record"""
    __tablename__ = "cases"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    firm_id = Column(String(36), nullable=True, index=True)

    cnr_number = Column(String(32), nullable=True)
    case_title = Column(Text, nullable=True)
    filing_number = Column(String(100), nullable=True)
    filing_date = Column(String(10), nullable=True)
    registration_number = Column(String(255), nullable=True)
    registration_date = Column(String(10), nullable=True)
    stage = Column(String(255), nullable=True)
    status = Column(String(20), nullable=True)  # pending/disposed
    first_hearing_date = Column(String(10), nullable=True)
    next_hearing_date = Column(String(10), nullable=True)
    coram = Column(Text, nullable=True)
    bench_type = Column(String(100), nullable=True)
    judicial_branch = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    category = Column(Text, nullable=True)
    sub_category = Column(Text, nullable=True)
    case_type = Column(String(255), nullable=True)
    court_and_judge = Column(Text, nullable=True)
    court_type = Column(String(50), nullable=True)
    petitioner = Column(Text, nullable=True)
    petitioner_advocate = Column(Text, nullable=True)
    respondent = Column(Text, nullable=True)
    respondent_advocate = Column(Text, nullable=True)
    under_act = Column(Text, nullable=True)
    under_section = Column(Text, nullable=True)

    # Supreme court
    diary_number = Column(String(50), nullable=True)
    diary_filed_on = Column(String(10), nullable=True)
    diary_section = Column(String(50), nullable=True)
    diary_status = Column(String(50), nullable=True)
    present_last_listed_on = Column(String(10), nullable=True)
    bench_composition = Column(JSONB, default=list)
    category_code = Column(String(20), nullable=True)
    verification_date = Column(String(10), nullable=True)

    # Fetch bookkeeping
    fetched_data = Column(JSONB, nullable=True)
    last_fetched_at = Column(DateTime, nullable=True)
    fetch_status = Column(String(20), nullable=True)  # success/partial/no_data
    fetch_message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    parties = relationship("CaseParty", back_populates="case", cascade="all, delete-orphan")
    interlocutory_applications = relationship("CaseIA", back_populates="case", cascade="all, delete-orphan")
    acts = relationship("CaseAct", back_populates="case", cascade="all, delete-orphan")
    orders = relationship("CaseOrder", back_populates="case", cascade="all, delete-orphan")
    hearings = relationship("CaseHearing", back_populates="case", cascade="all, delete-orphan")
    objections = relationship("CaseObjection", back_populates="case", cascade="all, delete-orphan")
    documents = relationship("CaseDocumentRow", back_populates="case", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("firm_id", "cnr_number", name="uq_case_firm_cnr"),
    )


# =============================================================================
# GENERAL CHILD COLLECTIONS
# =============================================================================

class CaseParty(Base):
    """Petitioner or respondent"""
    __tablename__ = "case_parties"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(Text, nullable=False)
    advocate = Column(Text, nullable=True)
    party_type = Column(String(20), nullable=True)

    case = relationship("Case", back_populates="parties")

    __table_args__ = (
        Index("ix_case_parties_case", "case_id", "position"),
    )


class CaseIA(Base):
    """Interlocutory application"""
    __tablename__ = "case_interlocutory_applications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    ia_number = Column(String(100), nullable=True)
    party = Column(Text, nullable=True)
    date_of_filing = Column(String(10), nullable=True)
    next_date = Column(String(10), nullable=True)
    status = Column(String(100), nullable=True)

    case = relationship("Case", back_populates="interlocutory_applications")


class CaseAct(Base):
    __tablename__ = "case_acts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    under_act = Column(Text, nullable=True)
    under_section = Column(Text, nullable=True)

    case = relationship("Case", back_populates="acts")


class CaseOrder(Base):
    """Court order; is_derived marks rows synthesized from hearings/documents"""
    __tablename__ = "case_orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    judge = Column(Text, nullable=True)
    hearing_date = Column(String(10), nullable=True)
    order_date = Column(String(10), nullable=True)
    order_number = Column(String(100), nullable=True)
    bench = Column(String(255), nullable=True)
    details = Column(Text, nullable=True)
    summary = Column(Text, nullable=True)
    link = Column(Text, nullable=True)
    is_derived = Column(Boolean, default=False, nullable=False)

    case = relationship("Case", back_populates="orders")


class CaseHearing(Base):
    __tablename__ = "case_hearings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    date = Column(String(10), nullable=True)
    judge = Column(Text, nullable=True)
    cause_list_type = Column(String(100), nullable=True)
    business_on_date = Column(String(10), nullable=True)
    purpose = Column(Text, nullable=True)

    case = relationship("Case", back_populates="hearings")


class CaseObjection(Base):
    __tablename__ = "case_objections"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    sr_no = Column(String(20), nullable=True)
    text = Column(Text, nullable=True)
    receipt_date = Column(String(10), nullable=True)
    scrutiny_date = Column(String(10), nullable=True)
    compliance_date = Column(String(10), nullable=True)

    case = relationship("Case", back_populates="objections")


class CaseDocumentRow(Base):
    """Filed document"""
    __tablename__ = "case_documents"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    sr_no = Column(String(20), nullable=True)
    filed_document_name = Column(Text, nullable=True)
    filed_by = Column(Text, nullable=True)
    advocate = Column(Text, nullable=True)
    doc_number = Column(String(100), nullable=True)
    received_date = Column(String(10), nullable=True)
    type = Column(String(255), nullable=True)
    url = Column(Text, nullable=True)

    case = relationship("Case", back_populates="documents")


# =============================================================================
# SUPREME COURT CHILD COLLECTIONS
# =============================================================================

class SCEarlierCourt(Base):
    __tablename__ = "sc_earlier_court_details"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    sr_no = Column(String(20), nullable=True)
    court = Column(Text, nullable=True)
    agency_state = Column(String(255), nullable=True)
    agency_code = Column(String(100), nullable=True)
    case_number = Column(Text, nullable=True)
    order_date = Column(String(10), nullable=True)
    cnr_designation = Column(Text, nullable=True)
    judgement_challenged = Column(String(50), nullable=True)
    judgement_type = Column(String(100), nullable=True)


class SCTaggedMatter(Base):
    __tablename__ = "sc_tagged_matters"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    matter_type = Column(String(100), nullable=True)
    case_number = Column(Text, nullable=True)
    petitioner = Column(Text, nullable=True)
    respondent = Column(Text, nullable=True)
    list_status = Column(String(100), nullable=True)
    status = Column(String(100), nullable=True)
    entry_date = Column(String(10), nullable=True)


class SCListingDate(Base):
    __tablename__ = "sc_listing_dates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    cl_date = Column(String(10), nullable=True)
    misc_or_regular = Column(String(50), nullable=True)
    stage = Column(Text, nullable=True)
    purpose = Column(Text, nullable=True)
    proposed_or_list_in = Column(Text, nullable=True)
    judges = Column(JSONB, default=list)
    remarks = Column(Text, nullable=True)
    listed = Column(String(50), nullable=True)


class SCNotice(Base):
    __tablename__ = "sc_notices"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    sr_no = Column(String(20), nullable=True)
    process_id = Column(String(100), nullable=True)
    notice_type = Column(Text, nullable=True)
    name = Column(Text, nullable=True)
    state_district = Column(Text, nullable=True)
    station = Column(Text, nullable=True)
    issue_date = Column(String(10), nullable=True)
    returnable_date = Column(String(10), nullable=True)
    dispatch_date = Column(String(10), nullable=True)


class SCDefect(Base):
    __tablename__ = "sc_defects"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    sr_no = Column(String(20), nullable=True)
    description = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
    notification_date = Column(String(10), nullable=True)
    removed_on_date = Column(String(10), nullable=True)


class SCJudgementOrder(Base):
    __tablename__ = "sc_judgement_orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    order_date = Column(String(10), nullable=True)
    description = Column(Text, nullable=True)
    link = Column(Text, nullable=True)


class SCOfficeReport(Base):
    __tablename__ = "sc_office_reports"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    sr_no = Column(String(20), nullable=True)
    process_id = Column(String(100), nullable=True)
    order_date = Column(String(10), nullable=True)
    received_on = Column(String(10), nullable=True)
    link = Column(Text, nullable=True)


# Collection name -> table model
COLLECTION_MODELS = {
    Collection.PARTIES: CaseParty,
    Collection.INTERLOCUTORY_APPLICATIONS: CaseIA,
    Collection.ACTS: CaseAct,
    Collection.ORDERS: CaseOrder,
    Collection.HEARINGS: CaseHearing,
    Collection.OBJECTIONS: CaseObjection,
    Collection.DOCUMENTS: CaseDocumentRow,
    Collection.SC_EARLIER_COURTS: SCEarlierCourt,
    Collection.SC_TAGGED_MATTERS: SCTaggedMatter,
    Collection.SC_LISTING_DATES: SCListingDate,
    Collection.SC_NOTICES: SCNotice,
    Collection.SC_DEFECTS: SCDefect,
    Collection.SC_JUDGEMENT_ORDERS: SCJudgementOrder,
    Collection.SC_OFFICE_REPORTS: SCOfficeReport,
}
