"""
Database Package - SQLAlchemy
=============================

Case store for normalized court data.
"""

from .models import (
    Base,
    Case,
    CaseParty, CaseIA, CaseAct, CaseOrder, CaseHearing, CaseObjection, CaseDocumentRow,
    SCEarlierCourt, SCTaggedMatter, SCListingDate, SCNotice, SCDefect,
    SCJudgementOrder, SCOfficeReport,
    COLLECTION_MODELS,
)
from .session import get_db, get_db_session, init_db, get_engine, reset_engine
from .store import CaseStore, InMemoryCaseStore, SQLAlchemyCaseStore

__all__ = [
    # Base
    "Base",
    # Case
    "Case",
    # General collections
    "CaseParty", "CaseIA", "CaseAct", "CaseOrder", "CaseHearing", "CaseObjection", "CaseDocumentRow",
    # Supreme court collections
    "SCEarlierCourt", "SCTaggedMatter", "SCListingDate", "SCNotice", "SCDefect",
    "SCJudgementOrder", "SCOfficeReport",
    "COLLECTION_MODELS",
    # Session
    "get_db", "get_db_session", "init_db", "get_engine", "reset_engine",
    # Stores
    "CaseStore", "InMemoryCaseStore", "SQLAlchemyCaseStore",
]
