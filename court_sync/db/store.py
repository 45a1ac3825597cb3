"""
Case Store
==========

Persistence interface used by the ingestion orchestrator.

The orchestrator only needs four things from a store: read a case, merge
fields into it, delete a case's rows in one collection, and insert rows
into one collection. `replace_collection` composes the last two.
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..schemas import Collection
from .models import Case, COLLECTION_MODELS, generate_uuid

logger = logging.getLogger(__name__)


class CaseStore(ABC):
    """Abstract case store"""

    @abstractmethod
    def get_case(self, case_id: str) -> Optional[Dict[str, Any]]:
        """Stored case fields, or None if the case does not exist"""
        pass

    @abstractmethod
    def update_case(self, case_id: str, values: Dict[str, Any]) -> None:
        """Set the given case fields; fields not named are left alone"""
        pass

    @abstractmethod
    def delete_rows(self, case_id: str, collection: Collection) -> int:
        """Delete every row of `collection` for the case; returns count deleted"""
        pass

    @abstractmethod
    def insert_rows(self, case_id: str, collection: Collection, rows: List[Dict[str, Any]]) -> int:
        """Insert rows in order; returns count inserted"""
        pass

    @abstractmethod
    def list_rows(self, case_id: str, collection: Collection) -> List[Dict[str, Any]]:
        """Rows of `collection` for the case, in position order"""
        pass

    def replace_collection(self, case_id: str, collection: Collection, rows: List[Dict[str, Any]]) -> int:
        """Delete then insert. Returns the number of rows now stored."""
        self.delete_rows(case_id, collection)
        return self.insert_rows(case_id, collection, rows)


# =============================================================================
# IN-MEMORY STORE
# =============================================================================

class InMemoryCaseStore(CaseStore):
    """Dict-backed store for dry runs and tests"""

    def __init__(self):
        self.cases: Dict[str, Dict[str, Any]] = {}
        self.rows: Dict[str, Dict[Collection, List[Dict[str, Any]]]] = {}

    def create_case(self, case_id: Optional[str] = None, **fields) -> str:
        case_id = case_id or generate_uuid()
        self.cases[case_id] = dict(fields)
        self.rows[case_id] = {}
        return case_id

    def get_case(self, case_id: str) -> Optional[Dict[str, Any]]:
        case = self.cases.get(case_id)
        return copy.deepcopy(case) if case is not None else None

    def update_case(self, case_id: str, values: Dict[str, Any]) -> None:
        self.cases[case_id].update(copy.deepcopy(values))

    def delete_rows(self, case_id: str, collection: Collection) -> int:
        removed = self.rows[case_id].pop(collection, [])
        return len(removed)

    def insert_rows(self, case_id: str, collection: Collection, rows: List[Dict[str, Any]]) -> int:
        stored = self.rows[case_id].setdefault(collection, [])
        stored.extend(copy.deepcopy(rows))
        return len(rows)

    def list_rows(self, case_id: str, collection: Collection) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.rows.get(case_id, {}).get(collection, []))


# =============================================================================
# SQLALCHEMY STORE
# =============================================================================

class SQLAlchemyCaseStore(CaseStore):
    """
    Store backed by the SQLAlchemy models.

    Each collection replacement runs in its own SAVEPOINT, so a failing
    collection rolls back alone and the session stays usable. The caller owns
    the outer transaction (see `get_db_session`).
    """

    def __init__(self, session: Session):
        self.session = session

    def create_case(self, firm_id: Optional[str] = None, **fields) -> str:
        case = Case(firm_id=firm_id, **fields)
        self.session.add(case)
        self.session.flush()
        return case.id

    def _case(self, case_id: str) -> Optional[Case]:
        return self.session.query(Case).filter(Case.id == case_id).first()

    def get_case(self, case_id: str) -> Optional[Dict[str, Any]]:
        case = self._case(case_id)
        if case is None:
            return None
        return {column.name: getattr(case, column.name) for column in Case.__table__.columns}

    def update_case(self, case_id: str, values: Dict[str, Any]) -> None:
        case = self._case(case_id)
        if case is None:
            raise KeyError(case_id)
        for name, value in values.items():
            setattr(case, name, value)
        self.session.flush()

    def delete_rows(self, case_id: str, collection: Collection) -> int:
        model = COLLECTION_MODELS[collection]
        return (
            self.session.query(model)
            .filter(model.case_id == case_id)
            .delete(synchronize_session=False)
        )

    def insert_rows(self, case_id: str, collection: Collection, rows: List[Dict[str, Any]]) -> int:
        model = COLLECTION_MODELS[collection]
        self.session.add_all([
            model(case_id=case_id, position=position, **row)
            for position, row in enumerate(rows)
        ])
        self.session.flush()
        return len(rows)

    def list_rows(self, case_id: str, collection: Collection) -> List[Dict[str, Any]]:
        model = COLLECTION_MODELS[collection]
        records = (
            self.session.query(model)
            .filter(model.case_id == case_id)
            .order_by(model.position)
            .all()
        )
        skip = {"id", "case_id", "position"}
        return [
            {
                column.name: getattr(record, column.name)
                for column in model.__table__.columns
                if column.name not in skip
            }
            for record in records
        ]

    def replace_collection(self, case_id: str, collection: Collection, rows: List[Dict[str, Any]]) -> int:
        with self.session.begin_nested():
            deleted = self.delete_rows(case_id, collection)
            inserted = self.insert_rows(case_id, collection, rows)
        logger.debug(f"Replaced {collection.value} for case {case_id}: -{deleted} +{inserted}")
        return inserted
