"""
API Contract Tests
==================

Status codes and response shapes of the ingestion endpoints.
"""

import json
import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from court_sync.api import app
from court_sync.schemas import Collection

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name):
    with open(FIXTURES / name, 'r', encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def sqlalchemy_db(tmp_path):
    """Configure a fresh SQLAlchemy SQLite DB for tests."""
    from court_sync.db.session import reset_engine, init_db

    old_db_url = os.environ.get("DATABASE_URL")
    os.environ["DATABASE_URL"] = f"sqlite:///{tmp_path / 'api.db'}"
    reset_engine()
    init_db()

    yield

    if old_db_url is not None:
        os.environ["DATABASE_URL"] = old_db_url
    else:
        os.environ.pop("DATABASE_URL", None)
    reset_engine()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def case_id(sqlalchemy_db):
    from court_sync.db.session import get_db_session
    from court_sync.db.store import SQLAlchemyCaseStore

    with get_db_session() as db:
        return SQLAlchemyCaseStore(db).create_case(firm_id="firm-1")


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"]


class TestIngestEndpoint:

    def test_ingest_high_court(self, client, case_id):
        response = client.post(
            f"/api/v1/cases/{case_id}/ingest",
            json={"search_type": "high_court", "payload": load_fixture("high_court.json")},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["collections"]["orders"] == 2
        assert "cnr_number" in body["fields_updated"]

    def test_ingest_persists(self, client, case_id):
        from court_sync.db.session import get_db_session
        from court_sync.db.store import SQLAlchemyCaseStore

        client.post(f"/api/v1/cases/{case_id}/ingest", json={"payload": load_fixture("supreme_court.json")})
        with get_db_session() as db:
            store = SQLAlchemyCaseStore(db)
            assert store.get_case(case_id)["diary_number"] == "12345/2023"
            assert len(store.list_rows(case_id, Collection.SC_DEFECTS)) == 1

    def test_no_data(self, client, case_id):
        response = client.post(f"/api/v1/cases/{case_id}/ingest", json={"payload": {"data": {}}})
        assert response.status_code == 200
        assert response.json()["status"] == "no_data"

    def test_unknown_case(self, client, sqlalchemy_db):
        response = client.post("/api/v1/cases/missing/ingest", json={"payload": {"case_title": "A vs B"}})
        assert response.status_code == 404

    def test_structural_error(self, client, case_id):
        response = client.post(f"/api/v1/cases/{case_id}/ingest", json={"payload": ["a", "b"]})
        assert response.status_code == 422

    def test_unsupported_source(self, client, case_id):
        response = client.post(
            f"/api/v1/cases/{case_id}/ingest",
            json={"search_type": "gujarat_display_board", "payload": {"cases": []}},
        )
        assert response.status_code == 400

    def test_invalid_search_type(self, client, case_id):
        response = client.post(
            f"/api/v1/cases/{case_id}/ingest",
            json={"search_type": "tribunal", "payload": {}},
        )
        assert response.status_code == 422


class TestBatchEndpoint:

    def test_enqueues_one_job_per_case(self, client, monkeypatch):
        import court_sync.api as api

        def fake_enqueue(items):
            return [{"case_id": item["case_id"], "job_id": f"job-{i}", "status": "queued"}
                    for i, item in enumerate(items)]

        monkeypatch.setattr(api, "enqueue_ingest_batch", fake_enqueue)

        response = client.post("/api/v1/ingest/batch", json={"items": [
            {"case_id": "c1", "search_type": "high_court", "payload": {}},
            {"case_id": "c2", "payload": {}},
        ]})
        assert response.status_code == 200
        assert [j["case_id"] for j in response.json()["jobs"]] == ["c1", "c2"]

    def test_sequential_flag_enqueues_one_batch_job(self, client, monkeypatch):
        import court_sync.api as api

        monkeypatch.setattr(api, "enqueue_ingest_batch", lambda items: pytest.fail("per-case enqueue used"))
        monkeypatch.setattr(
            api, "enqueue_sequential_batch",
            lambda items: [{"case_ids": [i["case_id"] for i in items], "job_id": "batch-1", "status": "queued"}],
        )

        response = client.post("/api/v1/ingest/batch", json={
            "sequential": True,
            "items": [{"case_id": "c1", "payload": {}}, {"case_id": "c2", "payload": {}}],
        })
        assert response.status_code == 200
        assert response.json()["jobs"] == [{"case_ids": ["c1", "c2"], "job_id": "batch-1", "status": "queued"}]

    def test_rejects_missing_case_id(self, client):
        response = client.post("/api/v1/ingest/batch", json={"items": [{"payload": {}}]})
        assert response.status_code == 422
