"""
Tests for the District / High Court Mapper
==========================================

Tests:
1. District court fixture (data-wrapped, case_info/case_status keys)
2. High court fixture (case_details/case_status_details keys)
3. Key-path tolerance and priority order
4. Degenerate payloads
"""

import json
from pathlib import Path

import pytest

from court_sync.ingest.base import PayloadStructureError
from court_sync.ingest.court_record import CourtRecordMapper
from court_sync.ingest.derive import DERIVED_FROM_HEARINGS
from court_sync.schemas import CaseStatus, SearchType

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name):
    with open(FIXTURES / name, 'r', encoding='utf-8') as f:
        return json.load(f)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mapper():
    return CourtRecordMapper()


@pytest.fixture
def district(mapper):
    return mapper.map(load_fixture("district_court.json"), SearchType.DISTRICT_COURT)


@pytest.fixture
def high_court(mapper):
    return mapper.map(load_fixture("high_court.json"), SearchType.HIGH_COURT)


# =============================================================================
# District court
# =============================================================================

class TestDistrictCourtPayload:
    """data-wrapped district court payload"""

    def test_case_fields(self, district):
        case = district.case
        assert case.cnr_number == "MHAU010012342023"
        assert case.case_type == "Regular Civil Suit"
        assert case.filing_number == "1234/2023"
        assert case.filing_date == "2023-01-15"
        assert case.registration_date == "2023-01-20"
        assert case.first_hearing_date == "2023-02-01"
        assert case.next_hearing_date == "2024-03-18"
        assert case.stage == "Evidence"
        assert case.status == CaseStatus.PENDING
        assert case.court_and_judge == "12-Civil Judge Senior Division"
        assert case.court_type == "district court"

    def test_title_built_from_parties(self, district):
        assert district.case.case_title == "RAM KUMAR vs STATE OF MAHARASHTRA"
        assert district.case.petitioner == "RAM KUMAR"
        assert district.case.petitioner_advocate == "A.K. SHARMA"
        assert district.case.respondent_advocate == "GOVT PLEADER"

    def test_parties(self, district):
        assert [(p.name, p.advocate) for p in district.petitioners] == [
            ("RAM KUMAR", "A.K. SHARMA"),
            ("SITA DEVI", "P. VERMA"),
        ]
        assert [p.name for p in district.respondents] == ["STATE OF MAHARASHTRA"]

    def test_single_ia_object_with_default_status(self, district):
        assert len(district.interlocutory_applications) == 1
        ia = district.interlocutory_applications[0]
        assert ia.ia_number == "IA/12/2023"
        assert ia.date_of_filing == "2023-02-10"
        assert ia.status == "Pending"

    def test_acts_drop_empty_pair(self, district):
        assert [(a.under_act, a.under_section) for a in district.acts] == [
            ("Code of Civil Procedure", "9"),
        ]
        assert district.case.under_act == "Code of Civil Procedure"
        assert district.case.under_section == "9"

    def test_hearings_skip_placeholder_rows(self, district):
        assert [(h.date, h.purpose) for h in district.hearings] == [
            ("2023-02-15", "Appearance"),
            ("2024-03-18", "Interim Order"),
        ]

    def test_documents(self, district):
        assert [d.filed_document_name for d in district.documents] == ["Vakalatnama", "Written Statement"]
        assert district.documents[1].received_date == "2023-03-05"

    def test_orders_derived_from_hearings(self, district):
        assert len(district.orders) == 1
        order = district.orders[0]
        assert order.is_derived
        assert order.summary == DERIVED_FROM_HEARINGS
        assert order.order_date == "2023-02-15"
        assert order.details == "Interim Order"

    def test_seven_collections(self, district):
        assert len(district.collections()) == 7


# =============================================================================
# High court
# =============================================================================

class TestHighCourtPayload:

    def test_case_fields(self, high_court):
        case = high_court.case
        assert case.cnr_number == "DLHC010056782022"
        assert case.case_title == "ACME TRADERS PVT LTD vs UNION OF INDIA"
        assert case.filing_date == "2022-06-03"
        assert case.registration_date == "2022-06-07"
        assert case.first_hearing_date == "2022-06-09"
        assert case.case_type == "Writ Petition (Civil)"
        assert case.coram == "HON'BLE MR. JUSTICE X"
        assert case.bench_type == "Single Bench"
        assert case.state == "Delhi"
        assert case.category == "Taxation"
        assert case.sub_category == "GST"
        assert case.court_type == "high court"

    def test_placeholder_next_date_is_null(self, high_court):
        assert high_court.case.next_hearing_date is None

    def test_disposed_status(self, high_court):
        assert high_court.case.status == CaseStatus.DISPOSED

    def test_numeric_party_dropped(self, high_court):
        assert [(p.name, p.advocate) for p in high_court.respondents] == [("UNION OF INDIA", "CGSC")]
        assert [(p.name, p.advocate) for p in high_court.petitioners] == [("ACME TRADERS PVT LTD", "R. MEHTA")]

    def test_ia_filter(self, high_court):
        assert len(high_court.interlocutory_applications) == 1
        ia = high_court.interlocutory_applications[0]
        assert ia.status == "Disposed"
        assert ia.next_date == "2022-06-09"

    def test_acts_from_single_object(self, high_court):
        assert high_court.case.under_act == "Central Goods and Services Tax Act, 2017"
        assert high_court.case.under_section == "16(4)"

    def test_authoritative_orders_kept(self, high_court):
        assert [o.order_date for o in high_court.orders] == ["2022-06-09", "2022-09-21"]
        assert not any(o.is_derived for o in high_court.orders)
        assert high_court.orders[0].link == "https://example.org/orders/1.pdf"

    def test_objections(self, high_court):
        objection = high_court.objections[0]
        assert objection.text == "Court fee deficient"
        assert objection.compliance_date == "2022-06-06"


# =============================================================================
# Key paths
# =============================================================================

class TestKeyPathTolerance:
    """The same field resolves identically wherever the provider put it"""

    @pytest.mark.parametrize("payload", [
        {"case_status": {"next_hearing_date": "18-03-2024"}},
        {"data": {"case_status_details": {"next_hearing_date": "18/03/2024"}}},
        {"next_hearing_date": "2024-03-18"},
    ])
    def test_next_hearing_date_locations(self, mapper, payload):
        assert mapper.map(payload).case.next_hearing_date == "2024-03-18"

    def test_section_beats_top_level(self, mapper):
        payload = {
            "next_hearing_date": "01-01-2025",
            "case_status": {"next_hearing_date": "18-03-2024"},
        }
        assert mapper.map(payload).case.next_hearing_date == "2024-03-18"

    def test_unparseable_first_match_is_null(self, mapper):
        """The first populated location wins even when it does not parse"""
        payload = {
            "case_status": {"next_hearing_date": "to be fixed"},
            "next_hearing_date": "18-03-2024",
        }
        assert mapper.map(payload).case.next_hearing_date is None

    def test_party_paths(self, mapper):
        mapped = mapper.map({"data": {"petitioners": "1) ANITA RAO", "parties": {"respondent": "1) BANK OF INDIA"}}})
        assert [p.name for p in mapped.petitioners] == ["ANITA RAO"]
        assert [p.name for p in mapped.respondents] == ["BANK OF INDIA"]


class TestDegeneratePayloads:

    def test_empty_object_maps_to_empty_case(self, mapper):
        mapped = mapper.map({})
        assert mapped.is_empty()
        assert mapped.case.cnr_number is None

    def test_non_object_rejected(self, mapper):
        with pytest.raises(PayloadStructureError):
            mapper.map(["not", "an", "object"])

    def test_search_type_defaults_to_district(self, mapper):
        assert mapper.map({}).search_type == SearchType.DISTRICT_COURT

    def test_cause_list_supported(self, mapper):
        assert mapper.can_map(SearchType.DISTRICT_CAUSE_LIST)
        assert not mapper.can_map(SearchType.SUPREME_COURT)
