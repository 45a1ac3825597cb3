"""
Tests for the Supreme Court Mapper
==================================

One fixture per observed format variant:
- supreme_court.json: "Diary Info" one-liner, Title-Case list sections, data wrapper
- supreme_court_diary_lines.json: multi-line "Diary Number", snake_case list sections
"""

import json
from pathlib import Path

import pytest

from court_sync.ingest.supreme_court import (
    SupremeCourtMapper,
    normalize_advocates,
    parse_category_code,
    parse_diary_info,
    parse_listed_on,
    parse_registered_on,
    parse_registration_number,
    parse_verified_on,
    split_bench,
)
from court_sync.schemas import CaseStatus, Collection, SearchType

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name):
    with open(FIXTURES / name, 'r', encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def mapper():
    return SupremeCourtMapper()


@pytest.fixture
def mapped(mapper):
    return mapper.map(load_fixture("supreme_court.json"))


@pytest.fixture
def mapped_lines(mapper):
    return mapper.map(load_fixture("supreme_court_diary_lines.json"))


# =============================================================================
# Compound string extractors
# =============================================================================

class TestDiaryInfo:

    def test_one_line_format(self):
        info = parse_diary_info("Diary No. - 12345/2023 Filed on 07-03-2023 10:22 AM [SECTION: III-B] PENDING")
        assert info.number == "12345/2023"
        assert info.filed_on == "2023-03-07"
        assert info.section == "III-B"
        assert info.status == "PENDING"

    def test_multi_line_format(self):
        info = parse_diary_info("777/2021\nFiled on: 02-01-2021 11:00 AM\n[\nSECTION:\nXI\n]")
        assert info.number == "777/2021"
        assert info.filed_on == "2021-01-02"
        assert info.section == "XI"
        assert info.status is None

    def test_verified_on_line(self):
        info = parse_diary_info("777/2021\nFiled on: 02-01-2021 11:00 AM\nVerified on: 04-01-2021\n[\nSECTION:\nXI\n]")
        assert info.verified_on == "2021-01-04"
        assert info.number == "777/2021"
        assert info.section == "XI"

    def test_missing_parts(self):
        info = parse_diary_info("Diary No. - 55/2020")
        assert info.number == "55/2020"
        assert info.filed_on is None
        assert info.section is None

    def test_empty(self):
        assert parse_diary_info(None).number is None
        assert parse_diary_info("").number is None


class TestListedOn:

    def test_date_and_bench(self):
        listed = parse_listed_on(
            "02-03-2024 [HON'BLE MR. JUSTICE A, HON'BLE MR. JUSTICE B and HON'BLE MS. JUSTICE C]"
        )
        assert listed.date == "2024-03-02"
        assert listed.bench == [
            "HON'BLE MR. JUSTICE A",
            "HON'BLE MR. JUSTICE B",
            "HON'BLE MS. JUSTICE C",
        ]

    def test_line_separated_bench(self):
        listed = parse_listed_on("19-02-2021 [\nHON'BLE THE CHIEF JUSTICE\nHON'BLE MR. JUSTICE D\n]")
        assert listed.bench == ["HON'BLE THE CHIEF JUSTICE", "HON'BLE MR. JUSTICE D"]

    def test_and_inside_a_name_is_kept(self):
        assert split_bench("HON'BLE MR. JUSTICE ANAND") == ["HON'BLE MR. JUSTICE ANAND"]

    def test_no_bracket(self):
        listed = parse_listed_on("02-03-2024")
        assert listed.date == "2024-03-02"
        assert listed.bench == []


class TestAdvocates:

    @pytest.mark.parametrize("raw,expected", [
        ("R. SHARMA (Dead)", "R. SHARMA \u2020"),
        ("P. RAO (retired)", "P. RAO (R)"),
        ("K. IYER (Elevated As Chief Justice)", "K. IYER (E)"),
        ("ANIL KUMAR", "ANIL KUMAR"),
    ])
    def test_status_markers(self, raw, expected):
        assert normalize_advocates(raw) == expected

    def test_empty(self):
        assert normalize_advocates("-") is None
        assert normalize_advocates(None) is None

    def test_markers_applied_to_first_party(self):
        mapped = SupremeCourtMapper().map({"case_details": {
            "Petitioner(s)": "1 MEENA DEVI",
            "Petitioner Advocate(s)": "R. SHARMA (Dead), P. RAO (Retired)",
        }})
        assert mapped.petitioners[0].advocate == "R. SHARMA \u2020, P. RAO (R)"
        assert mapped.case.petitioner_advocate == "R. SHARMA \u2020, P. RAO (R)"


class TestCaseNumber:
    TEXT = "SLP(Crl) No. 004567 - / 2023 Registered on 10-03-2023 Verified On 11-03-2023"

    def test_verified_on(self):
        assert parse_verified_on(self.TEXT) == "2023-03-11"

    def test_registered_on(self):
        assert parse_registered_on(self.TEXT) == "2023-03-10"

    def test_registration_number(self):
        assert parse_registration_number(self.TEXT) == "SLP(Crl) No. 004567 - / 2023"

    def test_textual_registered_date(self):
        assert parse_registered_on("W.P.(C) No. 000123 / 2021 Registered on 5th January 2021") == "2021-01-05"

    def test_absent_markers(self):
        assert parse_verified_on("SLP(C) No. 1/2024") is None
        assert parse_verified_on(None) is None

    def test_category_code(self):
        assert parse_category_code("1807-Criminal Matters : bail") == "1807"
        assert parse_category_code("Criminal Matters") is None


# =============================================================================
# Full payloads
# =============================================================================

class TestDiaryInfoPayload:
    """supreme_court.json"""

    def test_case_fields(self, mapped):
        case = mapped.case
        assert case.diary_number == "12345/2023"
        assert case.diary_filed_on == "2023-03-07"
        assert case.diary_section == "III-B"
        assert case.diary_status == "PENDING"
        assert case.cnr_number == "SCIN010123452023"
        assert case.registration_number == "SLP(Crl) No. 004567 - / 2023"
        assert case.registration_date == "2023-03-10"
        assert case.verification_date == "2023-03-11"
        assert case.present_last_listed_on == "2024-03-02"
        assert len(case.bench_composition) == 3
        assert case.category_code == "1807"
        assert case.status == CaseStatus.PENDING
        assert case.court_type == "supreme court"

    def test_title_from_top_level_fields(self, mapped):
        assert mapped.case.case_title == "RAJESH SINGH vs. STATE OF UTTAR PRADESH"

    def test_parties(self, mapped):
        assert [(p.name, p.advocate) for p in mapped.petitioners] == [
            ("RAJESH SINGH", "ANIL KUMAR"),
            ("MANOJ SINGH", None),
        ]
        assert [(p.name, p.advocate) for p in mapped.respondents] == [("STATE OF UTTAR PRADESH", None)]

    def test_earlier_courts(self, mapped):
        row = mapped.sc_earlier_courts[0]
        assert row.sr_no == "1"
        assert row.case_number == "CRM 1111/2022"
        assert row.order_date == "2022-12-12"
        assert row.cnr_designation == "UPHC010022222022"

    def test_listing_dates(self, mapped):
        assert len(mapped.sc_listing_dates) == 2
        first, second = mapped.sc_listing_dates
        assert first.cl_date == "2024-03-02"
        assert first.misc_or_regular == "Misc."
        assert first.proposed_or_list_in == "Court"
        assert first.judges == ["HON'BLE MR. JUSTICE A", "HON'BLE MR. JUSTICE B"]
        assert first.remarks is None
        assert second.cl_date is None

    def test_notice_dates_and_placeholders(self, mapped):
        notice = mapped.sc_notices[0]
        assert notice.process_id == "9876/2023"
        assert notice.state_district == "Uttar Pradesh / Lucknow"
        assert notice.issue_date == "2023-03-15"
        assert notice.returnable_date == "2023-04-15"
        assert notice.dispatch_date is None
        assert notice.station is None

    def test_defects(self, mapped):
        defect = mapped.sc_defects[0]
        assert defect.sr_no == "1"
        assert defect.description == "Certified copy not filed"
        assert defect.removed_on_date == "2023-03-09"

    def test_office_report_link_object(self, mapped):
        report = mapped.sc_office_reports[0]
        assert report.link == "https://example.org/or/1.pdf"
        assert report.process_id is None
        assert report.received_on == "2024-02-28"

    def test_ia_documents(self, mapped):
        document = mapped.documents[0]
        assert document.doc_number == "IA 5555/2023"
        assert document.filed_by == "ANIL KUMAR"
        assert document.received_date == "2023-03-07"

    def test_general_collections_see_sc_activity(self, mapped):
        assert [(o.order_date, o.details) for o in mapped.orders] == [("2024-03-02", "Record of Proceedings")]
        assert [(h.date, h.purpose) for h in mapped.hearings] == [("2024-03-02", "Admission")]

    def test_twelve_collections(self, mapped):
        collections = mapped.collections()
        assert len(collections) == 12
        assert Collection.ACTS not in collections
        assert collections[Collection.SC_TAGGED_MATTERS] == []


class TestDiaryLinesPayload:
    """supreme_court_diary_lines.json"""

    def test_case_fields(self, mapped_lines):
        case = mapped_lines.case
        assert case.diary_number == "777/2021"
        assert case.diary_filed_on == "2021-01-02"
        assert case.diary_section == "XI"
        assert case.registration_date == "2021-01-05"
        assert case.verification_date == "2021-01-04"
        assert case.status == CaseStatus.DISPOSED
        assert case.bench_composition == ["HON'BLE THE CHIEF JUSTICE", "HON'BLE MR. JUSTICE D"]
        assert case.case_title == "MEENA DEVI vs. UNION OF INDIA"

    def test_advocate_on_first_respondent(self, mapped_lines):
        assert [(p.name, p.advocate) for p in mapped_lines.respondents] == [
            ("UNION OF INDIA", "SOLICITOR GENERAL"),
            ("STATE OF BIHAR", None),
        ]

    def test_snake_case_sections(self, mapped_lines):
        assert mapped_lines.sc_judgement_orders[0].link == "https://example.org/judgment/777.pdf"
        assert mapped_lines.sc_listing_dates[0].judges == ["HON'BLE THE CHIEF JUSTICE", "HON'BLE MR. JUSTICE D"]
        assert mapped_lines.hearings[0].cause_list_type == "Regular"

    def test_search_type(self, mapped_lines):
        assert mapped_lines.search_type == SearchType.SUPREME_COURT


class TestSparsePayloads:

    def test_case_number_verified_date_wins_over_diary(self, mapper):
        mapped = mapper.map({"case_details": {
            "Diary Number": "9/2024\nVerified on: 01-02-2024",
            "Case Number": "SLP(C) No. 1/2024 Verified On 03-02-2024",
        }})
        assert mapped.case.verification_date == "2024-02-03"

    def test_verified_date_from_diary_only(self, mapper):
        mapped = mapper.map({"case_details": {"Diary Number": "9/2024\nVerified on: 01-02-2024"}})
        assert mapped.case.verification_date == "2024-02-01"

    def test_no_case_details(self, mapper):
        mapped = mapper.map({"diary_number": "1/2024"})
        assert mapped.case.diary_number == "1/2024"
        assert mapped.case.case_title is None
        assert mapped.parties == []

    def test_empty_payload_is_empty(self, mapper):
        assert mapper.map({}).is_empty()
