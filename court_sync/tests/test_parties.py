"""
Tests for Party List and Acts Parsing
=====================================
"""

from court_sync.ingest.acts import parse_acts_and_sections
from court_sync.ingest.parties import (
    parse_numbered_lines,
    parse_party_list,
    is_valid_party_name,
)
from court_sync.schemas import PartyType


def as_pairs(parties):
    return [(p.name, p.advocate) for p in parties]


class TestPartyList:
    """Numbered "1) NAME Advocate- X" strings"""

    def test_two_parties_with_advocates(self):
        parties = parse_party_list(
            "1) RAM KUMAR Advocate- A.K. SHARMA 2) SITA DEVI Advocate - P. VERMA"
        )
        assert as_pairs(parties) == [
            ("RAM KUMAR", "A.K. SHARMA"),
            ("SITA DEVI", "P. VERMA"),
        ]

    def test_numeric_only_names_rejected(self):
        assert parse_party_list("1) 5 2) 3.9") == []

    def test_short_names_rejected(self):
        assert as_pairs(parse_party_list("1) AB 2) RAVI SHANKAR")) == [("RAVI SHANKAR", None)]

    def test_separator_variants(self):
        """':', '-' and no separator after Advocate"""
        parties = parse_party_list(
            "1) MOHAN LAL Advocate: R. GUPTA 2) KAMLA BAI Advocate S. RAO 3) HARI OM Advocates- X AND Y"
        )
        assert as_pairs(parties) == [
            ("MOHAN LAL", "R. GUPTA"),
            ("KAMLA BAI", "S. RAO"),
            ("HARI OM", "X AND Y"),
        ]

    def test_annotations_stripped(self):
        parties = parse_party_list("1) SITA DEVI (Minor) Advocate- P. VERMA (D/1234/2010)")
        assert as_pairs(parties) == [("SITA DEVI", "P. VERMA")]

    def test_two_digit_numbers(self):
        """"12)" is one entry marker, not "1" followed by "2)" """
        text = " ".join(f"{i}) PARTY NUMBER {i}" for i in range(1, 13))
        parties = parse_party_list(text)
        assert len(parties) == 12
        assert parties[-1].name == "PARTY NUMBER 12"

    def test_unnumbered_single_name(self):
        assert as_pairs(parse_party_list("UNION OF INDIA")) == [("UNION OF INDIA", None)]

    def test_party_type_applied(self):
        parties = parse_party_list("1) STATE OF GOA", PartyType.RESPONDENT)
        assert parties[0].party_type == PartyType.RESPONDENT

    def test_list_input_parsed_elementwise(self):
        parties = parse_party_list(["1) RAM KUMAR", "1) SITA DEVI"])
        assert [p.name for p in parties] == ["RAM KUMAR", "SITA DEVI"]

    def test_empty_and_absent(self):
        assert parse_party_list("") == []
        assert parse_party_list(None) == []
        assert parse_party_list({"name": "X"}) == []

    def test_name_validity(self):
        assert is_valid_party_name("ABC")
        assert not is_valid_party_name("AB")
        assert not is_valid_party_name("12.5")
        assert not is_valid_party_name(None)


class TestNumberedLines:
    """Supreme court "1 NAME" per line"""

    def test_lines_parsed_in_order(self):
        parties = parse_numbered_lines("1 RAJESH SINGH\n2 MANOJ SINGH", party_type=PartyType.PETITIONER)
        assert [p.name for p in parties] == ["RAJESH SINGH", "MANOJ SINGH"]
        assert all(p.party_type == PartyType.PETITIONER for p in parties)

    def test_advocates_attached_to_first_party(self):
        parties = parse_numbered_lines("1 RAJESH SINGH\n2 MANOJ SINGH", advocates="ANIL KUMAR")
        assert as_pairs(parties) == [("RAJESH SINGH", "ANIL KUMAR"), ("MANOJ SINGH", None)]

    def test_unnumbered_text_falls_back(self):
        parties = parse_numbered_lines("1) RAM KUMAR Advocate- A.K. SHARMA")
        assert as_pairs(parties) == [("RAM KUMAR", "A.K. SHARMA")]

    def test_empty(self):
        assert parse_numbered_lines(None, advocates="X") == []


class TestActsAndSections:
    def test_single_object(self):
        pairs = parse_acts_and_sections({"under_act": "IPC", "under_section": "302"})
        assert [(p.under_act, p.under_section) for p in pairs] == [("IPC", "302")]

    def test_alternative_keys(self):
        pairs = parse_acts_and_sections([{"act": "NI Act", "section": "138"}])
        assert [(p.under_act, p.under_section) for p in pairs] == [("NI Act", "138")]

    def test_empty_pairs_dropped(self):
        pairs = parse_acts_and_sections([
            {"under_act": "", "under_section": "-"},
            {"under_act": "CrPC"},
        ])
        assert [(p.under_act, p.under_section) for p in pairs] == [("CrPC", None)]

    def test_non_rows_ignored(self):
        assert parse_acts_and_sections("IPC 302") == []
        assert parse_acts_and_sections(None) == []
