import pytest

from certscan.config import ExtractionConfig
from certscan.extract.fields import extract_certificate_fields, extract_name, extract_title, is_valid_name
from certscan.extract.schemas import Confidence, ExtractionResult, FieldConfidence

HIGH, MEDIUM, LOW = Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW


def test_labelled_name():
    result = extract_certificate_fields("Name: John Michael Smith")
    assert result.employee_name == "John Michael Smith"
    assert result.confidence.name is HIGH


@pytest.mark.parametrize(
    "line",
    ["Cardholder: Amy Lee", "NAME: Amy Lee", "Holder Amy Lee", "Employee Name: Amy Lee", "Certificate Holder:Amy Lee"],
)
def test_name_labels(line):
    assert extract_name([line], ["Cardholder", "Holder", "Employee", "Name"]) == "Amy Lee"


def test_bare_name_line():
    result = extract_certificate_fields("SITE SAFETY\nJane Mary Doe\nno 12345")
    assert result.employee_name == "Jane Mary Doe"
    assert result.confidence.name is HIGH


def test_bare_name_needs_two_or_three_words():
    labels = ["Name"]
    assert extract_name(["Jane"], labels) is None
    assert extract_name(["Jane Mary Ann Doe"], labels) is None
    assert extract_name(["jane doe"], labels) is None


def test_first_name_line_wins():
    assert extract_name(["Peter Parker", "Name: John Smith"], ["Name"]) == "Peter Parker"


@pytest.mark.parametrize("line", ["Name: Ronald McDonald", "Name: Amy Lee-Jones", "Name: Sean O'Brien"])
def test_labelled_name_must_end_on_a_whole_word(line):
    assert extract_name([line], ["Name"]) is None


def test_partial_labelled_name_gives_way_to_fallback():
    result = extract_certificate_fields("Name: Ronald McDonald", fallback_name="Ronald Mcdonald")
    assert result.employee_name == "Ronald Mcdonald"
    assert result.confidence.name is MEDIUM


def test_is_valid_name():
    assert is_valid_name("John Smith")
    assert is_valid_name("Anna Maria De Luca")
    assert not is_valid_name("John")
    assert not is_valid_name("John smith")
    assert not is_valid_name("A B C D E")


def test_fallback_name_is_medium():
    result = extract_certificate_fields("SMSTS\n01/03/2026", fallback_name="Sarah Johnson")
    assert result.employee_name == "Sarah Johnson"
    assert result.confidence.name is MEDIUM


def test_blank_fallback_name_is_ignored():
    result = extract_certificate_fields("SMSTS", fallback_name="   ")
    assert result.employee_name == ""
    assert result.confidence.name is LOW


def test_extracted_name_beats_fallback():
    result = extract_certificate_fields("Name: John Smith", fallback_name="Sarah Johnson")
    assert result.employee_name == "John Smith"
    assert result.confidence.name is HIGH


def test_longest_keyword_line_is_title():
    config = ExtractionConfig(title_keywords=("CSCS", "Card"))
    result = extract_certificate_fields("CSCS\nCSCS Card\nJohn Smith", config=config)
    assert result.qualification_title == "CSCS Card"
    assert result.confidence.title is HIGH


def test_title_keywords_are_case_insensitive():
    assert extract_title(["emergency FIRST AID at work"], ["First Aid"]) == "emergency FIRST AID at work"


def test_title_tie_keeps_first_line():
    assert extract_title(["Card AAAA", "Card BBBB"], ["card"]) == "Card AAAA"


def test_no_title_keyword():
    config = ExtractionConfig(title_keywords=("IPAF",))
    result = extract_certificate_fields("John Smith\n01/03/2026", config=config)
    assert result.qualification_title == ""
    assert result.confidence.title is LOW


def test_labelled_dates_are_high():
    result = extract_certificate_fields("Date of Issue: 01/03/2023\nExpires: 01/03/2026")
    assert result.valid_from == "2023-03-01"
    assert result.confidence.valid_from is HIGH
    assert result.expiry_date == "2026-03-01"
    assert result.confidence.expiry is HIGH


def test_unlabelled_dates_use_first_and_last():
    result = extract_certificate_fields("01/03/2023\n01/03/2026")
    assert result.valid_from == "2023-03-01"
    assert result.expiry_date == "2026-03-01"
    assert result.confidence.valid_from is MEDIUM
    assert result.confidence.expiry is MEDIUM


def test_positional_fallback_overrides_labelled_issue_date():
    result = extract_certificate_fields("Issued: 01/06/2023\nprinted 01/01/2020\nref 01/03/2026")
    assert result.valid_from == "2023-06-01"
    assert result.expiry_date == "2026-03-01"
    assert result.confidence.valid_from is MEDIUM
    assert result.confidence.expiry is MEDIUM


def test_single_unlabelled_date_is_expiry():
    result = extract_certificate_fields("Some text 01/03/2026")
    assert result.expiry_date == "2026-03-01"
    assert result.confidence.expiry is MEDIUM
    assert result.valid_from == ""
    assert result.confidence.valid_from is LOW


def test_no_dates():
    result = extract_certificate_fields("nothing to see here")
    assert result.valid_from == ""
    assert result.expiry_date == ""
    assert result.confidence.valid_from is LOW
    assert result.confidence.expiry is LOW


def test_last_labelled_expiry_wins():
    # Documented behaviour: labelled assignment overwrites, so the last line wins.
    result = extract_certificate_fields("Expiry: 01/01/2025\nExpiry date: 01/01/2027")
    assert result.expiry_date == "2027-01-01"
    assert result.confidence.expiry is HIGH


def test_realistic_card():
    text = (
        "CSCS\n"
        "CONSTRUCTION SKILLS CERTIFICATION SCHEME\n"
        "Blue Skilled Worker Card\n"
        "Cardholder: Thomas Edward Wright\n"
        "Card No: 01234567\n"
        "Valid from 15 Jan 2022\n"
        "Valid until 14 Jan 2027\n"
    )
    result = extract_certificate_fields(text)
    assert result.employee_name == "Thomas Edward Wright"
    assert result.qualification_title == "CONSTRUCTION SKILLS CERTIFICATION SCHEME"
    assert result.valid_from == "2022-01-15"
    assert result.expiry_date == "2027-01-14"
    assert result.confidence == FieldConfidence(name=HIGH, title=HIGH, valid_from=HIGH, expiry=HIGH)


def test_empty_text_returns_empty_form():
    assert extract_certificate_fields("") == ExtractionResult.empty()


def test_extraction_is_idempotent():
    text = "First Aid at Work\nName: Ana Silva\n01/02/2024\n01/02/2027"
    assert extract_certificate_fields(text) == extract_certificate_fields(text)


def test_empty_field_must_be_low():
    with pytest.raises(ValueError):
        ExtractionResult(employee_name="", confidence=FieldConfidence(name=HIGH))


def test_to_dict_uses_plain_strings():
    data = extract_certificate_fields("Name: John Smith").to_dict()
    assert data["employee_name"] == "John Smith"
    assert data["confidence"] == {"name": "high", "title": "low", "valid_from": "low", "expiry": "low"}
