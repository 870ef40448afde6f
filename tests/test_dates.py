from datetime import date

import pytest

from certscan.regex.dates import (
    month_from_name,
    normalize_year,
    parse_date,
    parse_day_first,
    parse_month_name,
    parse_year_first,
    recognize_dates,
)


def test_day_first_in_surrounding_text():
    found = list(recognize_dates("Issued on 01/03/2023 at Leeds"))
    assert len(found) == 1
    assert found[0].value == date(2023, 3, 1)
    assert found[0].original_text == "01/03/2023"
    assert found[0].source_line == "Issued on 01/03/2023 at Leeds"
    assert found[0].iso == "2023-03-01"


@pytest.mark.parametrize("text", ["01/03/2023", "1.3.2023", "01-03-2023", "1/3/23", "01.03-2023"])
def test_day_first_separators(text):
    assert parse_day_first(text) == date(2023, 3, 1)


@pytest.mark.parametrize("text", ["2023-03-01", "2023.3.1", "2023/03/01"])
def test_year_first(text):
    assert parse_year_first(text) == date(2023, 3, 1)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1 March 2023", date(2023, 3, 1)),
        ("01 Mar 2023", date(2023, 3, 1)),
        ("1st mar 2023", date(2023, 3, 1)),
        ("15 SEPT 2024", date(2024, 9, 15)),
        ("22 Dec. 2030", date(2030, 12, 22)),
    ],
)
def test_month_name(text, expected):
    assert parse_month_name(text) == expected


def test_month_from_name_uses_first_three_letters():
    assert month_from_name("January") == 1
    assert month_from_name("sept") == 9
    assert month_from_name("Foo") is None


@pytest.mark.parametrize(
    "text",
    ["31/02/2024", "30 Feb 2024", "01/13/2024", "01/01/1989", "01/01/2051", "2051-01-01", "12 Foo 2024", "01/01/51"],
)
def test_rejects_invalid_or_implausible_dates(text):
    assert parse_date(text) is None
    assert list(recognize_dates(f"Expires {text}")) == []


def test_year_bounds_are_inclusive():
    assert parse_date("01/01/1990") == date(1990, 1, 1)
    assert parse_date("31/12/2050") == date(2050, 12, 31)
    assert parse_date("01/01/50") == date(2050, 1, 1)


def test_two_digit_years_map_to_2000s():
    assert normalize_year("00") == 2000
    assert normalize_year("24") == 2024
    assert normalize_year("99") == 2099
    assert normalize_year("2024") == 2024


def test_day_month_order_is_not_swapped():
    assert parse_date("03/01/2024") == date(2024, 1, 3)


def test_order_follows_lines_then_position():
    text = "Valid 01/03/2023 - 2026-03-01\n\n   \nIssued 5 May 2020"
    found = [d.value for d in recognize_dates(text)]
    assert found == [date(2023, 3, 1), date(2026, 3, 1), date(2020, 5, 5)]


def test_source_line_is_trimmed():
    found = list(recognize_dates("   Expires: 01/03/2026   \n"))
    assert found[0].source_line == "Expires: 01/03/2026"


def test_invalid_match_does_not_hide_valid_one():
    found = [d.value for d in recognize_dates("31/02/2024 01/03/2024")]
    assert found == [date(2024, 3, 1)]


def test_empty_text_yields_nothing():
    assert list(recognize_dates("")) == []
    assert list(recognize_dates("  \n\n ")) == []


def test_recognize_is_lazy_and_restartable():
    text = "From 01/03/2023 to 01/03/2026"
    gen = recognize_dates(text)
    assert next(gen).value == date(2023, 3, 1)
    assert list(recognize_dates(text)) == list(recognize_dates(text))


def test_custom_year_bounds():
    assert [d.value for d in recognize_dates("01/01/1985", year_min=1980)] == [date(1985, 1, 1)]


@pytest.mark.parametrize(
    "text",
    ["Expires01/03/2026", "Valid until 01/03/2026ref", "exp2026-03-01valid", "Issued1 Mar 2026ok"],
)
def test_dates_touching_letters(text):
    found = [d.value for d in recognize_dates(text)]
    assert found == [date(2026, 3, 1)]


def test_longer_digit_runs_are_not_dates():
    assert list(recognize_dates("ref 101/03/20261")) == []
