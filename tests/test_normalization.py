import pytest

from fields.normalization import to_int, to_non_negative_number, to_number, to_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("₹1,250.50", 1250.5),
        ("$ 99", 99.0),
        (" 1 200 ", 1200.0),
        ("-15", -15.0),
        (42, 42.0),
        (3.5, 3.5),
    ],
)
def test_to_number_parses_currency_and_separators(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", None, True, "nan", "inf", float("nan"), "12abc"])
def test_to_number_degrades_to_none(raw):
    assert to_number(raw) is None


def test_to_non_negative_number_rejects_negatives():
    assert to_non_negative_number("-1") is None
    assert to_non_negative_number("0") == 0.0
    assert to_non_negative_number("₹5") == 5.0


def test_to_int_truncates_toward_zero():
    assert to_int("12.9") == 12
    assert to_int("-12.9") == -12
    assert to_int("") is None
    assert to_int("pcs") is None


def test_to_text_trims_and_blanks_to_none():
    assert to_text("  MCB 32A ") == "MCB 32A"
    assert to_text("   ") is None
    assert to_text(None) is None
    assert to_text(float("nan")) is None
    assert to_text(12) == "12"
