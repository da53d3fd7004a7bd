import pandas as pd

from extraction.profiling import classify_cell, classify_cells, is_price_like, is_text_like, profile_columns


def test_price_and_empty_counts():
    frame = pd.DataFrame({"Price": ["₹150"] * 40 + [""] * 60}, dtype=object)

    profile = profile_columns(frame)["Price"]

    assert profile.price_count == 40
    assert profile.empty_count == 60
    assert profile.text_count == 0
    assert profile.price_fill_rate == 0.4


def test_only_first_rows_are_sampled():
    frame = pd.DataFrame({"Name": ["Switch"] * 150}, dtype=object)

    profile = profile_columns(frame, sample_size=100)["Name"]

    assert profile.sampled_rows == 100
    assert profile.text_count == 100
    assert profile.samples == ["Switch", "Switch", "Switch"]


def test_price_check_takes_priority_over_text():
    assert classify_cell("1,250") == "price"
    assert classify_cell("Cable 2.5mm") == "text"
    assert classify_cell("  ") == "empty"
    assert classify_cell("0") == "other"


def test_price_like_bounds():
    assert is_price_like("9999999")
    assert not is_price_like("10000000")
    assert not is_price_like("0")
    assert not is_price_like("-5")


def test_text_like_needs_two_chars_and_a_letter():
    assert is_text_like("Fan")
    assert not is_text_like("A")
    assert not is_text_like("12-34")


def test_missing_header_counts_as_empty():
    frame = pd.DataFrame({"Name": ["Fan", "Bulb"]}, dtype=object)

    profiles = profile_columns(frame, headers=["Name", "Ghost"])

    assert profiles["Ghost"].empty_count == 2
    assert profiles["Ghost"].text_fill_rate == 0.0


def test_classify_cells_labels_a_whole_column():
    values = pd.Series(["₹150", "Cable 2.5mm", None, "0", float("nan"), 42.0], dtype=object)

    kinds = classify_cells(values)

    assert list(kinds) == ["price", "text", "empty", "other", "empty", "price"]
