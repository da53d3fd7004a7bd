"""
Column type profiling.

Samples the first data rows and classifies every cell as empty, price-like or
text-like. The resulting fill rates drive name-column and price-column
auto-detection when header names alone are not enough.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from config import PROFILE_SAMPLE_ROWS
from fields.normalization import to_number, to_text

PRICE_UPPER_BOUND = 10_000_000
MAX_SAMPLES = 3

CELL_EMPTY = "empty"
CELL_PRICE = "price"
CELL_TEXT = "text"
CELL_OTHER = "other"


@dataclass
class ColumnProfile:
    column: str
    sampled_rows: int = 0
    price_count: int = 0
    text_count: int = 0
    empty_count: int = 0
    samples: List[str] = field(default_factory=list)

    @property
    def price_fill_rate(self) -> float:
        return self.price_count / self.sampled_rows if self.sampled_rows else 0.0

    @property
    def text_fill_rate(self) -> float:
        return self.text_count / self.sampled_rows if self.sampled_rows else 0.0


def _has_letter(text: Any) -> bool:
    return text is not None and any(ch.isalpha() for ch in text)


def classify_cells(values: pd.Series) -> np.ndarray:
    """
    Classify a column of raw cells in one pass.

    Every cell gets exactly one kind. The price check wins over the text check,
    so "1,250" is a price and never text.
    """
    texts = values.map(to_text)
    numbers = pd.to_numeric(values.map(to_number), errors="coerce").to_numpy(dtype=float)

    empty = texts.isna().to_numpy(dtype=bool)
    price = ~empty & (numbers > 0) & (numbers < PRICE_UPPER_BOUND)
    long_enough = texts.map(lambda t: t is not None and len(t) >= 2).to_numpy(dtype=bool)
    lettered = texts.map(_has_letter).to_numpy(dtype=bool)
    text = ~empty & ~price & long_enough & lettered

    return np.select([empty, price, text], [CELL_EMPTY, CELL_PRICE, CELL_TEXT], default=CELL_OTHER)


def classify_cell(value: Any) -> str:
    return str(classify_cells(pd.Series([value], dtype=object))[0])


def is_price_like(value: Any) -> bool:
    return classify_cell(value) == CELL_PRICE


def is_text_like(value: Any) -> bool:
    return classify_cell(value) == CELL_TEXT


def profile_columns(
    frame: pd.DataFrame,
    headers: Sequence[str] | None = None,
    sample_size: int = PROFILE_SAMPLE_ROWS,
) -> Dict[str, ColumnProfile]:
    """
    Build a ColumnProfile per column from the first `sample_size` rows.

    Args:
        frame: Parsed data rows (one column per header)
        headers: Columns to profile; defaults to all frame columns
        sample_size: Number of leading rows to sample

    Returns:
        Dict of column label -> ColumnProfile, in header order
    """
    sample = frame.head(sample_size)
    columns = list(headers) if headers is not None else [str(c) for c in frame.columns]

    profiles: Dict[str, ColumnProfile] = {}
    for column in columns:
        profile = ColumnProfile(column=column, sampled_rows=len(sample))
        if column in sample.columns:
            kinds = classify_cells(sample[column])
            profile.price_count = int(np.count_nonzero(kinds == CELL_PRICE))
            profile.text_count = int(np.count_nonzero(kinds == CELL_TEXT))
            profile.empty_count = int(np.count_nonzero(kinds == CELL_EMPTY))
            texts = sample[column][kinds == CELL_TEXT]
            profile.samples = [str(v).strip() for v in texts.head(MAX_SAMPLES)]
        else:
            profile.empty_count = len(sample)
        profiles[column] = profile

    return profiles
