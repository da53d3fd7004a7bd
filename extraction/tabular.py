"""
Direct (heuristic) extraction of products from tabular data.

This is the fast path: no AI call, no truncation. It turns raw rows from a CSV
or spreadsheet into CandidateProduct records by

1. locating the real header row (title rows are common in wholesaler exports),
2. mapping columns onto canonical fields by header name,
3. falling back to column-type statistics for the name and price columns,
4. building one record per qualifying data row, in source order.

Row-level problems never fail the attempt: the row is skipped and counted.
A file without a usable name column yields an empty result, which makes the
caller try the AI fallback instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd
from pydantic import ValidationError

from config import FILL_RATE_THRESHOLD
from domain.canonical import CANONICAL_FIELDS, CandidateProduct
from fields.header_matching import (
    FIELD_CANDIDATES,
    OPTIONAL_FIELDS,
    PRICE_FIELDS,
    RULE_AUTO,
    HeaderMatch,
    find_column,
    find_exact,
    find_fuzzy,
)
from fields.normalization import to_int, to_number, to_text
from input_readers.csv_text import read_csv_rows

from .header_row import locate_header_row, synthesize_headers
from .profiling import ColumnProfile, profile_columns

logger = logging.getLogger(__name__)

NON_PRODUCT_LABELS = frozenset(
    {"total", "grand total", "name", "product name", "item", "particulars", "description"}
)
MIN_NAME_CHARS = 2

NUMBER_FIELDS = frozenset(PRICE_FIELDS)
INTEGER_FIELDS = frozenset({"stock_qty"})


class NoNameColumn(Exception):
    """Raised when neither headers nor column statistics reveal a name column."""


@dataclass(frozen=True)
class FieldMapping:
    """Resolved canonical field -> source column decisions for one file."""

    matches: Mapping[str, HeaderMatch]

    def column_for(self, field_name: str) -> Optional[str]:
        match = self.matches.get(field_name)
        return match.column if match else None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {name: self.column_for(name) for name in CANONICAL_FIELDS}


@dataclass
class TabularResult:
    products: List[CandidateProduct] = field(default_factory=list)
    skipped_rows: int = 0
    mapping: Optional[FieldMapping] = None
    header_row: int = 0


def _build_frame(rows: Sequence[Sequence[Any]], header_row: int) -> tuple[List[str], pd.DataFrame]:
    width = max(len(row) for row in rows)
    headers = synthesize_headers(rows[header_row], width=width)

    data = []
    for row in rows[header_row + 1:]:
        cells = ["" if v is None else v for v in row]
        cells = (cells + [""] * width)[:width]
        data.append(cells)

    frame = pd.DataFrame(data, columns=headers, dtype=object)
    if not frame.empty:
        filled = frame.apply(lambda col: col.map(lambda v: to_text(v) is not None))
        frame = frame[filled.any(axis=1)].reset_index(drop=True)
    return headers, frame


def resolve_name_column(headers: Sequence[str], profiles: Mapping[str, ColumnProfile]) -> HeaderMatch:
    """Header match first, then the most text-heavy column above the fill threshold."""
    match = find_column(headers, FIELD_CANDIDATES["name"])
    if match:
        return match

    eligible = [p for p in profiles.values() if p.text_fill_rate > FILL_RATE_THRESHOLD]
    if not eligible:
        raise NoNameColumn("no column looks like product names")
    best = max(eligible, key=lambda p: p.text_count)
    return HeaderMatch(column=best.column, candidate=None, rule=RULE_AUTO)


def resolve_field_mapping(headers: Sequence[str], profiles: Mapping[str, ColumnProfile]) -> FieldMapping:
    """
    Decide which column feeds each canonical field.

    Price auto-detection only back-fills selling_price and mrp_price, and only
    when no price column was found by name. purchase_price and
    without_tax_price are never auto-filled.
    """
    matches: Dict[str, HeaderMatch] = {"name": resolve_name_column(headers, profiles)}
    claimed = {matches["name"].column}

    ordered = PRICE_FIELDS + OPTIONAL_FIELDS
    for finder in (find_exact, find_fuzzy):
        for field_name in ordered:
            if field_name in matches:
                continue
            match = finder(headers, FIELD_CANDIDATES[field_name], exclude=claimed)
            if match:
                matches[field_name] = match
                claimed.add(match.column)

    if not any(name in matches for name in PRICE_FIELDS):
        priced = [
            p.column
            for p in profiles.values()
            if p.column not in claimed and p.price_fill_rate > FILL_RATE_THRESHOLD
        ]
        for field_name, column in zip(("selling_price", "mrp_price"), priced):
            matches[field_name] = HeaderMatch(column=column, candidate=None, rule=RULE_AUTO)

    return FieldMapping(matches=MappingProxyType(matches))


def _cell_value(field_name: str, raw: Any) -> Any:
    if field_name in NUMBER_FIELDS:
        return to_number(raw)
    if field_name in INTEGER_FIELDS:
        return to_int(raw)
    if field_name == "packing_final_price":
        number = to_number(raw)
        return number if number is not None else to_text(raw)
    return to_text(raw)


def is_product_name(name: Optional[str]) -> bool:
    if name is None or len(name) < MIN_NAME_CHARS:
        return False
    return name.lower() not in NON_PRODUCT_LABELS


def extract_products(rows: Sequence[Sequence[Any]]) -> TabularResult:
    """
    Extract candidate products from raw rows.

    Args:
        rows: Raw rows (lists of cells) in source order, header not yet known

    Returns:
        TabularResult; empty products when no name column could be resolved
    """
    if not rows:
        return TabularResult()

    header_row = locate_header_row(rows)
    headers, frame = _build_frame(rows, header_row)
    profiles = profile_columns(frame, headers)

    try:
        mapping = resolve_field_mapping(headers, profiles)
    except NoNameColumn as e:
        logger.info("Tabular extraction found no name column: %s", e)
        return TabularResult(header_row=header_row)

    logger.debug(
        "Field mapping (header row %d): %s",
        header_row,
        {k: v for k, v in mapping.as_dict().items() if v},
    )

    result = TabularResult(mapping=mapping, header_row=header_row)
    for record in frame.to_dict("records"):
        name = to_text(record.get(mapping.column_for("name")))
        if not is_product_name(name):
            result.skipped_rows += 1
            continue

        values: Dict[str, Any] = {"name": name}
        for field_name, match in mapping.matches.items():
            if field_name != "name":
                values[field_name] = _cell_value(field_name, record.get(match.column))

        try:
            result.products.append(CandidateProduct.from_tabular(values))
        except (ValidationError, ValueError, TypeError) as e:
            logger.debug("Skipping row %r: %s", name, e)
            result.skipped_rows += 1

    return result


def extract_from_csv_text(text: str) -> TabularResult:
    """Run the fast path on CSV text; any internal failure means 'nothing found'."""
    try:
        return extract_products(read_csv_rows(text, keep_blank=True))
    except Exception:
        logger.warning("Direct CSV extraction failed; falling back to AI", exc_info=True)
        return TabularResult()
