"""
CSV READER
----------
Decodes uploaded CSV bytes and splits text into raw rows with NO header
assumption. Rows keep their source order and may be ragged; title or
company-info lines above the real header stay in place for the extractor.
"""

from __future__ import annotations

import csv
import io
from typing import List, Sequence

_DELIMITERS = ",;\t|"
_SNIFF_CHARS = 20_000


def decode_text(data: bytes) -> str:
    """Decode upload bytes as UTF-8 (BOM stripped), falling back to cp1252/latin-1."""
    for encoding in ("utf-8-sig", "cp1252"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def _detect_delimiter(text: str) -> str:
    sample = text[:_SNIFF_CHARS]
    try:
        return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS).delimiter
    except csv.Error:
        return ","


def read_csv_rows(text: str, keep_blank: bool = False) -> List[List[str]]:
    """
    Split CSV text into rows of raw cell strings.

    Args:
        text: Whole file content
        keep_blank: Keep blank lines so row indexes match source lines

    Returns:
        List of rows (lists of cells), blank lines removed unless keep_blank
    """
    text = text.lstrip("﻿")
    if not text.strip():
        return []

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=_detect_delimiter(text))
    rows = list(reader)
    if keep_blank:
        return rows
    return [row for row in rows if any(cell.strip() for cell in row)]


def rows_to_csv_text(rows: Sequence[Sequence[object]]) -> str:
    """Render raw rows back to comma-separated text (used for the AI prompt)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow(["" if cell is None else cell for cell in row])
    return buffer.getvalue()
