"""Header-row detection for exports that prepend title/company rows."""

from __future__ import annotations

from typing import Any, List, Sequence

from config import HEADER_SCAN_ROWS, MAX_HEADER_LABEL_CHARS
from fields.normalization import to_text

MIN_FILLED_CELLS = 3
MIN_LETTER_CELLS = 2


def _has_letter(text: str) -> bool:
    return any(ch.isalpha() for ch in text)


def _filled_cells(row: Sequence[Any]) -> List[str]:
    return [text for text in (to_text(v) for v in row) if text is not None]


def locate_header_row(rows: Sequence[Sequence[Any]], window: int = HEADER_SCAN_ROWS) -> int:
    """
    Return the index of the first plausible header row within `window` rows.

    A row qualifies with at least 3 non-empty cells of which at least 2 contain
    a letter. Blank rows count toward the window. Falls back to the first
    non-blank row, which is row 0 unless the input starts with blank lines.
    """
    for index, row in enumerate(rows[:window]):
        cells = _filled_cells(row)
        if len(cells) >= MIN_FILLED_CELLS and sum(1 for c in cells if _has_letter(c)) >= MIN_LETTER_CELLS:
            return index
    return next((index for index, row in enumerate(rows) if _filled_cells(row)), 0)


def _placeholder(position: int) -> str:
    return f"col_{position}"


def synthesize_headers(cells: Sequence[Any], width: int | None = None) -> List[str]:
    """
    Turn header-row cells into unique column labels.

    Blank, overlong or "Unnamed" cells get a positional placeholder (col_1,
    col_2, ...); repeated labels get a numeric suffix.
    """
    width = max(width or 0, len(cells))
    headers: List[str] = []
    seen: dict[str, int] = {}

    for position in range(1, width + 1):
        raw = cells[position - 1] if position <= len(cells) else None
        label = to_text(raw)
        if (
            label is None
            or len(label) > MAX_HEADER_LABEL_CHARS
            or label.lower() == "unnamed"
            or label.lower().startswith("unnamed:")
        ):
            label = _placeholder(position)

        if label in seen:
            seen[label] += 1
            label = f"{label}_{seen[label]}"
            while label in seen:
                label = f"{label}_{position}"
        seen[label] = 1
        headers.append(label)

    return headers
