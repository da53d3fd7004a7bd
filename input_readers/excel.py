"""
EXCEL READER
------------
Reads .xlsx uploads into raw rows with NO transformation and NO header
assumption. The header row is located later by the tabular extractor, the same
way as for CSV text.
"""

from __future__ import annotations

import io
import logging
from typing import Any, List

from openpyxl import load_workbook

from domain.errors import BadRequest

logger = logging.getLogger(__name__)

UNREADABLE_WORKBOOK_MESSAGE = "Cannot read Excel file (is it corrupted or wrong format?)"


def read_excel_rows(data: bytes, sheet_name: str | None = None) -> List[List[Any]]:
    """
    Read an Excel workbook from bytes.

    Args:
        data: Raw .xlsx file content
        sheet_name: Optional sheet name (uses first sheet if None)

    Returns:
        List of rows (lists of cell values), fully empty rows skipped

    Raises:
        BadRequest: If the bytes are not a readable workbook
    """
    try:
        wb = load_workbook(io.BytesIO(data), data_only=True, read_only=True)
    except Exception as e:
        logger.warning("Workbook could not be loaded: %s", e)
        raise BadRequest(UNREADABLE_WORKBOOK_MESSAGE) from e

    try:
        ws = wb[sheet_name] if sheet_name else wb.worksheets[0]

        rows: List[List[Any]] = []
        for values in ws.iter_rows(values_only=True):
            row = ["" if v is None else v for v in values]
            if any(str(v).strip() for v in row):
                rows.append(row)
    finally:
        wb.close()

    return rows
