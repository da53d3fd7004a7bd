"""
DOCUMENT READER
---------------
Classifies uploads and converts binary documents to base64 data URLs for the
multimodal AI call.
"""

from __future__ import annotations

import base64

from domain.errors import UnsupportedFileType

FILE_TYPE_CSV = "csv"
FILE_TYPE_PDF = "pdf"
FILE_TYPE_XLSX = "xlsx"

_EXTENSIONS = {
    ".csv": FILE_TYPE_CSV,
    ".pdf": FILE_TYPE_PDF,
    ".xlsx": FILE_TYPE_XLSX,
}

_MIME_TYPES = {
    "text/csv": FILE_TYPE_CSV,
    "application/csv": FILE_TYPE_CSV,
    "application/pdf": FILE_TYPE_PDF,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": FILE_TYPE_XLSX,
}

MIME_BY_FILE_TYPE = {
    FILE_TYPE_CSV: "text/csv",
    FILE_TYPE_PDF: "application/pdf",
    FILE_TYPE_XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def classify_file(filename: str | None, content_type: str | None = None) -> str:
    """
    Decide the upload type from its extension, then its MIME type.

    Returns:
        One of "csv", "pdf", "xlsx"

    Raises:
        UnsupportedFileType: For anything else
    """
    name = (filename or "").strip().lower()
    for extension, file_type in _EXTENSIONS.items():
        if name.endswith(extension):
            return file_type

    mime = (content_type or "").split(";")[0].strip().lower()
    if mime in _MIME_TYPES:
        return _MIME_TYPES[mime]

    raise UnsupportedFileType("Please upload a CSV, Excel (.xlsx) or PDF file")


def to_data_url(data: bytes, mime_type: str) -> str:
    """
    Convert file bytes to data URL format for API calls.

    Returns:
        Data URL string (data:application/pdf;base64,...)
    """
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
