from .csv_text import decode_text, read_csv_rows, rows_to_csv_text
from .documents import (
    FILE_TYPE_CSV,
    FILE_TYPE_PDF,
    FILE_TYPE_XLSX,
    MIME_BY_FILE_TYPE,
    classify_file,
    to_data_url,
)
from .excel import read_excel_rows

__all__ = [
    "FILE_TYPE_CSV",
    "FILE_TYPE_PDF",
    "FILE_TYPE_XLSX",
    "MIME_BY_FILE_TYPE",
    "classify_file",
    "decode_text",
    "read_csv_rows",
    "read_excel_rows",
    "rows_to_csv_text",
    "to_data_url",
]
