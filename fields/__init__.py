from .header_matching import FIELD_CANDIDATES, HeaderMatch, find_column, normalize_header
from .normalization import to_int, to_non_negative_number, to_number, to_text

__all__ = [
    "FIELD_CANDIDATES",
    "HeaderMatch",
    "find_column",
    "normalize_header",
    "to_int",
    "to_non_negative_number",
    "to_number",
    "to_text",
]
