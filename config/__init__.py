from .settings import (
    DEFAULT_AI_TIMEOUT_SECONDS,
    DEFAULT_GATEWAY_URL,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    FILL_RATE_THRESHOLD,
    HEADER_SCAN_ROWS,
    IMPORT_ROLES,
    MAX_AI_TEXT_CHARS,
    MAX_HEADER_LABEL_CHARS,
    MAX_UPLOAD_BYTES,
    MULTIPART_OVERHEAD_BYTES,
    PROFILE_SAMPLE_ROWS,
    ServiceSettings,
)

__all__ = [
    "DEFAULT_AI_TIMEOUT_SECONDS",
    "DEFAULT_GATEWAY_URL",
    "DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
    "FILL_RATE_THRESHOLD",
    "HEADER_SCAN_ROWS",
    "IMPORT_ROLES",
    "MAX_AI_TEXT_CHARS",
    "MAX_HEADER_LABEL_CHARS",
    "MAX_UPLOAD_BYTES",
    "MULTIPART_OVERHEAD_BYTES",
    "PROFILE_SAMPLE_ROWS",
    "ServiceSettings",
]
