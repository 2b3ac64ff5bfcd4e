from .settings import (
    CONFLICT_KEY,
    DEFAULT_BATCH_SIZE,
    HEADER_KEYWORDS,
    HEADER_MATCH_THRESHOLD,
    HEADER_SCAN_ROWS,
    MAX_FILE_SIZE_MB,
    MAX_SHEET_ROWS,
    PROJECT_ROOT,
    STORE_PATH,
    SUPPORTED_DELIMITED_EXTENSIONS,
    SUPPORTED_WORKBOOK_EXTENSIONS,
    TOP_DRIVERS_LIMIT,
)

__all__ = [
    "CONFLICT_KEY",
    "DEFAULT_BATCH_SIZE",
    "HEADER_KEYWORDS",
    "HEADER_MATCH_THRESHOLD",
    "HEADER_SCAN_ROWS",
    "MAX_FILE_SIZE_MB",
    "MAX_SHEET_ROWS",
    "PROJECT_ROOT",
    "STORE_PATH",
    "SUPPORTED_DELIMITED_EXTENSIONS",
    "SUPPORTED_WORKBOOK_EXTENSIONS",
    "TOP_DRIVERS_LIMIT",
]
