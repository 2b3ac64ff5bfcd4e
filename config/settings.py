"""
Central configuration for ingestion limits and pipeline defaults.

This module defines:
- File and sheet limits to prevent memory issues and oversized spreadsheets.
- Header detection defaults (keywords, match threshold, rows scanned).
- Batch size for storage submission and the local delivery table location.

Values are constants; a few can be overridden through the environment
(or a `.env` file) so deployments can tune them without code changes.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


PROJECT_ROOT = Path(__file__).resolve().parents[1]

STORE_PATH = Path(os.getenv("DELIVERY_STORE_PATH", str(PROJECT_ROOT / "data" / "deliveries.json")))

MAX_FILE_SIZE_MB = int(os.getenv("DELIVERY_MAX_FILE_SIZE_MB", "50"))
MAX_SHEET_ROWS = 100_000

SUPPORTED_WORKBOOK_EXTENSIONS = (".xlsx", ".xlsm")
SUPPORTED_DELIMITED_EXTENSIONS = (".csv", ".tsv", ".txt")

HEADER_KEYWORDS = (
    "job id",
    "status",
    "driver",
    "customer",
    "address",
    "pickup",
    "delivery",
)
HEADER_MATCH_THRESHOLD = int(os.getenv("DELIVERY_HEADER_THRESHOLD", "3"))
HEADER_SCAN_ROWS = 10

DEFAULT_BATCH_SIZE = int(os.getenv("DELIVERY_BATCH_SIZE", "100"))
CONFLICT_KEY = "job_id"

TOP_DRIVERS_LIMIT = 5
