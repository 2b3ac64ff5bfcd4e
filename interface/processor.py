"""
Upload processing for the Streamlit interface.

Saves the uploaded file to a temporary location, runs the import pipeline
against the local delivery table and returns a display-ready DataFrame.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Optional, Tuple

import pandas as pd

from config import DEFAULT_BATCH_SIZE, STORE_PATH
from extraction.importer import ImportResult, import_delivery_file
from storage.json_store import JsonDeliveryStore

logger = logging.getLogger(__name__)


DISPLAY_COLUMNS = [
    "job_id",
    "status",
    "service_type",
    "customer_name",
    "company_name",
    "collecting_driver",
    "delivering_driver",
    "pickup_address",
    "delivery_address",
    "cost",
    "distance",
    "created_at",
    "collected_at",
    "delivered_at",
]


def records_to_dataframe(records) -> pd.DataFrame:
    """Records as a DataFrame with the common columns first."""
    df = pd.DataFrame.from_records(list(records))
    if df.empty:
        return df
    leading = [c for c in DISPLAY_COLUMNS if c in df.columns]
    rest = [c for c in df.columns if c not in leading]
    return df[leading + rest]


def process_uploaded_file(
    uploaded_file: Any,
    store_path: Path | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Tuple[bool, ImportResult, Optional[pd.DataFrame], Optional[str]]:
    """
    Run the import pipeline for a Streamlit UploadedFile.

    Returns:
        (success, result, df, error)
    """
    store = JsonDeliveryStore(store_path or STORE_PATH)

    with tempfile.TemporaryDirectory() as tmp_dir:
        tmp_path = Path(tmp_dir) / Path(uploaded_file.name).name
        with open(tmp_path, "wb") as f:
            f.write(uploaded_file.getbuffer())

        result = import_delivery_file(tmp_path, store.upsert, batch_size=batch_size)

    df = records_to_dataframe(result.records) if result.records else None
    logger.info("Upload %s: %s", uploaded_file.name, result.message)
    return result.success, result, df, result.error
