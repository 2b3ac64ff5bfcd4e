"""
DELIMITED TEXT READER
---------------------
Reads CSV/TSV exports into raw rows. Every cell is kept as text; coercion
happens in the mapper exactly as for workbook cells.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, List, Tuple

import pandas as pd

from config import MAX_SHEET_ROWS

logger = logging.getLogger(__name__)


def _sniff_layout(path: Path) -> Tuple[str, int]:
    """Return (delimiter, widest row). Title rows above the header are often narrower."""
    with path.open("r", encoding="utf-8-sig", errors="replace", newline="") as f:
        sample = f.read(64 * 1024)
        f.seek(0)

        if path.suffix.lower() == ".tsv":
            delimiter = "\t"
        else:
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

        width = max((len(row) for row in csv.reader(f, delimiter=delimiter)), default=0)
    return delimiter, width


def read_delimited_rows(csv_path: Path) -> List[List[Any]]:
    """
    Read a delimited text file as rows of strings (no header interpretation).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file cannot be parsed or exceeds MAX_SHEET_ROWS
    """
    csv_path = csv_path.expanduser().resolve()

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    try:
        delimiter, width = _sniff_layout(csv_path)
    except csv.Error as e:
        raise ValueError(f"Cannot read CSV file (is it corrupted or wrong format?): {e}") from e
    if width == 0:
        return []

    try:
        df = pd.read_csv(
            csv_path,
            sep=delimiter,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8-sig",
            engine="python",
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValueError(f"Cannot read CSV file (is it corrupted or wrong format?): {e}") from e

    if len(df) > MAX_SHEET_ROWS:
        raise ValueError(f"File has more than {MAX_SHEET_ROWS:,} rows. Split the file and upload it in parts.")

    logger.debug("Read %d rows from %s (delimiter %r)", len(df), csv_path.name, delimiter)
    return [[None if pd.isna(v) else v for v in row] for row in df.itertuples(index=False, name=None)]
