"""
EXCEL READER
------------
Reads workbook files into raw rows with NO transformation.
Returns every row as a list of cell values; header detection happens later.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path
from typing import Any, List
from xml.etree.ElementTree import ParseError

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from config import MAX_SHEET_ROWS

logger = logging.getLogger(__name__)


def read_sheet_rows(xlsx_path: Path, sheet_name: str | None = None) -> List[List[Any]]:
    """
    Read every row of a worksheet as a list of cell values.

    Args:
        xlsx_path: Path to Excel file
        sheet_name: Optional sheet name (uses first sheet if None)

    Returns:
        List of rows; cells are None, str, int, float, bool or datetime

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is not a valid workbook, the sheet is missing,
            or the sheet exceeds MAX_SHEET_ROWS
    """
    xlsx_path = xlsx_path.expanduser().resolve()

    if not xlsx_path.exists():
        raise FileNotFoundError(f"Excel file not found: {xlsx_path}")

    try:
        wb = load_workbook(xlsx_path, data_only=True, read_only=True)
    except (InvalidFileException, zipfile.BadZipFile, ParseError, KeyError, OSError) as e:
        raise ValueError(f"Cannot read Excel file (is it corrupted or wrong format?): {e}") from e

    try:
        if sheet_name:
            if sheet_name not in wb.sheetnames:
                raise ValueError(f"Sheet '{sheet_name}' not found in {xlsx_path.name}")
            ws = wb[sheet_name]
        else:
            ws = wb.worksheets[0]

        rows: List[List[Any]] = []
        # Read-only sheets are parsed lazily, so damaged parts only fail here.
        try:
            for values in ws.iter_rows(values_only=True):
                rows.append(list(values))
                if len(rows) > MAX_SHEET_ROWS:
                    raise ValueError(
                        f"Sheet has more than {MAX_SHEET_ROWS:,} rows. Split the file and upload it in parts."
                    )
        except (ParseError, zipfile.BadZipFile, zlib.error, KeyError, EOFError) as e:
            raise ValueError(f"Cannot read Excel file (is it corrupted or wrong format?): {e}") from e
    finally:
        wb.close()

    logger.debug("Read %d rows from %s (sheet %s)", len(rows), xlsx_path.name, ws.title)
    return rows
