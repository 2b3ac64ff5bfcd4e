"""
SHEET DISPATCH
--------------
Picks the reader for an uploaded file and turns raw rows into row dicts
keyed by the verbatim header strings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence, Set, Tuple

from config import MAX_FILE_SIZE_MB, SUPPORTED_DELIMITED_EXTENSIONS, SUPPORTED_WORKBOOK_EXTENSIONS

from .delimited import read_delimited_rows
from .excel import read_sheet_rows


def read_raw_rows(path: Path, sheet_name: str | None = None) -> List[List[Any]]:
    """
    Read a workbook or delimited text file as raw rows.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is too large, has an unsupported extension,
            or cannot be parsed
    """
    path = Path(path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > MAX_FILE_SIZE_MB:
        raise ValueError(f"File too large ({size_mb:.1f} MB). Upload a file smaller than {MAX_FILE_SIZE_MB} MB.")

    suffix = path.suffix.lower()
    if suffix in SUPPORTED_WORKBOOK_EXTENSIONS:
        return read_sheet_rows(path, sheet_name=sheet_name)
    if suffix in SUPPORTED_DELIMITED_EXTENSIONS:
        return read_delimited_rows(path)

    supported = ", ".join(SUPPORTED_WORKBOOK_EXTENSIONS + SUPPORTED_DELIMITED_EXTENSIONS)
    raise ValueError(f"Unsupported file format '{suffix or path.name}'. Supported: {supported}")


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def build_headers(header_row: Sequence[Any]) -> List[str]:
    """Strip header cells, name blank ones col_<n>, suffix duplicates _1, _2, ..."""
    headers: List[str] = []
    taken: Set[str] = set()
    suffixes: Dict[str, int] = {}
    for c, h in enumerate(header_row, start=1):
        name = str(h).strip() if not _is_empty(h) else f"col_{c}"
        if name in taken:
            n = suffixes.get(name, 0) + 1
            while f"{name}_{n}" in taken:
                n += 1
            suffixes[name] = n
            name = f"{name}_{n}"
        taken.add(name)
        headers.append(name)
    return headers


def numbered_row_objects(
    rows: Sequence[Sequence[Any]], header_index: int = 0
) -> List[Tuple[int, Dict[str, Any]]]:
    """
    Convert raw rows into (sheet row number, row dict) pairs.

    Row numbers are 1-based positions in the raw rows, so they still point at
    the right line after empty rows are skipped.
    """
    if header_index >= len(rows):
        return []

    headers = build_headers(rows[header_index])

    objects: List[Tuple[int, Dict[str, Any]]] = []
    for number, raw in enumerate(rows[header_index + 1:], start=header_index + 2):
        row: Dict[str, Any] = {}
        is_empty = True

        for c, header in enumerate(headers):
            value = raw[c] if c < len(raw) else None
            if not _is_empty(value):
                is_empty = False
            row[header] = value

        if not is_empty:
            objects.append((number, row))

    return objects


def rows_to_objects(rows: Sequence[Sequence[Any]], header_index: int = 0) -> List[Dict[str, Any]]:
    """Convert raw rows into dicts keyed by the header row; fully empty rows are skipped."""
    return [row for _, row in numbered_row_objects(rows, header_index)]
