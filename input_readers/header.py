"""
HEADER ROW LOCATOR
------------------
Courier exports often carry a title block, filters or blank rows above the
real column headers. This finds the first row that looks like headers.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from config import HEADER_KEYWORDS, HEADER_MATCH_THRESHOLD, HEADER_SCAN_ROWS


def count_keyword_cells(row: Sequence[Any], keywords: Iterable[str] = HEADER_KEYWORDS) -> int:
    """Count cells containing at least one keyword (case-insensitive, `_` read as a space)."""
    keywords = tuple(k.lower() for k in keywords)
    matches = 0
    for cell in row:
        if cell is None:
            continue
        text = str(cell).lower().replace("_", " ")
        if any(k in text for k in keywords):
            matches += 1
    return matches


def locate_header_row(
    rows: Sequence[Sequence[Any]],
    keywords: Iterable[str] = HEADER_KEYWORDS,
    threshold: int = HEADER_MATCH_THRESHOLD,
    max_rows: int = HEADER_SCAN_ROWS,
) -> Optional[int]:
    """
    Return the zero-based index of the first row with at least `threshold`
    keyword cells among the first `max_rows` rows, or None if none qualifies.
    """
    keywords = tuple(keywords)
    for index, row in enumerate(rows[:max_rows]):
        if count_keyword_cells(row, keywords) >= threshold:
            return index
    return None
