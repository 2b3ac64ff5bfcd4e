"""
Upload pipeline: file -> DeliveryRecords -> storage.

One sequential run per uploaded file:
read rows -> locate header row -> row dicts -> map -> enhance -> validate -> submit.

Parse failures (missing, unreadable or unsupported files) are caught here and
returned as a failed ImportResult with no records. Row-level problems never
fail the upload: unusable cells are left out of the record. Records without
an identifier are kept in the result but not submitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from config import DEFAULT_BATCH_SIZE
from domain.canonical import DeliveryRecord, validate_record
from input_readers import locate_header_row, numbered_row_objects, read_raw_rows
from storage.batch_submitter import InsertFn, SubmissionResult, submit_in_batches

from .enhancer import EnhancementReport, enhance_records
from .to_canonical import rows_to_canonical

logger = logging.getLogger(__name__)


@dataclass
class ParsedFile:
    records: List[DeliveryRecord]
    report: EnhancementReport
    header_index: int
    header_detected: bool
    total_rows: int


@dataclass
class ImportResult:
    success: bool
    message: str
    records: List[DeliveryRecord] = field(default_factory=list)
    report: Optional[EnhancementReport] = None
    header_index: Optional[int] = None
    header_detected: bool = False
    unidentified_count: int = 0
    submission: Optional[SubmissionResult] = None
    error: Optional[str] = None


def parse_delivery_file(path: Path, sheet_name: str | None = None) -> ParsedFile:
    """
    Read and normalize a delivery export without storing it.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file cannot be read or holds no rows
    """
    path = Path(path)
    raw_rows = read_raw_rows(path, sheet_name=sheet_name)
    if not raw_rows:
        raise ValueError(f"No data found in {path.name}")

    header_index = locate_header_row(raw_rows)
    header_detected = header_index is not None
    if header_index is None:
        logger.warning("No header row detected in %s; using the first row as headers", path.name)
        header_index = 0
    else:
        logger.info("Header row detected at row %d in %s", header_index + 1, path.name)

    numbered = numbered_row_objects(raw_rows, header_index)
    rows = [row for _, row in numbered]
    if rows:
        logger.debug("Columns detected: %s", list(rows[0].keys()))

    records = rows_to_canonical(rows, source_file=path.name, row_numbers=[n for n, _ in numbered])
    enhanced, report = enhance_records(records)

    return ParsedFile(
        records=enhanced,
        report=report,
        header_index=header_index,
        header_detected=header_detected,
        total_rows=len(rows),
    )


def import_delivery_file(
    path: Path,
    insert: InsertFn,
    batch_size: int = DEFAULT_BATCH_SIZE,
    should_abort: Callable[[], bool] | None = None,
    sheet_name: str | None = None,
) -> ImportResult:
    """Parse a delivery export and submit its validated records through `insert`."""
    path = Path(path)

    try:
        parsed = parse_delivery_file(path, sheet_name=sheet_name)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Could not parse %s: %s", path.name, e)
        return ImportResult(success=False, message=f"Could not read {path.name}: {e}", error=str(e))

    validated = [v for v in (validate_record(r) for r in parsed.records) if v is not None]
    unidentified = len(parsed.records) - len(validated)
    if unidentified:
        logger.warning("%d records have no identifier and will not be stored", unidentified)

    submission = submit_in_batches(
        [v.to_row() for v in validated],
        insert,
        batch_size=batch_size,
        should_abort=should_abort,
    )

    return ImportResult(
        success=submission.success,
        message=submission.message,
        records=parsed.records,
        report=parsed.report,
        header_index=parsed.header_index,
        header_detected=parsed.header_detected,
        unidentified_count=unidentified,
        submission=submission,
        error=submission.error,
    )
