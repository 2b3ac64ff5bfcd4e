"""
Batched submission of delivery rows to storage.

Splits the record list into contiguous batches and hands each to the
storage collaborator's bulk insert/upsert, one call at a time.

Policy:
- Batches are submitted sequentially in original order, so batch index N
  always covers records [N * batch_size, (N + 1) * batch_size).
- Fail fast: the first failed batch ends the submission. Earlier batches
  stay persisted; later batches are never attempted.
- The only cancellation point is before a batch starts (`should_abort`).
- No deduplication here; re-upload idempotency is the store's upsert key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from config import DEFAULT_BATCH_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class InsertOutcome:
    """What the storage collaborator reports for one bulk call."""

    success: bool
    error: Optional[str] = None


InsertFn = Callable[[List[Dict[str, Any]]], InsertOutcome]


@dataclass(frozen=True)
class SubmissionResult:
    total_records: int
    batch_size: int
    inserted_count: int = 0
    batches_submitted: int = 0
    failed_batch_index: Optional[int] = None
    error: Optional[str] = None
    aborted: bool = False

    @property
    def success(self) -> bool:
        return self.failed_batch_index is None and not self.aborted

    @property
    def message(self) -> str:
        if self.success:
            return f"Imported {self.inserted_count} of {self.total_records} records"
        if self.aborted:
            return f"Import cancelled: {self.inserted_count} of {self.total_records} records imported"
        return (
            f"{self.inserted_count} of {self.total_records} records imported; "
            f"batch {self.failed_batch_index + 1} failed: {self.error}"
        )


def partition(items: Sequence[T], batch_size: int) -> List[List[T]]:
    """Split into contiguous batches of `batch_size` (last one may be shorter)."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be a positive integer, got: {batch_size}")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]


def _submit_batch(acc: SubmissionResult, index: int, batch: List[Dict[str, Any]], insert: InsertFn) -> SubmissionResult:
    """Fold step: submit one batch and return the updated accumulator."""
    try:
        outcome = insert(batch)
    except Exception as e:  # storage client errors of any kind end the upload
        outcome = InsertOutcome(success=False, error=str(e) or type(e).__name__)

    if not outcome.success:
        logger.error("Batch %d (%d records) failed: %s", index + 1, len(batch), outcome.error)
        return replace(
            acc,
            batches_submitted=acc.batches_submitted + 1,
            failed_batch_index=index,
            error=outcome.error or "Unknown storage error",
        )

    logger.info("Inserted batch %d: %d records", index + 1, len(batch))
    return replace(
        acc,
        inserted_count=acc.inserted_count + len(batch),
        batches_submitted=acc.batches_submitted + 1,
    )


def submit_in_batches(
    records: Sequence[Dict[str, Any]],
    insert: InsertFn,
    batch_size: int = DEFAULT_BATCH_SIZE,
    should_abort: Callable[[], bool] | None = None,
) -> SubmissionResult:
    """Submit records batch by batch and return the accumulated result."""
    batches = partition(records, batch_size)
    acc = SubmissionResult(total_records=len(records), batch_size=batch_size)

    logger.info("Submitting %d records in %d batches of up to %d", len(records), len(batches), batch_size)

    for index, batch in enumerate(batches):
        if should_abort is not None and should_abort():
            logger.warning("Submission aborted before batch %d", index + 1)
            return replace(acc, aborted=True)

        acc = _submit_batch(acc, index, batch, insert)
        if acc.failed_batch_index is not None:
            return acc

    return acc
