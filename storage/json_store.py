"""
Local delivery table persisted as JSON.

Holds uploaded delivery rows for the dashboard views. Rows are upserted on
a conflict key (default `job_id`): a row whose key is already stored
replaces the stored row, so re-uploading the same export is idempotent.
Rows without the key are appended.

The table is written via a temporary file and then replaced, so a failed
write leaves the previous table intact.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from config import CONFLICT_KEY, STORE_PATH

from .batch_submitter import InsertOutcome

logger = logging.getLogger(__name__)


class DeliveryStoreError(RuntimeError):
    """Raised when the table file is unreadable or has an invalid format."""
    pass


class JsonDeliveryStore:
    def __init__(self, path: Path = STORE_PATH, conflict_key: str = CONFLICT_KEY):
        self.path = Path(path)
        self.conflict_key = conflict_key

    def load_all(self) -> List[Dict[str, Any]]:
        """Return every stored row (empty if the table does not exist yet)."""
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DeliveryStoreError(f"Failed to read/parse delivery table: {self.path}") from e

        if not isinstance(raw, dict) or not isinstance(raw.get("rows"), list):
            raise DeliveryStoreError(
                f"Invalid table format in {self.path}. Expected {{\"rows\": [...]}}"
            )
        return raw["rows"]

    def _save(self, rows: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")

        payload = {"rows": rows}
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def upsert(self, batch: List[Dict[str, Any]]) -> InsertOutcome:
        """Insert or replace rows on the conflict key; storage errors come back as an outcome."""
        try:
            rows = self.load_all()
        except DeliveryStoreError as e:
            return InsertOutcome(success=False, error=str(e))

        positions = {
            row[self.conflict_key]: i
            for i, row in enumerate(rows)
            if row.get(self.conflict_key) is not None
        }
        uploaded_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

        for item in batch:
            row = dict(item, uploaded_at=uploaded_at)
            key = row.get(self.conflict_key)
            if key is not None and key in positions:
                rows[positions[key]] = row
            else:
                if key is not None:
                    positions[key] = len(rows)
                rows.append(row)

        try:
            self._save(rows)
        except (OSError, TypeError, ValueError) as e:
            return InsertOutcome(success=False, error=f"Failed to write delivery table: {e}")

        logger.debug("Upserted %d rows into %s (%d total)", len(batch), self.path, len(rows))
        return InsertOutcome(success=True)

    def clear(self) -> None:
        """Remove all stored rows."""
        self._save([])
