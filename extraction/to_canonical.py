"""
Row-dict extraction into the DeliveryRecord format.

This module turns header-keyed rows from any courier export into
DeliveryRecord dictionaries:
- Resolve which of a row's headers carries each canonical field, using the
  ordered alias table in `domain.aliases`.
- Coerce the resolved cell with the coercion matching the field kind.
- Leave a field out when its column is missing or its value unusable.

Each field is resolved on its own, so an export missing a "Cost" column
still yields every other field.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from domain.aliases import BOOLEAN_FIELDS, DATE_FIELDS, FIELD_ALIASES, NUMBER_FIELDS, STATUS_FIELD
from domain.canonical import DeliveryRecord
from fields.enhancement import normalize_status
from fields.normalization import to_boolean, to_date, to_number, to_text


def resolve_column(row: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    """
    Return the row key matching the first alias that resolves.

    Each alias is tried as an exact key, then case-insensitively against the
    row's keys, before moving to the next alias.
    """
    lowered: Optional[Dict[str, str]] = None

    for alias in aliases:
        if alias in row:
            return alias

        if lowered is None:
            lowered = {}
            for key in row:
                lowered.setdefault(str(key).lower(), key)

        match = lowered.get(alias.lower())
        if match is not None:
            return match

    return None


def _coerce(field: str, value: Any) -> Any:
    if field in NUMBER_FIELDS:
        return to_number(value)
    if field in DATE_FIELDS:
        return to_date(value)
    if field in BOOLEAN_FIELDS:
        return to_boolean(value)
    if field == STATUS_FIELD:
        return normalize_status(to_text(value))
    return to_text(value)


def map_row(row: Mapping[str, Any]) -> DeliveryRecord:
    """Map one header-keyed row into a DeliveryRecord (unresolved fields omitted)."""
    record = DeliveryRecord()

    for field, aliases in FIELD_ALIASES.items():
        key = resolve_column(row, aliases)
        if key is None:
            continue

        value = _coerce(field, row[key])
        if value is not None:
            record[field] = value  # type: ignore[literal-required]

    return record


def rows_to_canonical(
    rows: Sequence[Mapping[str, Any]],
    source_file: str | None = None,
    row_numbers: Sequence[int] | None = None,
) -> List[DeliveryRecord]:
    """
    Map every row, stamping provenance (file name and source row number).

    `row_numbers` gives the sheet row of each entry in `rows`; without it rows
    are numbered 1, 2, ... in the order given.
    """
    if row_numbers is not None and len(row_numbers) != len(rows):
        raise ValueError("row_numbers must match rows one to one")

    records: List[DeliveryRecord] = []
    for idx, row in enumerate(rows):
        record = map_row(row)
        if source_file is not None:
            record["source_file"] = source_file
        record["source_row"] = row_numbers[idx] if row_numbers is not None else idx + 1
        records.append(record)
    return records
