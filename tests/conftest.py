import zipfile
from pathlib import Path
from typing import Any, List, Sequence

import pytest
from openpyxl import Workbook

from storage.batch_submitter import InsertOutcome


@pytest.fixture
def write_workbook(tmp_path: Path):
    """Write rows to an .xlsx file and return its path."""

    def _write(rows: Sequence[Sequence[Any]], name: str = "deliveries.xlsx") -> Path:
        wb = Workbook()
        ws = wb.active
        for row in rows:
            ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _write


@pytest.fixture
def truncate_sheet_xml(tmp_path: Path):
    """Copy a workbook with its first worksheet part cut in half."""

    def _truncate(path: Path, name: str = "damaged.xlsx") -> Path:
        damaged = tmp_path / name
        with zipfile.ZipFile(path) as src, zipfile.ZipFile(damaged, "w", zipfile.ZIP_DEFLATED) as dst:
            for item in src.infolist():
                data = src.read(item.filename)
                if item.filename == "xl/worksheets/sheet1.xml":
                    data = data[: len(data) // 2]
                dst.writestr(item, data)
        return damaged

    return _truncate


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(text: str, name: str = "deliveries.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class RecordingInsert:
    """Insert collaborator that records batches and fails on chosen batch numbers."""

    def __init__(self, fail_on: Sequence[int] = (), error: str = "duplicate key value"):
        self.batches: List[List[dict]] = []
        self.fail_on = set(fail_on)
        self.error = error

    def __call__(self, batch):
        index = len(self.batches)
        self.batches.append(list(batch))
        if index in self.fail_on:
            return InsertOutcome(success=False, error=self.error)
        return InsertOutcome(success=True)


@pytest.fixture
def recording_insert():
    return RecordingInsert
