import pytest

from input_readers.sheet import build_headers, numbered_row_objects, read_raw_rows, rows_to_objects


def test_build_headers_names_blank_and_duplicate_columns():
    assert build_headers([" Job ID ", None, "Cost", "Cost", ""]) == ["Job ID", "col_2", "Cost", "Cost_1", "col_5"]


def test_rows_to_objects_uses_header_offset_and_skips_empty_rows():
    rows = [
        ["Title"],
        ["Job ID", "Cost"],
        ["J-1", "10"],
        [None, ""],
        ["J-2"],
    ]
    assert rows_to_objects(rows, 1) == [
        {"Job ID": "J-1", "Cost": "10"},
        {"Job ID": "J-2", "Cost": None},
    ]


def test_build_headers_suffix_never_collides_with_existing_header():
    assert build_headers(["A", "A", "A_1"]) == ["A", "A_1", "A_1_1"]
    assert build_headers(["A_1", "A", "A"]) == ["A_1", "A", "A_2"]


def test_numbered_row_objects_keep_sheet_row_numbers():
    rows = [
        ["Title"],
        ["Job ID", "Cost"],
        ["J-1", "10"],
        [None, ""],
        ["J-2"],
    ]
    assert [n for n, _ in numbered_row_objects(rows, 1)] == [3, 5]


def test_rows_to_objects_header_beyond_rows():
    assert rows_to_objects([["a"]], 5) == []


def test_read_raw_rows_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_raw_rows(tmp_path / "nope.xlsx")


def test_read_raw_rows_unsupported_extension(tmp_path):
    path = tmp_path / "deliveries.pdf"
    path.write_bytes(b"%PDF-1.4")
    with pytest.raises(ValueError, match="Unsupported file format"):
        read_raw_rows(path)


def test_read_raw_rows_corrupt_workbook(tmp_path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a zip archive")
    with pytest.raises(ValueError, match="Cannot read Excel file"):
        read_raw_rows(path)


def test_read_raw_rows_workbook(write_workbook):
    path = write_workbook([["Job ID", "Cost"], ["J-1", 12.5]])
    rows = read_raw_rows(path)
    assert rows[0] == ["Job ID", "Cost"]
    assert rows[1] == ["J-1", 12.5]


def test_read_raw_rows_csv_with_narrow_title_row(write_csv):
    path = write_csv("Courier export\nJob ID,Driver,Cost\nJ-1,Jane Doe,\"$1,200.00\"\n")
    rows = read_raw_rows(path)
    assert rows[0][0] == "Courier export"
    assert rows[1] == ["Job ID", "Driver", "Cost"]
    assert rows[2] == ["J-1", "Jane Doe", "$1,200.00"]


def test_read_raw_rows_semicolon_csv(write_csv):
    path = write_csv("Job ID;Status;Driver\nJ-9;Delivered;Sam\n")
    rows = read_raw_rows(path)
    assert rows[1] == ["J-9", "Delivered", "Sam"]


def test_read_raw_rows_damaged_worksheet_part(write_workbook, truncate_sheet_xml):
    rows = [["Job ID", "Status", "Cost"]] + [[f"J-{i}", "Delivered", i] for i in range(20)]
    damaged = truncate_sheet_xml(write_workbook(rows))
    with pytest.raises(ValueError, match="Cannot read Excel file"):
        read_raw_rows(damaged)


def test_read_raw_rows_csv_keeps_blank_lines(write_csv):
    path = write_csv("Job ID,Cost\nJ-1,10\n\nJ-2,20\n")
    rows = read_raw_rows(path)
    assert len(rows) == 4
    assert rows[3] == ["J-2", "20"]
