from .delimited import read_delimited_rows
from .excel import read_sheet_rows
from .header import count_keyword_cells, locate_header_row
from .sheet import build_headers, numbered_row_objects, read_raw_rows, rows_to_objects

__all__ = [
    "build_headers",
    "count_keyword_cells",
    "locate_header_row",
    "numbered_row_objects",
    "read_delimited_rows",
    "read_raw_rows",
    "read_sheet_rows",
    "rows_to_objects",
]
