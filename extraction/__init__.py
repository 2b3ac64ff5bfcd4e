from .enhancer import CostSummary, DriverSummary, EnhancementReport, build_report, enhance_record, enhance_records
from .importer import ImportResult, ParsedFile, import_delivery_file, parse_delivery_file
from .to_canonical import map_row, resolve_column, rows_to_canonical

__all__ = [
    "CostSummary",
    "DriverSummary",
    "EnhancementReport",
    "ImportResult",
    "ParsedFile",
    "build_report",
    "enhance_record",
    "enhance_records",
    "import_delivery_file",
    "map_row",
    "parse_delivery_file",
    "resolve_column",
    "rows_to_canonical",
]
