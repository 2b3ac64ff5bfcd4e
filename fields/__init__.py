from .enhancement import clean_address, infer_status, normalize_driver_id, normalize_service_type, normalize_status
from .normalization import to_boolean, to_date, to_int, to_number, to_text

__all__ = [
    "clean_address",
    "infer_status",
    "normalize_driver_id",
    "normalize_service_type",
    "normalize_status",
    "to_boolean",
    "to_date",
    "to_int",
    "to_number",
    "to_text",
]
