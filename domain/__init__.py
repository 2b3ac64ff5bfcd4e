from .aliases import BOOLEAN_FIELDS, DATE_FIELDS, FIELD_ALIASES, NUMBER_FIELDS, STATUS_FIELD, aliases_for
from .canonical import (
    IDENTIFIER_FIELDS,
    SERVICE_TYPES,
    STATUSES,
    DeliveryRecord,
    ValidatedDelivery,
    validate_record,
)

__all__ = [
    "BOOLEAN_FIELDS",
    "DATE_FIELDS",
    "FIELD_ALIASES",
    "IDENTIFIER_FIELDS",
    "NUMBER_FIELDS",
    "SERVICE_TYPES",
    "STATUSES",
    "STATUS_FIELD",
    "DeliveryRecord",
    "ValidatedDelivery",
    "aliases_for",
    "validate_record",
]
