"""
DeliveryRecord schema definition.

This TypedDict represents the normalized, source-agnostic structure used
across the whole ingestion pipeline. Every reader (workbook, CSV) maps its
rows into this structure before enhancement and storage.

Fields are optional because different courier systems export overlapping
but non-identical subsets of columns. A record is promoted to a
`ValidatedDelivery` only once it carries a status and some identifier;
only validated records are written to storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict


STATUSES = ("pending", "accepted", "in_transit", "delivered", "canceled", "failed")

SERVICE_TYPES = ("Express", "Standard", "Economy", "Scheduled", "Overnight")


class DeliveryRecord(TypedDict, total=False):
    job_id: Optional[str]
    invoice_id: Optional[str]
    invoice_number: Optional[str]
    reference: Optional[str]

    priority: Optional[str]
    customer_name: Optional[str]
    company_name: Optional[str]
    customer_email: Optional[str]
    customer_mobile: Optional[str]
    account_created_by: Optional[str]
    job_created_by: Optional[str]

    collecting_driver: Optional[str]
    delivering_driver: Optional[str]

    pickup_address: Optional[str]
    pickup_customer_name: Optional[str]
    pickup_mobile_number: Optional[str]
    delivery_address: Optional[str]
    delivery_customer_name: Optional[str]
    delivery_mobile_number: Optional[str]
    recipient_email: Optional[str]

    pickup_lat: Optional[float]
    pickup_lng: Optional[float]
    delivery_lat: Optional[float]
    delivery_lng: Optional[float]

    service_type: Optional[str]
    payment_method: Optional[str]
    package_value: Optional[str]
    insurance_protection: Optional[str]

    cost: Optional[float]
    tip_amount: Optional[float]
    courier_commission: Optional[float]
    courier_commission_vat: Optional[float]
    fuel_surcharge: Optional[float]
    rider_tips: Optional[float]
    distance: Optional[float]
    passenger_count: Optional[float]
    luggage_count: Optional[float]

    status: Optional[str]
    created_at: Optional[str]
    submitted_at: Optional[str]
    accepted_at: Optional[str]
    collected_at: Optional[str]
    delivered_at: Optional[str]
    canceled_at: Optional[str]

    collected_waiting_time: Optional[str]
    delivered_waiting_time: Optional[str]
    return_job_delivered_waiting_time: Optional[str]
    return_job: Optional[bool]

    collection_notes: Optional[str]
    delivery_notes: Optional[str]
    driver_notes: Optional[str]

    source_file: Optional[str]
    source_row: Optional[int]


IDENTIFIER_FIELDS = ("job_id", "invoice_id", "invoice_number", "reference")


@dataclass(frozen=True)
class ValidatedDelivery:
    """A delivery record confirmed to carry a status and an identifier."""

    identifier: str
    status: str
    record: DeliveryRecord

    def to_row(self) -> Dict[str, Any]:
        """Return the storage row (absent fields omitted, provenance dropped)."""
        return {
            k: v
            for k, v in self.record.items()
            if v is not None and k not in ("source_file", "source_row")
        }


def validate_record(record: DeliveryRecord) -> Optional[ValidatedDelivery]:
    """Promote a record to ValidatedDelivery, or return None if it cannot be."""
    status = record.get("status")
    if not status or status not in STATUSES:
        return None

    for field in IDENTIFIER_FIELDS:
        value = record.get(field)
        if value:
            return ValidatedDelivery(identifier=str(value), status=status, record=record)

    return None
