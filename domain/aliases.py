"""
Column alias table.

Maps every canonical DeliveryRecord field to the ordered list of header
strings that various courier exports use for it. Order encodes preference:
the resolver returns the first alias present in a row, so specific headers
("Job ID") must precede generic ones ("ID").

Field kinds tell the mapper which coercion to apply. Fields not listed in
any kind set are free text.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple


FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    # Identifiers
    "job_id": ("Job ID", "job_id", "JobId", "Job_ID", "Job Number", "ID", "id"),
    "invoice_id": ("Invoice ID", "invoice_id", "InvoiceId", "Invoice_ID"),
    "invoice_number": ("Invoice Number", "invoice_number", "InvoiceNumber"),
    "reference": ("Reference", "reference", "Ref"),
    # Parties
    "priority": ("Priority", "priority", "Urgent or Scheduled (Same-hour or Scheduled time)"),
    "customer_name": ("Customer Name", "customer_name", "CustomerName", "Customer", "Client Name", "client_name"),
    "company_name": ("Company Name", "company_name", "CompanyName", "Business Name", "business_name"),
    "customer_email": ("Customer Email", "customer_email", "CustomerEmail"),
    "customer_mobile": ("Customer Mobile", "customer_mobile", "CustomerMobile"),
    "account_created_by": ("Account Created By", "account_created_by", "AccountCreatedBy"),
    "job_created_by": ("Job Created By", "job_created_by", "JobCreatedBy"),
    "collecting_driver": ("Collecting Driver", "collecting_driver", "CollectingDriver", "Pickup Driver", "pickup_driver"),
    "delivering_driver": (
        "Delivering Driver",
        "delivering_driver",
        "DeliveringDriver",
        "Delivery Driver",
        "delivery_driver",
        "Driver",
    ),
    # Geography and contacts
    "pickup_address": ("Pickup", "pickup_address", "Pickup Address", "PickupAddress", "From Address", "from_address"),
    "pickup_customer_name": ("Pickup Customer Name", "pickup_customer_name", "PickupCustomerName"),
    "pickup_mobile_number": ("Pickup Mobile Number", "pickup_mobile_number", "PickupMobileNumber"),
    "delivery_address": (
        "Delivery",
        "delivery_address",
        "Delivery Address",
        "DeliveryAddress",
        "To Address",
        "to_address",
    ),
    "delivery_customer_name": ("Delivery Customer Name", "delivery_customer_name", "DeliveryCustomerName"),
    "delivery_mobile_number": ("Delivery Mobile Number", "delivery_mobile_number", "DeliveryMobileNumber"),
    "recipient_email": ("Recipient Email", "recipient_email", "RecipientEmail"),
    # Service
    "service_type": ("Service Type", "service_type", "ServiceType", "Type"),
    "payment_method": ("Payment Method", "payment_method", "PaymentMethod"),
    "package_value": (
        "How much is your package?",
        "How much is your package?\nOptional - Insurance up to €1.000",
        "Package Value",
        "package_value",
        "PackageValue",
    ),
    "insurance_protection": (
        "You have free protection on your items for up to €50. Would you like to protect your items "
        "for the full value of up to €10,000? If yes, how much would you like to protect?",
        "insurance_protection",
        "InsuranceProtection",
    ),
    # Commercial
    "cost": ("Cost", "cost", "Price", "price"),
    "tip_amount": ("Tip Amount", "tip_amount", "TipAmount"),
    "courier_commission": ("Courier Commission", "courier_commission", "CourierCommission"),
    "courier_commission_vat": ("Courier Commission VAT", "courier_commission_vat", "CourierCommissionVAT"),
    "fuel_surcharge": ("Fuel Surcharge", "fuel_surcharge", "FuelSurcharge"),
    "rider_tips": ("Rider Tips", "rider_tips", "RiderTips"),
    "distance": ("Distance", "distance"),
    "passenger_count": ("How many passengers?", "passenger_count", "PassengerCount"),
    "luggage_count": ("How Many Lugagges?", "How many luggages?", "luggage_count", "LuggageCount"),
    # Lifecycle
    "status": ("Status", "status"),
    "created_at": ("Created Date/Time", "created_at", "CreatedDate", "Created", "CreateDate", "Date Created", "date_created"),
    "submitted_at": ("Submitted Date/Time", "submitted_at", "SubmittedDate"),
    "accepted_at": ("Accepted Date/Time", "accepted_at", "AcceptedDate"),
    "collected_at": ("Collected Date/Time", "collected_at", "CollectedDate", "Pickup Time", "pickup_time"),
    "delivered_at": ("Delivered Date/Time", "delivered_at", "DeliveredDate", "Delivery Time", "delivery_time"),
    "canceled_at": ("Canceled Date/Time", "canceled_at", "CanceledDate", "Cancelled Date/Time", "cancelled_at"),
    "collected_waiting_time": ("Collected Waiting Time", "collected_waiting_time", "CollectedWaitingTime"),
    "delivered_waiting_time": ("Delivered Waiting Time", "delivered_waiting_time", "DeliveredWaitingTime"),
    "return_job_delivered_waiting_time": (
        "Return Job delivered Waiting Time",
        "return_job_delivered_waiting_time",
        "ReturnJobDeliveredWaitingTime",
    ),
    "return_job": ("Return Job", "return_job", "ReturnJob"),
    # Notes
    "collection_notes": ("Collection Notes", "collection_notes", "CollectionNotes"),
    "delivery_notes": ("Delivery Notes", "delivery_notes", "DeliveryNotes"),
    "driver_notes": ("Driver Notes", "driver_notes", "DriverNotes"),
}


NUMBER_FIELDS: FrozenSet[str] = frozenset({
    "cost",
    "tip_amount",
    "courier_commission",
    "courier_commission_vat",
    "fuel_surcharge",
    "rider_tips",
    "distance",
    "passenger_count",
    "luggage_count",
})

DATE_FIELDS: FrozenSet[str] = frozenset({
    "created_at",
    "submitted_at",
    "accepted_at",
    "collected_at",
    "delivered_at",
    "canceled_at",
})

BOOLEAN_FIELDS: FrozenSet[str] = frozenset({"return_job"})

STATUS_FIELD = "status"


def aliases_for(field: str) -> Tuple[str, ...]:
    """Return the ordered aliases for a canonical field (empty if unknown)."""
    return FIELD_ALIASES.get(field, ())
