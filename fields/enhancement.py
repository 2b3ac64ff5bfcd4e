"""
Derived-field rules applied after mapping.

All rules are idempotent: applying them to their own output changes nothing.
- Status: normalize free-text status values, infer a status from lifecycle
  timestamps when none is usable.
- Service type: fold operator wording into a small fixed taxonomy.
- Address: whitespace, digit/comma spacing and street abbreviations.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from domain.canonical import STATUSES


_STATUS_SYNONYMS = {
    "cancelled": "canceled",
    "cancel": "canceled",
    "complete": "delivered",
    "completed": "delivered",
    "done": "delivered",
    "collected": "in_transit",
    "picked_up": "in_transit",
    "in_progress": "in_transit",
    "on_route": "in_transit",
    "assigned": "accepted",
    "new": "pending",
    "created": "pending",
    "submitted": "pending",
    "failure": "failed",
}

# Checked in order; first match wins.
_SERVICE_TYPE_RULES = (
    (re.compile(r"express|urgent|rush|same[\s_-]?day|priority", re.IGNORECASE), "Express"),
    (re.compile(r"standard|regular|normal", re.IGNORECASE), "Standard"),
    (re.compile(r"economy|basic", re.IGNORECASE), "Economy"),
    (re.compile(r"scheduled|planned|advance", re.IGNORECASE), "Scheduled"),
    (re.compile(r"overnight|next[\s_-]?day", re.IGNORECASE), "Overnight"),
)

_DIGIT_COMMA_LETTER = re.compile(r"(\d),([A-Za-z])")
_ABBREVIATIONS = (
    (re.compile(r"\bSt\b\.?"), "Street"),
    (re.compile(r"\bRd\b\.?"), "Road"),
    (re.compile(r"\bAve\b\.?"), "Avenue"),
)
_WHITESPACE = re.compile(r"\s+")


def normalize_status(value: Any) -> Optional[str]:
    """Map a free-text status onto the closed status set, or None if unrecognized."""
    if value is None:
        return None
    key = re.sub(r"[\s-]+", "_", str(value).strip().lower())
    if not key:
        return None
    key = _STATUS_SYNONYMS.get(key, key)
    return key if key in STATUSES else None


def infer_status(record: Mapping[str, Any]) -> str:
    """Infer status from which lifecycle timestamps are present."""
    if record.get("delivered_at"):
        return "delivered"
    if record.get("canceled_at"):
        return "canceled"
    if record.get("collected_at"):
        return "in_transit"
    if record.get("accepted_at"):
        return "accepted"
    return "pending"


def normalize_service_type(value: Any) -> Optional[str]:
    """Normalize a raw service type into the taxonomy, else capitalize it."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    for pattern, label in _SERVICE_TYPE_RULES:
        if pattern.search(text):
            return label
    return text[:1].upper() + text[1:].lower()


def clean_address(value: Any) -> Optional[str]:
    """Tidy a free-text address: "12,Main  St" -> "12 Main Street"."""
    if value is None:
        return None
    text = str(value)
    text = _DIGIT_COMMA_LETTER.sub(r"\1 \2", text)
    for pattern, replacement in _ABBREVIATIONS:
        text = pattern.sub(replacement, text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text or None


def normalize_driver_id(value: Any) -> Optional[str]:
    """Key used to group one driver's rows when names vary in case or spacing."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "undefined", "none"):
        return None
    text = _WHITESPACE.sub(" ", text.lower())
    text = re.sub(r"[^\w\s\-.@]", "", text)
    return text.strip() or None
