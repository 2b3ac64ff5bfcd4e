"""
Post-mapping enhancement and dataset diagnostics.

`enhance_records` returns new records (inputs are never mutated) with:
- status inferred from lifecycle timestamps when missing,
- service type folded into the fixed taxonomy,
- pickup/delivery addresses cleaned up,

together with an `EnhancementReport` summarizing the dataset. The report is
for observability only; nothing downstream branches on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from config import TOP_DRIVERS_LIMIT
from domain.canonical import DeliveryRecord
from fields.enhancement import (
    clean_address,
    infer_status,
    normalize_driver_id,
    normalize_service_type,
    normalize_status,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostSummary:
    count: int = 0
    total: float = 0.0
    average: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


@dataclass(frozen=True)
class DriverSummary:
    name: str
    deliveries: int
    completed: int
    completion_rate: float


@dataclass(frozen=True)
class EnhancementReport:
    total_records: int = 0
    avg_delivery_minutes: Optional[float] = None
    timed_deliveries: int = 0
    cost: CostSummary = field(default_factory=CostSummary)
    status_counts: Dict[str, int] = field(default_factory=dict)
    top_drivers: List[DriverSummary] = field(default_factory=list)
    records_with_driver: int = 0
    unique_drivers: int = 0

    @property
    def driver_identification_rate(self) -> float:
        if not self.total_records:
            return 0.0
        return self.records_with_driver / self.total_records


def enhance_record(record: DeliveryRecord) -> DeliveryRecord:
    """Return an amended copy of one record."""
    enhanced = DeliveryRecord(**record)

    status = normalize_status(enhanced.get("status"))
    enhanced["status"] = status or infer_status(enhanced)

    service_type = normalize_service_type(enhanced.get("service_type"))
    if service_type is not None:
        enhanced["service_type"] = service_type
    else:
        enhanced.pop("service_type", None)

    for key in ("pickup_address", "delivery_address"):
        address = clean_address(enhanced.get(key))
        if address is not None:
            enhanced[key] = address  # type: ignore[literal-required]
        else:
            enhanced.pop(key, None)  # type: ignore[misc]

    return enhanced


def _column(df: pd.DataFrame, name: str) -> pd.Series:
    if name in df.columns:
        return df[name]
    return pd.Series([None] * len(df), index=df.index, dtype=object)


def _delivery_minutes(df: pd.DataFrame) -> Tuple[Optional[float], int]:
    collected = pd.to_datetime(_column(df, "collected_at"), utc=True, errors="coerce")
    delivered = pd.to_datetime(_column(df, "delivered_at"), utc=True, errors="coerce")
    minutes = ((delivered - collected).dt.total_seconds() / 60).dropna()
    # Delivered before collected is a data-entry error, not a duration.
    minutes = minutes[minutes >= 0]
    if minutes.empty:
        return None, 0
    return float(minutes.mean()), int(minutes.size)


def _cost_summary(df: pd.DataFrame) -> CostSummary:
    costs = pd.to_numeric(_column(df, "cost"), errors="coerce").dropna()
    if costs.empty:
        return CostSummary()
    return CostSummary(
        count=int(costs.size),
        total=float(costs.sum()),
        average=float(costs.mean()),
        minimum=float(costs.min()),
        maximum=float(costs.max()),
    )


def _driver_summaries(df: pd.DataFrame, limit: int) -> Tuple[List[DriverSummary], int, int]:
    names = _column(df, "delivering_driver").where(
        _column(df, "delivering_driver").notna(), _column(df, "collecting_driver")
    )
    drivers = pd.DataFrame(
        {
            "name": names,
            "key": names.map(lambda v: normalize_driver_id(v) if pd.notna(v) else None),
            "completed": _column(df, "status").eq("delivered"),
        }
    ).dropna(subset=["key"])

    if drivers.empty:
        return [], 0, 0

    grouped = (
        drivers.groupby("key", sort=False)
        .agg(name=("name", "first"), deliveries=("name", "size"), completed=("completed", "sum"))
        .sort_values("deliveries", ascending=False, kind="stable")
    )

    top = [
        DriverSummary(
            name=str(row.name),
            deliveries=int(row.deliveries),
            completed=int(row.completed),
            completion_rate=float(row.completed) / float(row.deliveries),
        )
        for row in grouped.head(limit).itertuples(index=False)
    ]
    return top, int(len(drivers)), int(len(grouped))


def build_report(records: Sequence[DeliveryRecord], top_drivers: int = TOP_DRIVERS_LIMIT) -> EnhancementReport:
    """Summarize a record set: durations, cost, status histogram, busiest drivers."""
    if not records:
        return EnhancementReport()

    df = pd.DataFrame.from_records(list(records))

    avg_minutes, timed = _delivery_minutes(df)
    statuses = _column(df, "status").dropna()
    top, with_driver, unique = _driver_summaries(df, top_drivers)

    return EnhancementReport(
        total_records=len(records),
        avg_delivery_minutes=avg_minutes,
        timed_deliveries=timed,
        cost=_cost_summary(df),
        status_counts={str(k): int(v) for k, v in statuses.value_counts().items()},
        top_drivers=top,
        records_with_driver=with_driver,
        unique_drivers=unique,
    )


def _log_report(report: EnhancementReport) -> None:
    logger.info(
        "Enhanced %d records: %d with driver (%.1f%%), %d unique drivers",
        report.total_records,
        report.records_with_driver,
        report.driver_identification_rate * 100,
        report.unique_drivers,
    )
    if report.avg_delivery_minutes is not None:
        logger.info(
            "Average collection to delivery: %.1f min over %d deliveries",
            report.avg_delivery_minutes,
            report.timed_deliveries,
        )
    if report.cost.count:
        logger.info(
            "Cost: total %.2f, average %.2f, min %.2f, max %.2f (%d records)",
            report.cost.total,
            report.cost.average,
            report.cost.minimum,
            report.cost.maximum,
            report.cost.count,
        )
    logger.info("Status distribution: %s", report.status_counts)
    for driver in report.top_drivers:
        logger.debug(
            "Driver %s: %d deliveries, %.0f%% completed",
            driver.name,
            driver.deliveries,
            driver.completion_rate * 100,
        )


def enhance_records(records: Sequence[DeliveryRecord]) -> Tuple[List[DeliveryRecord], EnhancementReport]:
    """Enhance every record (same order, new dicts) and build the dataset report."""
    enhanced = [enhance_record(r) for r in records]
    report = build_report(enhanced)
    _log_report(report)
    return enhanced, report
