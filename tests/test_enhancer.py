import pytest

from extraction.enhancer import build_report, enhance_record, enhance_records
from fields.enhancement import clean_address, infer_status, normalize_service_type, normalize_status


@pytest.mark.parametrize(
    "record, expected",
    [
        ({"delivered_at": "2024-01-01T10:00:00.000Z"}, "delivered"),
        ({"collected_at": "2024-01-01T10:00:00.000Z"}, "in_transit"),
        ({"accepted_at": "2024-01-01T10:00:00.000Z"}, "accepted"),
        ({"canceled_at": "2024-01-01T10:00:00.000Z"}, "canceled"),
        ({}, "pending"),
        ({"delivered_at": "x", "canceled_at": "y", "collected_at": "z"}, "delivered"),
        ({"canceled_at": "y", "collected_at": "z", "accepted_at": "w"}, "canceled"),
    ],
)
def test_infer_status_priority(record, expected):
    assert infer_status(record) == expected


def test_enhance_infers_status_only_when_absent():
    assert enhance_record({"delivered_at": "2024-01-01T10:00:00.000Z"})["status"] == "delivered"
    assert enhance_record({"status": "failed", "delivered_at": "2024-01-01T10:00:00.000Z"})["status"] == "failed"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("URGENT", "Express"),
        ("same day", "Express"),
        ("Same-Day", "Express"),
        ("rush delivery", "Express"),
        ("priority", "Express"),
        ("regular", "Standard"),
        ("Normal", "Standard"),
        ("basic", "Economy"),
        ("planned run", "Scheduled"),
        ("advance booking", "Scheduled"),
        ("next day", "Overnight"),
        ("OVERNIGHT", "Overnight"),
        ("bike courier", "Bike courier"),
        ("VAN", "Van"),
    ],
)
def test_normalize_service_type(raw, expected):
    assert normalize_service_type(raw) == expected


@pytest.mark.parametrize("raw", ["URGENT", "bike COURIER", "Express", "Van", "next-day"])
def test_normalize_service_type_idempotent(raw):
    once = normalize_service_type(raw)
    assert normalize_service_type(once) == once


def test_normalize_service_type_blank():
    assert normalize_service_type("  ") is None
    assert normalize_service_type(None) is None


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Delivered", "delivered"),
        ("IN TRANSIT", "in_transit"),
        ("in-transit", "in_transit"),
        ("Cancelled", "canceled"),
        ("Completed", "delivered"),
        ("Picked up", "in_transit"),
        ("mystery", None),
        ("", None),
    ],
)
def test_normalize_status(raw, expected):
    assert normalize_status(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12,Main St", "12 Main Street"),
        ("  4   Station Rd ", "4 Station Road"),
        ("7 Park Ave., Dublin", "7 Park Avenue, Dublin"),
        ("Stanley Street", "Stanley Street"),
        ("12, Main Street", "12, Main Street"),
    ],
)
def test_clean_address(raw, expected):
    assert clean_address(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "12,Main St",
        "1,St",
        "St.Ave Rd.",
        "  a\t\tb  ",
        "3,A,4,B St St",
        "Flat 2,Block C,Ave Rd St.",
        "",
        "Rd Rd. Rd,",
    ],
)
def test_clean_address_idempotent(raw):
    once = clean_address(raw)
    assert clean_address(once) == once


def test_enhance_record_does_not_mutate_input():
    original = {"job_id": "J-1", "service_type": "urgent", "delivery_address": "1,Main St"}
    snapshot = dict(original)
    enhanced = enhance_record(original)

    assert original == snapshot
    assert enhanced is not original
    assert enhanced == {
        "job_id": "J-1",
        "service_type": "Express",
        "delivery_address": "1 Main Street",
        "status": "pending",
    }


def test_enhance_records_is_idempotent_and_order_preserving():
    records = [
        {"job_id": "a", "service_type": "rush", "pickup_address": "9,High St"},
        {"job_id": "b", "collected_at": "2024-01-01T10:00:00.000Z"},
    ]
    once, _ = enhance_records(records)
    twice, _ = enhance_records(once)

    assert [r["job_id"] for r in once] == ["a", "b"]
    assert once == twice


def test_report_aggregates():
    records = [
        {
            "delivering_driver": "Jane Doe",
            "status": "delivered",
            "cost": 10.0,
            "collected_at": "2024-01-01T10:00:00.000Z",
            "delivered_at": "2024-01-01T10:30:00.000Z",
        },
        {
            "delivering_driver": "jane  doe",
            "status": "failed",
            "cost": 30.0,
            "collected_at": "2024-01-01T11:00:00.000Z",
            "delivered_at": "2024-01-01T12:00:00.000Z",
        },
        {"collecting_driver": "Sam", "status": "delivered"},
        {"status": "pending", "cost": 20.0},
    ]
    report = build_report(records)

    assert report.total_records == 4
    assert report.avg_delivery_minutes == pytest.approx(45.0)
    assert report.timed_deliveries == 2
    assert report.cost.count == 3
    assert report.cost.total == pytest.approx(60.0)
    assert report.cost.average == pytest.approx(20.0)
    assert report.cost.minimum == 10.0
    assert report.cost.maximum == 30.0
    assert report.status_counts == {"delivered": 2, "failed": 1, "pending": 1}

    assert report.records_with_driver == 3
    assert report.unique_drivers == 2
    assert report.driver_identification_rate == pytest.approx(0.75)
    top = report.top_drivers[0]
    assert (top.name, top.deliveries, top.completed) == ("Jane Doe", 2, 1)
    assert top.completion_rate == pytest.approx(0.5)
    assert report.top_drivers[1].name == "Sam"


def test_report_limits_top_drivers():
    records = [{"delivering_driver": f"Driver {i}", "status": "delivered"} for i in range(8)]
    records += [{"delivering_driver": "Driver 7", "status": "pending"}]
    report = build_report(records)

    assert len(report.top_drivers) == 5
    assert report.top_drivers[0].name == "Driver 7"
    assert report.top_drivers[0].deliveries == 2


def test_report_empty_dataset():
    report = build_report([])
    assert report.total_records == 0
    assert report.avg_delivery_minutes is None
    assert report.cost.count == 0
    assert report.top_drivers == []


def test_report_without_timestamps_or_costs():
    report = build_report([{"job_id": "a", "status": "pending"}])
    assert report.avg_delivery_minutes is None
    assert report.cost.average is None
    assert report.records_with_driver == 0


def test_report_ignores_negative_delivery_durations():
    records = [
        {"collected_at": "2024-01-01T10:00:00.000Z", "delivered_at": "2024-01-01T10:20:00.000Z"},
        {"collected_at": "2024-01-01T12:00:00.000Z", "delivered_at": "2024-01-01T11:00:00.000Z"},
    ]
    report = build_report(records)
    assert report.avg_delivery_minutes == pytest.approx(20.0)
    assert report.timed_deliveries == 1


def test_report_only_negative_durations_has_no_average():
    report = build_report([{"collected_at": "2024-01-01T12:00:00.000Z", "delivered_at": "2024-01-01T11:00:00.000Z"}])
    assert report.avg_delivery_minutes is None
    assert report.timed_deliveries == 0
