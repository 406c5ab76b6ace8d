"""Tests for the admin slot overview helpers."""
from clinic_booking.admin_dashboard import FRAME_COLUMNS, slot_metrics, slots_frame
from clinic_booking.directory import DirectoryStore
from clinic_booking.models import Slot


def test_frame_uses_directory_labels(fake_client, slot_row):
    fake_client.rows["stores"] = [{"store_id": "store-a", "name": "Shibuya"}]
    fake_client.rows["staff"] = [{"staff_id": "staff-1", "store_id": "store-a", "display_name": "Sato"}]
    directory = DirectoryStore(fake_client).load()

    slots = [
        Slot.from_row(slot_row("s1", "2025-11-01T01:00:00Z", "2025-11-01T02:00:00Z")),
        Slot.from_row(slot_row("s2", "2025-11-01T02:00:00Z", "2025-11-01T03:00:00Z", status="booked")),
    ]
    df = slots_frame(slots, directory=directory)

    assert list(df.columns) == FRAME_COLUMNS
    assert df.iloc[0]["store"] == "Shibuya"
    assert df.iloc[0]["staff"] == "Sato"
    assert df.iloc[0]["start"] == "10:00"
    assert df.iloc[1]["end"] == "12:00"


def test_frame_falls_back_to_ids(slot_row):
    df = slots_frame([Slot.from_row(slot_row("s1", "2025-11-01T01:00:00Z", "2025-11-01T02:00:00Z"))])
    assert df.iloc[0]["store"] == "store-a"


def test_metrics():
    assert slot_metrics(slots_frame([])) == {"total": 0, "open": 0, "booked": 0}


def test_metrics_counts_by_status(slot_row):
    slots = [
        Slot.from_row(slot_row("s1", "2025-11-01T01:00:00Z", "2025-11-01T02:00:00Z")),
        Slot.from_row(slot_row("s2", "2025-11-01T02:00:00Z", "2025-11-01T03:00:00Z", status="booked")),
        Slot.from_row(slot_row("s3", "2025-11-01T03:00:00Z", "2025-11-01T04:00:00Z", status="booked")),
    ]
    assert slot_metrics(slots_frame(slots)) == {"total": 3, "open": 1, "booked": 2}
