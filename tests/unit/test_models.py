"""Tests for row conversion of backend records."""
from datetime import timezone

from clinic_booking.models import (
    Location,
    ReservationRequest,
    Slot,
    SlotStatus,
    StaffMember,
)


def test_location_label_falls_back_to_id():
    assert Location.from_row({"store_id": "s1", "name": None}).label == "s1"
    assert Location.from_row({"store_id": "s1", "name": "Shibuya"}).label == "Shibuya"


def test_staff_from_row():
    member = StaffMember.from_row({"staff_id": "p1", "store_id": "s1", "display_name": "Sato"})
    assert member.location_id == "s1"
    assert member.label == "Sato"


def test_slot_from_row(slot_row):
    slot = Slot.from_row(slot_row("x", "2025-11-01T01:00:00Z", "2025-11-01T02:00:00Z", "booked"))
    assert slot.status is SlotStatus.BOOKED
    assert not slot.is_open
    assert slot.start.tzinfo is not None
    assert slot.start.astimezone(timezone.utc).hour == 1


def test_unknown_status_is_not_bookable(slot_row):
    slot = Slot.from_row(slot_row("x", "2025-11-01T01:00:00Z", "2025-11-01T02:00:00Z", "held"))
    assert slot.status is SlotStatus.BOOKED


def test_rpc_params_send_none_for_blank_phone():
    request = ReservationRequest(slot_id="x", customer_name="Taro", customer_email="t@example.com", customer_phone="")
    assert request.to_rpc_params() == {
        "p_slot_id": "x",
        "p_name": "Taro",
        "p_phone": None,
        "p_email": "t@example.com",
    }
