from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List, Optional

from clinic_booking.logging_config import get_logger
from clinic_booking.models import Slot
from clinic_booking.tools import error_message

logger = get_logger(__name__)

SLOT_COLUMNS = "slot_id,store_id,staff_id,start_at_utc,end_at_utc,status"


def local_now() -> datetime:
    return datetime.now().astimezone()


def start_of_day_utc(now: datetime) -> str:
    """Midnight of ``now``'s own calendar day, as a UTC ISO-8601 string."""
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if midnight.tzinfo is None:
        midnight = midnight.astimezone()
    return midnight.astimezone(timezone.utc).isoformat()


class SlotQuery:
    def __init__(self, client, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.client = client
        self.clock = clock or local_now

    def fetch_open_slots(self, location_id: str, staff_id: str) -> List[Slot]:
        """Slots for one store/staff pair from today onwards, earliest first.

        Booked slots are returned too; callers decide what to offer.
        Returns ``[]`` without touching the backend if either id is empty.
        """
        if not location_id or not staff_id:
            return []

        since = start_of_day_utc(self.clock())
        try:
            response = (
                self.client.table("slots")
                .select(SLOT_COLUMNS)
                .eq("store_id", location_id)
                .eq("staff_id", staff_id)
                .gte("start_at_utc", since)
                .order("start_at_utc")
                .execute()
            )
        except Exception as e:
            logger.warning(
                "loading slots failed",
                store_id=location_id,
                staff_id=staff_id,
                error=error_message(e),
            )
            return []

        slots = [Slot.from_row(row) for row in response.data or []]
        return sorted(slots, key=lambda slot: slot.start)


def fetch_slots_for_day(client, day: date, tzinfo) -> List[Slot]:
    """Every slot (all stores, all staff) starting on ``day`` in the clinic's zone."""
    start = datetime.combine(day, time.min, tzinfo=tzinfo)
    end = start + timedelta(days=1)
    try:
        response = (
            client.table("slots")
            .select(SLOT_COLUMNS)
            .gte("start_at_utc", start.astimezone(timezone.utc).isoformat())
            .lt("start_at_utc", end.astimezone(timezone.utc).isoformat())
            .order("start_at_utc")
            .execute()
        )
    except Exception as e:
        logger.warning("loading day overview failed", day=day.isoformat(), error=error_message(e))
        return []
    return [Slot.from_row(row) for row in response.data or []]
