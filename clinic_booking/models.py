from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from clinic_booking.time_format import parse_instant


class SlotStatus(str, Enum):
    OPEN = "open"
    BOOKED = "booked"

    @classmethod
    def from_value(cls, value: Any) -> "SlotStatus":
        # Anything we don't recognise must not be offered for booking
        try:
            return cls(value)
        except ValueError:
            return cls.BOOKED


@dataclass(frozen=True)
class Location:
    id: str
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.id

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Location":
        return cls(id=str(row["store_id"]), display_name=row.get("name"))


@dataclass(frozen=True)
class StaffMember:
    id: str
    location_id: str
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.id

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "StaffMember":
        return cls(
            id=str(row["staff_id"]),
            location_id=str(row["store_id"]),
            display_name=row.get("display_name"),
        )


@dataclass(frozen=True)
class Slot:
    id: str
    location_id: str
    staff_id: str
    start: datetime
    end: datetime
    status: SlotStatus = SlotStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.status is SlotStatus.OPEN

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Slot":
        return cls(
            id=str(row["slot_id"]),
            location_id=str(row["store_id"]),
            staff_id=str(row["staff_id"]),
            start=parse_instant(row["start_at_utc"]),
            end=parse_instant(row["end_at_utc"]),
            status=SlotStatus.from_value(row.get("status")),
        )


@dataclass
class ReservationRequest:
    slot_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None

    def to_rpc_params(self) -> Dict[str, Any]:
        return {
            "p_slot_id": self.slot_id,
            "p_name": self.customer_name,
            "p_phone": self.customer_phone or None,
            "p_email": self.customer_email or None,
        }
