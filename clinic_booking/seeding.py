from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from clinic_booking.tools import generate_demo_slots_tool


@dataclass
class SeedResult:
    count: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.error is not None:
            return f"Failed: {self.error}"
        return f"Generated/updated {self.count} slots"


class AdminSeeder:
    """Triggers the backend's demo slot generation for one day.

    With no date the backend uses its own default (today, 10:00-20:00 in
    the clinic's zone, 60 minute slots). Re-running for the same day is
    safe on the backend side.
    """

    def __init__(self, client) -> None:
        self.client = client

    def generate_demo_slots(self, day: Optional[Union[date, str]] = None) -> SeedResult:
        result = generate_demo_slots_tool(self.client, day)
        if not result.success:
            return SeedResult(error=result.error or "Unknown error")
        try:
            count = int(result.data or 0)
        except (TypeError, ValueError):
            count = 0
        return SeedResult(count=count)
