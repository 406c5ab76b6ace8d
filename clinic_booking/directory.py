from __future__ import annotations

from typing import List

from clinic_booking.logging_config import get_logger
from clinic_booking.models import Location, StaffMember
from clinic_booking.tools import error_message

logger = get_logger(__name__)


class DirectoryStore:
    """Stores and staff, loaded once per page session."""

    def __init__(self, client) -> None:
        self.client = client
        self.locations: List[Location] = []
        self.staff: List[StaffMember] = []

    def load(self) -> "DirectoryStore":
        self.locations = self.load_locations()
        self.staff = self.load_staff()
        return self

    def load_locations(self) -> List[Location]:
        try:
            response = (
                self.client.table("stores").select("store_id,name").order("store_id").execute()
            )
        except Exception as e:
            logger.warning("loading stores failed", error=error_message(e))
            return []
        return [Location.from_row(row) for row in response.data or []]

    def load_staff(self) -> List[StaffMember]:
        try:
            response = (
                self.client.table("staff")
                .select("staff_id,store_id,display_name")
                .order("staff_id")
                .execute()
            )
        except Exception as e:
            logger.warning("loading staff failed", error=error_message(e))
            return []
        return [StaffMember.from_row(row) for row in response.data or []]

    def staff_for(self, location_id: str) -> List[StaffMember]:
        if not location_id:
            return []
        return [member for member in self.staff if member.location_id == location_id]
