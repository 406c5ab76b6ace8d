from __future__ import annotations

from typing import List, Optional

from clinic_booking.booking_flow import ReservationGateway, ReservationWorkflow, WorkflowState
from clinic_booking.directory import DirectoryStore
from clinic_booking.logging_config import get_logger
from clinic_booking.models import Location, Slot, StaffMember
from clinic_booking.slot_query import SlotQuery

logger = get_logger(__name__)


class BookingPage:
    """State behind the booking page.

    Owns the current store/staff selection, the slot list (replaced on
    every fetch) and the one reservation dialog that may be open.
    """

    def __init__(
        self,
        directory: DirectoryStore,
        slot_query: SlotQuery,
        gateway: ReservationGateway,
        tzinfo=None,
    ) -> None:
        self.directory = directory
        self.slot_query = slot_query
        self.gateway = gateway
        self.tzinfo = tzinfo

        self.selected_location = ""
        self.selected_staff = ""
        self.slots: List[Slot] = []
        self.workflow: Optional[ReservationWorkflow] = None

    @property
    def locations(self) -> List[Location]:
        return self.directory.locations

    @property
    def staff_options(self) -> List[StaffMember]:
        return self.directory.staff_for(self.selected_location)

    @property
    def ready(self) -> bool:
        return bool(self.selected_location and self.selected_staff)

    def select_location(self, location_id: str) -> None:
        location_id = location_id or ""
        if location_id == self.selected_location:
            return
        self.selected_location = location_id
        self.selected_staff = ""
        self.refresh_slots()

    def select_staff(self, staff_id: str) -> None:
        staff_id = staff_id or ""
        if staff_id == self.selected_staff:
            return
        self.selected_staff = staff_id
        self.refresh_slots()

    def refresh_slots(self) -> List[Slot]:
        self.slots = self.slot_query.fetch_open_slots(self.selected_location, self.selected_staff)
        return self.slots

    def open_reservation(self, slot: Slot) -> Optional[ReservationWorkflow]:
        if not slot.is_open:
            return None
        if self.workflow is not None and self.workflow.state is WorkflowState.SUBMITTING:
            return None
        if self.workflow is not None and self.workflow.is_terminal:
            refreshed = self.workflow.dismiss()
            self.workflow = None
            if refreshed:
                # The list was just re-read; the caller's row may be stale
                current = next((s for s in self.slots if s.id == slot.id), None)
                if current is None or not current.is_open:
                    logger.info("slot no longer open after refresh", slot_id=slot.id)
                    return None
                slot = current

        self.workflow = ReservationWorkflow(
            slot,
            self.gateway,
            tzinfo=self.tzinfo,
            on_booked=self.refresh_slots,
        )
        self.workflow.open()
        logger.info("reservation dialog opened", slot_id=slot.id)
        return self.workflow

    def close_reservation(self) -> bool:
        """Dismiss or cancel the open dialog. True if the slot list was refreshed."""
        workflow = self.workflow
        if workflow is None:
            return False

        if workflow.is_terminal:
            refreshed = workflow.dismiss()
        elif workflow.cancel():
            refreshed = False
        else:
            return False

        self.workflow = None
        return refreshed
