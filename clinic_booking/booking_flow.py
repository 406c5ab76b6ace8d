from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from email_validator import validate_email as _validate_email, EmailNotValidError

from clinic_booking.logging_config import get_logger
from clinic_booking.models import ReservationRequest, Slot
from clinic_booking.time_format import format_instant, split_display
from clinic_booking.tools import RemoteResult, error_message

logger = get_logger(__name__)


class WorkflowState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    PARTIAL_FAILURE = "partial_failure"
    FAILED = "failed"


class SubmitStage(str, Enum):
    RESERVING = "reserving"
    NOTIFYING = "notifying"


TERMINAL_STATES = {
    WorkflowState.SUCCEEDED,
    WorkflowState.PARTIAL_FAILURE,
    WorkflowState.FAILED,
}

# The slot changed on the backend in these, so the list must be re-read
BOOKED_STATES = {
    WorkflowState.SUCCEEDED,
    WorkflowState.PARTIAL_FAILURE,
}

REQUIRED_FIELDS = ["customer_name", "email"]

MSG_SUBMITTING = "Submitting..."
MSG_SUCCEEDED = (
    "Your reservation is complete! ✨ "
    "We have sent you a confirmation email, please check your inbox."
)
MSG_PARTIAL_FAILURE = (
    "Your reservation is confirmed, but we could not send the confirmation email. "
    "We will resend it later."
)


class ReservationGateway(Protocol):
    def reserve(self, request: ReservationRequest) -> RemoteResult:
        ...

    def dispatch_notification(self, payload: Dict[str, Any]) -> RemoteResult:
        ...


@dataclass
class BookingForm:
    customer_name: str = ""
    phone: str = ""
    email: str = ""

    def missing_fields(self) -> List[str]:
        return [f for f in REQUIRED_FIELDS if not getattr(self, f, "").strip()]


# ----------------- VALIDATORS ------------------------

def validate_email(email: str) -> bool:
    try:
        _validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def email_hint(email: str) -> Optional[str]:
    """Advisory message for the e-mail field; never blocks submission."""
    if not email.strip() or validate_email(email.strip()):
        return None
    return "This email address looks invalid. Please check it, e.g. name@example.com"


# ----------------- PAYLOADS ------------------------

def slot_display(slot: Slot, tzinfo=None) -> Tuple[str, str, str]:
    """(date, start time, end time) in the clinic's zone."""
    day, start = split_display(format_instant(slot.start, tzinfo))
    _, end = split_display(format_instant(slot.end, tzinfo))
    return day, start, end


def build_notification_payload(slot: Slot, request: ReservationRequest, tzinfo=None) -> Dict[str, Any]:
    return {
        "to": request.customer_email,
        "name": request.customer_name,
        "phone": request.customer_phone or "",
        "store_id": slot.location_id,
        "staff_id": slot.staff_id,
        "start_at_jst": format_instant(slot.start, tzinfo),
        "end_at_jst": format_instant(slot.end, tzinfo),
    }


def generate_confirmation_text(slot: Slot, form: BookingForm, tzinfo=None) -> str:
    day, start, end = slot_display(slot, tzinfo)
    return (
        f"- **Date:** {day}\n"
        f"- **Time:** {start} - {end}\n"
        f"- **Name:** {form.customer_name}\n"
        f"- **Email:** {form.email}\n"
        f"- **Phone:** {form.phone or 'N/A'}"
    )


# ----------------- WORKFLOW ------------------------

class ReservationWorkflow:
    """Booking dialog for a single slot.

    ``submit()`` runs two stages in order. RESERVING calls the reservation
    procedure; only its success moves the run to NOTIFYING, which sends the
    confirmation e-mail. A failed e-mail never undoes the reservation, it
    only downgrades the outcome to PARTIAL_FAILURE.

    Terminal states stay on screen until ``dismiss()``. Leaving SUCCEEDED or
    PARTIAL_FAILURE calls ``on_booked`` so the owner can re-read the slots.
    """

    def __init__(
        self,
        slot: Slot,
        gateway: ReservationGateway,
        tzinfo=None,
        on_booked: Optional[Callable[[], None]] = None,
    ) -> None:
        self.slot = slot
        self.gateway = gateway
        self.tzinfo = tzinfo
        self.on_booked = on_booked

        self.state = WorkflowState.IDLE
        self.stage: Optional[SubmitStage] = None
        self.form = BookingForm()
        self.message = ""
        self.error: Optional[str] = None
        self.history: List[WorkflowState] = [self.state]

        self._request: Optional[ReservationRequest] = None
        self._stages: Dict[SubmitStage, Callable[[], None]] = {
            SubmitStage.RESERVING: self._reserve,
            SubmitStage.NOTIFYING: self._notify,
        }

    # --- properties ---

    @property
    def is_open(self) -> bool:
        return self.state is not WorkflowState.IDLE

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def booked(self) -> bool:
        return self.state in BOOKED_STATES

    @property
    def can_submit(self) -> bool:
        return self.state is WorkflowState.COLLECTING and not self.form.missing_fields()

    @property
    def can_cancel(self) -> bool:
        return self.state is WorkflowState.COLLECTING

    # --- transitions ---

    def _transition(self, new_state: WorkflowState) -> None:
        logger.info(
            "reservation workflow transition",
            slot_id=self.slot.id,
            **{"from": self.state.value, "to": new_state.value},
        )
        self.state = new_state
        self.history.append(new_state)

    def open(self) -> None:
        if self.state is not WorkflowState.IDLE:
            return
        self.message = ""
        self.error = None
        self._transition(WorkflowState.COLLECTING)

    def update(
        self,
        customer_name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        if self.state is not WorkflowState.COLLECTING:
            return
        if customer_name is not None:
            self.form.customer_name = customer_name
        if phone is not None:
            self.form.phone = phone
        if email is not None:
            self.form.email = email

    def cancel(self) -> bool:
        if not self.can_cancel:
            return False
        self.form = BookingForm()
        self._transition(WorkflowState.IDLE)
        return True

    def submit(self) -> WorkflowState:
        # Covers both missing required fields and a submit already in flight
        if not self.can_submit:
            return self.state

        self._request = ReservationRequest(
            slot_id=self.slot.id,
            customer_name=self.form.customer_name.strip(),
            customer_email=self.form.email.strip(),
            customer_phone=self.form.phone.strip() or None,
        )
        self.message = MSG_SUBMITTING
        self.stage = SubmitStage.RESERVING
        self._transition(WorkflowState.SUBMITTING)

        while self.state is WorkflowState.SUBMITTING:
            self._stages[self.stage]()

        self.stage = None
        return self.state

    def dismiss(self) -> bool:
        """Close a finished dialog. Returns True if the slot list needs a refresh."""
        if not self.is_terminal:
            return False

        booked = self.booked
        self.form = BookingForm()
        self._request = None
        self.message = ""
        self._transition(WorkflowState.IDLE)

        if booked and self.on_booked is not None:
            self.on_booked()
        return booked

    # --- stages ---

    def _reserve(self) -> None:
        try:
            result = self.gateway.reserve(self._request)
        except Exception as e:
            result = RemoteResult(success=False, error=error_message(e))

        if not result.success:
            self.error = result.error or "Unknown error"
            self.message = f"Failed: {self.error}"
            self._transition(WorkflowState.FAILED)
            return

        self.stage = SubmitStage.NOTIFYING

    def _notify(self) -> None:
        payload = build_notification_payload(self.slot, self._request, self.tzinfo)
        try:
            result = self.gateway.dispatch_notification(payload)
        except Exception as e:
            result = RemoteResult(success=False, error=error_message(e))

        if result.success:
            self.message = MSG_SUCCEEDED
            self._transition(WorkflowState.SUCCEEDED)
        else:
            self.error = result.error
            self.message = MSG_PARTIAL_FAILURE
            self._transition(WorkflowState.PARTIAL_FAILURE)
