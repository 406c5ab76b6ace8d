from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Union

from clinic_booking.config import DEFAULT_NOTIFICATION_FUNCTION
from clinic_booking.logging_config import get_logger
from clinic_booking.models import ReservationRequest

logger = get_logger(__name__)


@dataclass
class RemoteResult:
    success: bool
    error: Optional[str] = None
    data: Any = None


def error_message(exc: Exception) -> str:
    # postgrest APIError carries the database message on .message,
    # functions errors on .message too; some builds only have .details
    msg = getattr(exc, "message", None)
    if msg:
        return str(msg)
    details = getattr(exc, "details", None)
    if details:
        return str(details)
    return str(exc)


# --- RESERVATION TOOL ------------------------------------------------------

def reserve_slot_tool(client, request: ReservationRequest) -> RemoteResult:
    """Ask the backend to book a slot.

    The ``reserve_slot`` procedure is the only thing allowed to flip a slot
    from open to booked; it rejects already-booked or unknown slots and
    we report its message as-is.
    """
    try:
        response = client.rpc("reserve_slot", request.to_rpc_params()).execute()
        return RemoteResult(success=True, data=getattr(response, "data", None))
    except Exception as e:
        msg = error_message(e)
        logger.info("reserve_slot rejected", slot_id=request.slot_id, error=msg)
        return RemoteResult(success=False, error=msg)


# --- EMAIL TOOL ------------------------------------------------------------

def send_reservation_email_tool(
    client,
    payload: Dict[str, Any],
    function_name: str = DEFAULT_NOTIFICATION_FUNCTION,
) -> RemoteResult:
    try:
        response = client.functions.invoke(function_name, invoke_options={"body": payload})
        return RemoteResult(success=True, data=response)
    except Exception as e:
        msg = error_message(e)
        logger.error(
            "reservation email failed",
            function=function_name,
            store_id=payload.get("store_id"),
            staff_id=payload.get("staff_id"),
            error=msg,
        )
        return RemoteResult(success=False, error=msg)


# --- DEMO SLOT TOOL --------------------------------------------------------

def generate_demo_slots_tool(client, day: Optional[Union[date, str]] = None) -> RemoteResult:
    params: Dict[str, Any] = {}
    if day:
        params["p_date"] = day.isoformat() if isinstance(day, date) else str(day)

    try:
        response = client.rpc("generate_demo_slots", params).execute()
        return RemoteResult(success=True, data=response.data or 0)
    except Exception as e:
        msg = error_message(e)
        logger.warning("generate_demo_slots failed", p_date=params.get("p_date"), error=msg)
        return RemoteResult(success=False, error=msg)


class SupabaseGateway:
    """Remote collaborators of a reservation, backed by a Supabase client."""

    def __init__(self, client, notification_function: str = DEFAULT_NOTIFICATION_FUNCTION) -> None:
        self.client = client
        self.notification_function = notification_function

    def reserve(self, request: ReservationRequest) -> RemoteResult:
        return reserve_slot_tool(self.client, request)

    def dispatch_notification(self, payload: Dict[str, Any]) -> RemoteResult:
        return send_reservation_email_tool(self.client, payload, self.notification_function)
