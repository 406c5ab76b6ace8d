"""Shared test fixtures."""
from datetime import datetime, timezone

import pytest

from clinic_booking.models import Slot, SlotStatus
from clinic_booking.tools import RemoteResult


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Records the PostgREST builder chain and returns canned rows."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls = []

    def __getattr__(self, name):
        if name in ("select", "eq", "gte", "lt", "order"):
            def _record(*args, **kwargs):
                self.calls.append((name, args))
                return self
            return _record
        raise AttributeError(name)

    def execute(self):
        self.client.executed.append((self.table, list(self.calls)))
        error = self.client.table_errors.get(self.table)
        if error is not None:
            raise error
        return FakeResponse(self.client.rows.get(self.table, []))


class FakeRpc:
    def __init__(self, client, name, params):
        self.client = client
        self.name = name
        self.params = params

    def execute(self):
        self.client.rpc_calls.append((self.name, self.params))
        error = self.client.rpc_errors.get(self.name)
        if error is not None:
            raise error
        return FakeResponse(self.client.rpc_results.get(self.name))


class FakeFunctions:
    def __init__(self, client):
        self.client = client

    def invoke(self, function_name, invoke_options=None):
        self.client.function_calls.append((function_name, invoke_options))
        if self.client.function_error is not None:
            raise self.client.function_error
        return b'{"ok": true}'


class FakeSupabase:
    def __init__(self):
        self.rows = {}
        self.table_errors = {}
        self.rpc_results = {}
        self.rpc_errors = {}
        self.function_error = None

        self.queries = []
        self.executed = []
        self.rpc_calls = []
        self.function_calls = []
        self.functions = FakeFunctions(self)

    def table(self, name):
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params or {})


class BackendError(Exception):
    """Stand-in for postgrest's APIError, which carries ``.message``."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class RecordingGateway:
    """In-memory reservation gateway that records call order."""

    def __init__(self, reserve_result=None, notify_result=None):
        self.reserve_result = reserve_result or RemoteResult(success=True)
        self.notify_result = notify_result or RemoteResult(success=True)
        self.calls = []

    def reserve(self, request):
        self.calls.append(("reserve", request))
        return self.reserve_result

    def dispatch_notification(self, payload):
        self.calls.append(("notify", payload))
        return self.notify_result


@pytest.fixture
def fake_client():
    return FakeSupabase()


@pytest.fixture
def open_slot():
    return Slot(
        id="slot-1",
        location_id="store-a",
        staff_id="staff-1",
        start=datetime(2025, 11, 1, 1, 0, tzinfo=timezone.utc),
        end=datetime(2025, 11, 1, 2, 0, tzinfo=timezone.utc),
        status=SlotStatus.OPEN,
    )


@pytest.fixture
def slot_row():
    def _create(slot_id, start, end, status="open", store_id="store-a", staff_id="staff-1"):
        return {
            "slot_id": slot_id,
            "store_id": store_id,
            "staff_id": staff_id,
            "start_at_utc": start,
            "end_at_utc": end,
            "status": status,
        }
    return _create
