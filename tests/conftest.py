import copy
import os
import sys

import pytest

# Ensure Python path includes project root for `import tana_calendar`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Тестовое окружение: in-memory gateway, без Google credentials
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["CALENDAR_PROVIDER"] = "noop"
os.environ.pop("GOOGLE_CLIENT_EMAIL", None)
os.environ.pop("GOOGLE_PRIVATE_KEY", None)

from tana_calendar.core.calendar.noop import NoOpCalendarGateway  # noqa: E402
from tana_calendar.core.exceptions import ProviderError  # noqa: E402

SNAPSHOT = {
    "kind": "calendar#event",
    "etag": '"3412345678901234"',
    "id": "ev-1",
    "status": "confirmed",
    "htmlLink": "https://www.google.com/calendar/event?eid=ZXYtMQ",
    "summary": "Standup",
    "description": "daily sync",
    "location": "Room 1",
    "creator": {"email": "sync-bot@project.iam.gserviceaccount.com"},
    "start": {"dateTime": "2025-03-03T09:00:00", "timeZone": "Etc/UTC"},
    "end": {"dateTime": "2025-03-03T10:00:00", "timeZone": "Etc/UTC"},
    "reminders": {"useDefault": True},
}


class RecordingGateway(NoOpCalendarGateway):
    """In-memory gateway that records every call in order."""

    def __init__(self, fail_update: bool = False) -> None:
        super().__init__()
        self.calls = []
        self.fail_update = fail_update

    def seed(self, calendar_id, event):
        self._calendars.setdefault(calendar_id, {})[event["id"]] = copy.deepcopy(event)

    def ops(self):
        return [call[0] for call in self.calls]

    async def get_event(self, calendar_id, event_id):
        self.calls.append(("get", calendar_id, event_id))
        return await super().get_event(calendar_id, event_id)

    async def insert_event(self, calendar_id, event):
        self.calls.append(("insert", calendar_id, copy.deepcopy(event)))
        return await super().insert_event(calendar_id, event)

    async def update_event(self, calendar_id, event_id, event):
        self.calls.append(("update", calendar_id, event_id, copy.deepcopy(event)))
        if self.fail_update:
            raise ProviderError("events.update failed: Rate Limit Exceeded", status_code=403)
        return await super().update_event(calendar_id, event_id, event)

    async def move_event(self, calendar_id, event_id, destination_calendar_id):
        self.calls.append(("move", calendar_id, event_id, destination_calendar_id))
        return await super().move_event(calendar_id, event_id, destination_calendar_id)

    async def delete_event(self, calendar_id, event_id):
        self.calls.append(("delete", calendar_id, event_id))
        return await super().delete_event(calendar_id, event_id)


@pytest.fixture
def gateway():
    gw = RecordingGateway()
    gw.seed("cal-1", SNAPSHOT)
    return gw
