from datetime import datetime, timedelta

import pytest

from core.errors import NotificationFault
from services.notification_service import NotificationService


@pytest.fixture
def service():
    svc = NotificationService()
    svc.register()
    yield svc
    svc.shutdown()


def test_schedule_and_cancel(service):
    nid = service.schedule({"title": "T", "body": "B"}, datetime.now() + timedelta(hours=2))

    pending = service.pending()
    assert [p["id"] for p in pending] == [nid]
    assert pending[0]["content"]["title"] == "T"

    service.cancel(nid)
    assert service.pending() == []


def test_cancel_unknown_raises(service):
    with pytest.raises(NotificationFault):
        service.cancel("notify:missing")


def test_schedule_requires_register():
    with pytest.raises(NotificationFault):
        NotificationService().schedule({"title": "T"}, datetime.now() + timedelta(hours=1))


def test_delivery_lands_in_inbox(service):
    service._deliver({"title": "Appointment Reminder", "body": "x"})
    delivered = service.drain_inbox()
    assert delivered[0]["title"] == "Appointment Reminder"
    assert service.drain_inbox() == []
