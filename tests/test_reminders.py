from datetime import datetime

import pytest

from core.errors import NotificationFault
from services.reminder_service import ReminderScheduler, reminder_time
from tests.conftest import FIXED_NOW, FakeNotifier


def _appointment(**kw):
    base = {"id": 7, "patient_name": "Killua Zoldyck", "date": "2030-05-01", "time": "10:00"}
    base.update(kw)
    return base


def test_reminder_time_is_one_hour_before():
    assert reminder_time(_appointment()) == datetime(2030, 5, 1, 9, 0)
    assert reminder_time(_appointment(date="2030-05-02", time="00:30")) == datetime(2030, 5, 1, 23, 30)


def test_future_reminder_registered():
    notifier = FakeNotifier()
    scheduler = ReminderScheduler(notifier, now=lambda: FIXED_NOW)

    nid = scheduler.schedule_reminder(_appointment())

    assert nid == "n1"
    _, content, fire_at = notifier.scheduled[0]
    assert content["title"] == "Appointment Reminder"
    assert content["body"] == "You have an appointment with Killua Zoldyck at 10:00"
    assert fire_at == datetime(2030, 5, 1, 9, 0)


@pytest.mark.parametrize("slot", ["08:59", "09:00"])
def test_fire_time_not_in_future_is_skipped(slot):
    # FIXED_NOW is 08:00, so 09:00 fires exactly now and is skipped too
    notifier = FakeNotifier()
    scheduler = ReminderScheduler(notifier, now=lambda: FIXED_NOW)

    assert scheduler.schedule_reminder(_appointment(time=slot)) is None
    assert notifier.scheduled == []


def test_unparseable_slot_raises_notification_fault():
    scheduler = ReminderScheduler(FakeNotifier(), now=lambda: FIXED_NOW)
    with pytest.raises(NotificationFault):
        scheduler.schedule_reminder(_appointment(time="soon"))


def test_cancel_is_best_effort():
    notifier = FakeNotifier(fail_cancel=True)
    scheduler = ReminderScheduler(notifier, now=lambda: FIXED_NOW)
    assert scheduler.cancel_reminder("n1") is False


def test_cancel_for_appointment_uses_mapping():
    notifier = FakeNotifier()
    scheduler = ReminderScheduler(notifier, now=lambda: FIXED_NOW)
    scheduler.schedule_reminder(_appointment())

    assert scheduler.cancel_for_appointment(7) is True
    assert notifier.cancelled == ["n1"]
    assert scheduler.cancel_for_appointment(7) is False
