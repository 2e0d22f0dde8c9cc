from datetime import datetime
from typing import Callable

from core import config
from core.errors import NotificationFault
from core.logging_utils import get_logger
from core.time_utils import now_local, parse_appointment_datetime

logger = get_logger(__name__)


def reminder_time(appointment: dict) -> datetime:
    """Appointment start minus the reminder lead. ValueError if unparseable."""
    start = parse_appointment_datetime(appointment["date"], appointment["time"])
    return start - config.REMINDER_LEAD


def reminder_content(appointment: dict) -> dict:
    return {
        "title": "Appointment Reminder",
        "body": f"You have an appointment with {appointment.get('patient_name')} at {appointment['time']}",
        "data": {"appointment_id": appointment["id"]},
    }


class ReminderScheduler:
    """
    Turns appointments into one-shot local notifications.

    `notifier` must provide schedule(content, trigger_time) -> id and
    cancel(id). The appointment -> notification id map is kept in memory
    only, so it does not survive a restart.
    """

    def __init__(self, notifier, now: Callable[[], datetime] = now_local):
        self.notifier = notifier
        self.now = now
        self._by_appointment: dict[int, str] = {}

    def schedule_reminder(self, appointment: dict) -> str | None:
        try:
            fire_at = reminder_time(appointment)
        except (KeyError, ValueError) as e:
            raise NotificationFault(f"Bad appointment slot: {e}") from e

        if fire_at <= self.now():
            logger.warning(
                "Reminder time %s for appointment %s is in the past; skipped",
                fire_at.isoformat(), appointment.get("id"),
            )
            return None

        notification_id = self.notifier.schedule(reminder_content(appointment), fire_at)
        self._by_appointment[appointment["id"]] = notification_id
        logger.info(
            "Reminder %s scheduled for appointment %s at %s",
            notification_id, appointment["id"], fire_at.isoformat(),
        )
        return notification_id

    def cancel_reminder(self, notification_id: str) -> bool:
        """Best effort. Failures are logged, never raised."""
        try:
            self.notifier.cancel(notification_id)
        except Exception as e:
            logger.error("Error canceling notification %s: %s", notification_id, e)
            return False
        for appointment_id, nid in list(self._by_appointment.items()):
            if nid == notification_id:
                del self._by_appointment[appointment_id]
        return True

    def reminder_for(self, appointment_id: int) -> str | None:
        return self._by_appointment.get(appointment_id)

    def cancel_for_appointment(self, appointment_id: int) -> bool:
        notification_id = self._by_appointment.pop(appointment_id, None)
        if notification_id is None:
            return False
        return self.cancel_reminder(notification_id)
