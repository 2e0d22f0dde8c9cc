"""
Local notification delivery backed by an APScheduler BackgroundScheduler.

`schedule()` registers a one-shot DateTrigger job; when it fires the
notification is logged and appended to an in-process inbox that the UI
polls. Nothing here touches the database.
"""

import uuid
from datetime import datetime
from threading import Lock

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from core.errors import NotificationFault
from core.logging_utils import get_logger

logger = get_logger(__name__)


def job_id_for_notification() -> str:
    return f"notify:{uuid.uuid4().hex}"


class NotificationService:
    def __init__(self, scheduler: BackgroundScheduler | None = None):
        self.scheduler = scheduler or BackgroundScheduler()
        self.inbox: list[dict] = []
        self._inbox_lock = Lock()

    def register(self) -> None:
        """One-time startup step: start the scheduler thread."""
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Notification scheduler started")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)

    def _deliver(self, content: dict) -> None:
        logger.info("Notification: %s - %s", content.get("title"), content.get("body"))
        with self._inbox_lock:
            self.inbox.append({**content, "delivered_at": datetime.now().isoformat()})

    def schedule(self, content: dict, trigger_time: datetime) -> str:
        """Register a one-shot notification. Returns its id."""
        if not self.scheduler.running:
            raise NotificationFault("Notifications are not registered")
        notification_id = job_id_for_notification()
        try:
            self.scheduler.add_job(
                self._deliver,
                DateTrigger(run_date=trigger_time),
                args=[content],
                id=notification_id,
                misfire_grace_time=300,
            )
        except Exception as e:
            raise NotificationFault(f"Could not schedule notification: {e}") from e
        return notification_id

    def cancel(self, notification_id: str) -> None:
        try:
            self.scheduler.remove_job(notification_id)
        except JobLookupError as e:
            raise NotificationFault(f"No pending notification {notification_id}") from e

    def pending(self) -> list[dict]:
        return [
            {"id": job.id, "fire_at": job.next_run_time, "content": job.args[0]}
            for job in self.scheduler.get_jobs()
            if job.id.startswith("notify:")
        ]

    def drain_inbox(self) -> list[dict]:
        with self._inbox_lock:
            delivered, self.inbox = self.inbox, []
        return delivered
