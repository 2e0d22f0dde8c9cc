# tests/conftest.py
import os
import sys
from datetime import datetime

import pytest

# Ensure project root is on sys.path for 'import core...'
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.database import Database  # noqa: E402
from core.preferences import Preferences, SecureStore  # noqa: E402
from core.setup_db import ensure_schema  # noqa: E402
from services.clinic_repository import ClinicRepository  # noqa: E402
from services.reminder_service import ReminderScheduler  # noqa: E402

FIXED_NOW = datetime(2030, 5, 1, 8, 0)


class FakeNotifier:
    """Records schedule/cancel calls instead of starting a scheduler."""

    def __init__(self, fail_schedule=False, fail_cancel=False):
        self.scheduled = []  # (id, content, trigger_time)
        self.cancelled = []
        self.fail_schedule = fail_schedule
        self.fail_cancel = fail_cancel

    def schedule(self, content, trigger_time):
        if self.fail_schedule:
            raise RuntimeError("permission denied")
        nid = f"n{len(self.scheduled) + 1}"
        self.scheduled.append((nid, content, trigger_time))
        return nid

    def cancel(self, notification_id):
        if self.fail_cancel:
            raise RuntimeError("no such notification")
        self.cancelled.append(notification_id)


class FakeBiometric:
    def __init__(self, available=True, succeed=True):
        self.available = available
        self.succeed = succeed
        self.prompts = []

    def is_available(self):
        return self.available

    def authenticate(self, prompt):
        self.prompts.append(prompt)
        return self.succeed


@pytest.fixture
def database(tmp_path):
    db = Database(str(tmp_path / "clinic.db"))
    ensure_schema(db)
    yield db
    db.dispose()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def reminders(notifier):
    return ReminderScheduler(notifier, now=lambda: FIXED_NOW)


@pytest.fixture
def repo(database, reminders):
    r = ClinicRepository(database, reminders=reminders, reschedule_reminders=False)
    r.initialize(seed=False)
    return r


@pytest.fixture
def preferences(database, tmp_path):
    return Preferences(database, SecureStore(str(tmp_path / "secure_store.json")))


@pytest.fixture
def make_patient(repo):
    def _make(full_name="Gon Freecss", age=12, phone_number="+1234567890", **extra):
        return repo.create_patient(
            {"full_name": full_name, "age": age, "phone_number": phone_number, **extra}
        )
    return _make


@pytest.fixture
def make_appointment(repo):
    def _make(patient_id, date="2030-05-02", time="10:00", **extra):
        return repo.create_appointment(
            {"patient_id": patient_id, "date": date, "time": time, **extra}
        )
    return _make
