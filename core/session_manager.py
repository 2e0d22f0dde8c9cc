from dataclasses import dataclass

import streamlit as st

from core.database import Database
from core.logging_utils import setup_logging
from core.preferences import Preferences
from services.auth_service import SessionGate
from services.clinic_repository import ClinicRepository
from services.notification_service import NotificationService
from services.reminder_service import ReminderScheduler


@dataclass
class ClinicApp:
    database: Database
    preferences: Preferences
    notifications: NotificationService
    repository: ClinicRepository
    gate: SessionGate


@st.cache_resource
def get_app() -> ClinicApp:
    """Build the storage handle and services once per process."""
    setup_logging()

    database = Database()
    preferences = Preferences(database)

    notifications = NotificationService()
    notifications.register()

    repository = ClinicRepository(database, reminders=ReminderScheduler(notifications))
    repository.initialize()

    gate = SessionGate(preferences)
    gate.cold_start()

    return ClinicApp(database, preferences, notifications, repository, gate)


def init_session_state():
    """Ensure required session keys exist."""
    if "edit_id" not in st.session_state:
        st.session_state.edit_id = None


def logout():
    """Lock the app and return to the main page."""
    get_app().gate.logout()
    st.session_state.pop("edit_id", None)
    st.switch_page("app.py")


def require_unlocked() -> ClinicApp:
    """Send locked sessions back to app.py, where the PIN prompt lives."""
    init_session_state()
    app = get_app()
    if not app.repository.is_db_initialized:
        st.error("Database is not ready.")
        st.stop()
    if not app.gate.is_authenticated:
        st.warning("Please unlock the app to access this page.")
        st.switch_page("app.py")
    return app
