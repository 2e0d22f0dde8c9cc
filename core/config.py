import os
from datetime import timedelta

from dotenv import load_dotenv

# Load .env so local overrides apply even when running via Streamlit
load_dotenv()

# Path: project_root/data/clinic.db
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.getenv("CLINIC_DATA_DIR", os.path.join(BASE_DIR, "data"))

DB_PATH = os.getenv("CLINIC_DB_PATH", os.path.join(DATA_DIR, "clinic.db"))
SECURE_STORE_PATH = os.getenv("CLINIC_SECURE_STORE", os.path.join(DATA_DIR, "secure_store.json"))

LOG_FILE = os.getenv("CLINIC_LOG_FILE", os.path.join(DATA_DIR, "logs", "clinic.log"))
LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "INFO").upper()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Reminders are never cancelled or moved after creation unless this is on.
RESCHEDULE_REMINDERS = _env_flag("RESCHEDULE_REMINDERS", False)

REMINDER_LEAD = timedelta(hours=1)
PIN_MIN_LENGTH = 4

STATUS_SCHEDULED = "scheduled"
STATUS_COMPLETED = "completed"
STATUS_CANCELED = "canceled"
APPOINTMENT_STATUSES = (STATUS_SCHEDULED, STATUS_COMPLETED, STATUS_CANCELED)

# Secure store keys
PIN_KEY = "app_pin"
BIOMETRIC_KEY = "biometric_enabled"

# Plain preference keys (settings table)
THEME_KEY = "theme"
