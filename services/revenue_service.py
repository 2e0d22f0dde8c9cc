"""
Read-only views derived from the in-memory projections.

Nothing here touches storage: every function takes the current projection
(a list of row dicts) and computes on the fly.
"""

import json
import math
from collections import Counter

from core.config import APPOINTMENT_STATUSES
from core.time_utils import iso_day


def appointments_by_date(appointments: list[dict], date: str) -> list[dict]:
    return [a for a in appointments if a.get("date") == date]


def _cost(value) -> float:
    # Non-numeric or missing costs count as zero
    try:
        cost = float(value)
    except (TypeError, ValueError):
        return 0.0
    return cost if math.isfinite(cost) else 0.0


def treatment_effective_date(treatment: dict) -> str | None:
    """Appointment date when known, else the day the treatment was created."""
    return treatment.get("appointment_date") or iso_day(treatment.get("created_at"))


def daily_revenue(treatments: list[dict], date: str) -> float:
    return sum(
        _cost(t.get("cost")) for t in treatments if treatment_effective_date(t) == date
    )


def total_revenue(treatments: list[dict]) -> float:
    return sum(_cost(t.get("cost")) for t in treatments)


def status_counts(appointments: list[dict]) -> dict[str, int]:
    counts = Counter(a.get("status") for a in appointments)
    return {status: counts.get(status, 0) for status in APPOINTMENT_STATUSES}


def export_patients(patients: list[dict]) -> str:
    """Serialize the full patient projection as pretty JSON for sharing."""
    return json.dumps(patients, indent=2, ensure_ascii=False)
