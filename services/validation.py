"""
Form-level validation for patients, appointments and treatments.

Each `validate_*` takes the raw form fields (a dict, values usually strings
from the UI) and returns a cleaned dict ready for storage, or raises
ValidationFault listing every bad field at once.
"""

import math
import re
from datetime import datetime

from core.config import APPOINTMENT_STATUSES, STATUS_SCHEDULED
from core.errors import ValidationFault
from core.time_utils import DATE_FORMAT, TIME_FORMAT

PHONE_PATTERN = re.compile(r"^[0-9 \-+()]+$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MIN_AGE = 0
MAX_AGE = 150


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _is_valid_date(value: str) -> bool:
    if not DATE_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def _is_valid_time(value: str) -> bool:
    if not TIME_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return False
    return True


def _to_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(_text(value))
    except ValueError:
        return None


def validate_patient(fields: dict) -> dict:
    errors = {}

    full_name = _text(fields.get("full_name"))
    if not full_name:
        errors["full_name"] = "Name is required"

    raw_age = fields.get("age")
    age = None
    if raw_age is None or _text(raw_age) == "":
        errors["age"] = "Age is required"
    else:
        age = _to_int(raw_age)
        if age is None or not (MIN_AGE <= age <= MAX_AGE):
            errors["age"] = "Please enter a valid age"

    phone = _text(fields.get("phone_number"))
    if not phone:
        errors["phone_number"] = "Phone number is required"
    elif not PHONE_PATTERN.fullmatch(phone):
        errors["phone_number"] = "Please enter a valid phone number"

    if errors:
        raise ValidationFault(errors)

    return {
        "full_name": full_name,
        "age": age,
        "phone_number": phone,
        "category": _text(fields.get("category")) or None,
        "medical_notes": _text(fields.get("medical_notes")),
    }


def validate_appointment(fields: dict) -> dict:
    errors = {}

    patient_id = _to_int(fields.get("patient_id"))
    if patient_id is None:
        errors["patient_id"] = "Please select a patient"

    date = _text(fields.get("date"))
    if not date:
        errors["date"] = "Date is required"
    elif not _is_valid_date(date):
        errors["date"] = "Use YYYY-MM-DD"

    time = _text(fields.get("time"))
    if not time:
        errors["time"] = "Time is required"
    elif not _is_valid_time(time):
        errors["time"] = "Use HH:MM"

    status = _text(fields.get("status")) or STATUS_SCHEDULED
    if status not in APPOINTMENT_STATUSES:
        errors["status"] = f"Status must be one of {', '.join(APPOINTMENT_STATUSES)}"

    if errors:
        raise ValidationFault(errors)

    return {
        "patient_id": patient_id,
        "date": date,
        "time": time,
        "status": status,
        "notes": _text(fields.get("notes")),
    }


def validate_treatment(fields: dict) -> dict:
    errors = {}

    appointment_id = _to_int(fields.get("appointment_id"))
    if appointment_id is None:
        errors["appointment_id"] = "Please select an appointment"

    patient_id = _to_int(fields.get("patient_id"))
    if patient_id is None:
        errors["patient_id"] = "Please select a patient"

    description = _text(fields.get("description"))
    if not description:
        errors["description"] = "Description is required"

    raw_cost = fields.get("cost")
    cost = 0.0
    if raw_cost is not None and _text(raw_cost) != "":
        try:
            cost = float(raw_cost)
        except (TypeError, ValueError):
            cost = None
        if cost is None or not math.isfinite(cost) or cost < 0:
            errors["cost"] = "Please enter a valid cost"

    follow_up = _text(fields.get("follow_up_date")) or None
    if follow_up and not _is_valid_date(follow_up):
        errors["follow_up_date"] = "Use YYYY-MM-DD"

    if errors:
        raise ValidationFault(errors)

    return {
        "appointment_id": appointment_id,
        "patient_id": patient_id,
        "description": description,
        "prescriptions": _text(fields.get("prescriptions")),
        "cost": cost,
        "follow_up_date": follow_up,
    }
