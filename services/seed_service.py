from sqlalchemy.orm import Session

from core.config import STATUS_SCHEDULED
from core.logging_utils import get_logger
from core.time_utils import today_str
from services.patient_service import count_patients, insert_patient
from services.appointment_service import insert_appointment
from services.treatment_service import insert_treatment

logger = get_logger(__name__)

DEMO_PATIENTS = [
    {"full_name": "Gon Freecss", "age": 12, "phone_number": "+1234567890",
     "category": "Enhancement", "medical_notes": "Young hunter with great potential"},
    {"full_name": "Killua Zoldyck", "age": 12, "phone_number": "+1234567891",
     "category": "Transmutation", "medical_notes": "Assassin with electrical nen"},
    {"full_name": "Kurapika Kurta", "age": 19, "phone_number": "+1234567892",
     "category": "Conjuration", "medical_notes": "Chain user seeking revenge"},
    {"full_name": "Leorio Paradinight", "age": 19, "phone_number": "+1234567893",
     "category": "Enhancement", "medical_notes": "Medical student and hunter"},
]


def seed_if_empty(db: Session) -> bool:
    """
    Insert demo patients, appointments and a treatment on a fresh database.

    No-op when any patient already exists. Foreign keys use the ids
    generated for the rows inserted here.
    """
    if count_patients(db) > 0:
        logger.info("Database already seeded")
        return False

    patient_ids = [insert_patient(db, p) for p in DEMO_PATIENTS]

    tomorrow = today_str(1)
    day_after = today_str(2)

    first_visit = insert_appointment(db, {
        "patient_id": patient_ids[0], "date": tomorrow, "time": "10:00",
        "status": STATUS_SCHEDULED, "notes": "Regular checkup",
    })
    insert_appointment(db, {
        "patient_id": patient_ids[1], "date": tomorrow, "time": "14:00",
        "status": STATUS_SCHEDULED, "notes": "Follow-up treatment",
    })
    insert_appointment(db, {
        "patient_id": patient_ids[2], "date": day_after, "time": "11:00",
        "status": STATUS_SCHEDULED, "notes": "Initial consultation",
    })

    insert_treatment(db, {
        "appointment_id": first_visit, "patient_id": patient_ids[0],
        "description": "General health checkup", "prescriptions": "Vitamin supplements",
        "cost": 50.00, "follow_up_date": tomorrow,
    })

    logger.info("Database seeded with %d demo patients", len(patient_ids))
    return True
