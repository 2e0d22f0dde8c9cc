from sqlalchemy import or_
from sqlalchemy.orm import Session

from models.patient import Patient
from models.appointment import Appointment
from models.treatment import Treatment
from core.time_utils import now_iso
from services.appointment_service import appointment_ids_for_patient


# ------------------------------------------
# Fetch ALL patients (newest first)
# ------------------------------------------
def fetch_patients(db: Session) -> list[dict]:
    rows = (
        db.query(Patient)
        .order_by(Patient.created_at.desc(), Patient.id.desc())
        .all()
    )
    return [p.to_dict() for p in rows]


# ------------------------------------------
# Search by name OR phone, case-insensitive
# ------------------------------------------
def search_patients(db: Session, query: str) -> list[dict]:
    if not (query or "").strip():
        return fetch_patients(db)

    rows = (
        db.query(Patient)
        .filter(
            or_(
                Patient.full_name.icontains(query, autoescape=True),
                Patient.phone_number.icontains(query, autoescape=True),
            )
        )
        .order_by(Patient.created_at.desc(), Patient.id.desc())
        .all()
    )
    return [p.to_dict() for p in rows]


def get_patient(db: Session, patient_id: int):
    return db.get(Patient, patient_id)


def count_patients(db: Session) -> int:
    return db.query(Patient).count()


# ------------------------------------------
# Create a new patient
# ------------------------------------------
def insert_patient(db: Session, data: dict) -> int:
    now = now_iso()
    patient = Patient(
        full_name=data["full_name"],
        age=data["age"],
        phone_number=data["phone_number"],
        category=data.get("category"),
        medical_notes=data.get("medical_notes") or "",
        created_at=now,
        updated_at=now,
    )
    db.add(patient)
    db.flush()
    return patient.id


# ------------------------------------------
# Update patient (all fields rewritten)
# ------------------------------------------
def update_patient(db: Session, patient_id: int, data: dict):
    patient = db.get(Patient, patient_id)
    if not patient:
        return None

    patient.full_name = data["full_name"]
    patient.age = data["age"]
    patient.phone_number = data["phone_number"]
    patient.category = data.get("category")
    patient.medical_notes = data.get("medical_notes") or ""
    patient.updated_at = now_iso()

    db.flush()
    return patient


# ------------------------------------------
# Delete a patient with their appointments and treatments
# ------------------------------------------
def delete_patient(db: Session, patient_id: int) -> list[int] | None:
    """Remove the patient and everything that hangs off it.

    Returns the ids of the appointments removed, or None if the patient
    does not exist. Runs inside the caller's transaction.
    """
    patient = db.get(Patient, patient_id)
    if not patient:
        return None

    appointment_ids = appointment_ids_for_patient(db, patient_id)

    # A treatment can reach this patient directly or through an appointment;
    # one statement covers both paths so each row goes exactly once.
    treatment_filter = Treatment.patient_id == patient_id
    if appointment_ids:
        treatment_filter = or_(treatment_filter, Treatment.appointment_id.in_(appointment_ids))
    db.query(Treatment).filter(treatment_filter).delete(synchronize_session=False)

    db.query(Appointment).filter(Appointment.patient_id == patient_id).delete(synchronize_session=False)
    db.delete(patient)
    db.flush()
    return appointment_ids
