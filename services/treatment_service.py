from sqlalchemy.orm import Session

from models.treatment import Treatment
from models.appointment import Appointment
from models.patient import Patient
from core.time_utils import now_iso


def fetch_treatments(db: Session) -> list[dict]:
    """All treatments, newest first, with patient name and appointment slot."""
    rows = (
        db.query(Treatment, Patient.full_name, Appointment.date, Appointment.time)
        .outerjoin(Patient, Treatment.patient_id == Patient.id)
        .outerjoin(Appointment, Treatment.appointment_id == Appointment.id)
        .order_by(Treatment.created_at.desc(), Treatment.id.desc())
        .all()
    )
    result = []
    for treatment, patient_name, appointment_date, appointment_time in rows:
        row = treatment.to_dict()
        row["patient_name"] = patient_name
        row["appointment_date"] = appointment_date
        row["appointment_time"] = appointment_time
        result.append(row)
    return result


def insert_treatment(db: Session, data: dict) -> int:
    now = now_iso()
    treatment = Treatment(
        appointment_id=data["appointment_id"],
        patient_id=data["patient_id"],
        description=data["description"],
        prescriptions=data.get("prescriptions") or "",
        cost=data.get("cost") or 0,
        follow_up_date=data.get("follow_up_date"),
        created_at=now,
        updated_at=now,
    )
    db.add(treatment)
    db.flush()
    return treatment.id


def update_treatment(db: Session, treatment_id: int, data: dict):
    treatment = db.get(Treatment, treatment_id)
    if not treatment:
        return None

    treatment.appointment_id = data["appointment_id"]
    treatment.patient_id = data["patient_id"]
    treatment.description = data["description"]
    treatment.prescriptions = data.get("prescriptions") or ""
    treatment.cost = data.get("cost") or 0
    treatment.follow_up_date = data.get("follow_up_date")
    treatment.updated_at = now_iso()

    db.flush()
    return treatment


def delete_treatment(db: Session, treatment_id: int) -> bool:
    treatment = db.get(Treatment, treatment_id)
    if not treatment:
        return False
    db.delete(treatment)
    db.flush()
    return True
