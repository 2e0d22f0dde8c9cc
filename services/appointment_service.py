from sqlalchemy.orm import Session

from models.appointment import Appointment
from models.patient import Patient
from models.treatment import Treatment
from core.time_utils import now_iso


# -----------------------------
# All appointments, soonest first, with patient name
# -----------------------------
def fetch_appointments(db: Session) -> list[dict]:
    rows = (
        db.query(Appointment, Patient.full_name)
        .outerjoin(Patient, Appointment.patient_id == Patient.id)
        .order_by(Appointment.date.asc(), Appointment.time.asc(), Appointment.id.asc())
        .all()
    )
    result = []
    for appointment, patient_name in rows:
        row = appointment.to_dict()
        row["patient_name"] = patient_name
        result.append(row)
    return result


def get_appointment(db: Session, appointment_id: int):
    return db.get(Appointment, appointment_id)


def appointment_ids_for_patient(db: Session, patient_id: int) -> list[int]:
    return [
        a_id for (a_id,) in db.query(Appointment.id).filter(Appointment.patient_id == patient_id)
    ]


# -----------------------------
# Create a new appointment
# -----------------------------
def insert_appointment(db: Session, data: dict) -> int:
    now = now_iso()
    appointment = Appointment(
        patient_id=data["patient_id"],
        date=data["date"],
        time=data["time"],
        status=data["status"],
        notes=data.get("notes") or "",
        created_at=now,
        updated_at=now,
    )
    db.add(appointment)
    db.flush()
    return appointment.id


# -----------------------------
# Update appointment (all fields rewritten)
# -----------------------------
def update_appointment(db: Session, appointment_id: int, data: dict):
    appointment = db.get(Appointment, appointment_id)
    if not appointment:
        return None

    appointment.patient_id = data["patient_id"]
    appointment.date = data["date"]
    appointment.time = data["time"]
    appointment.status = data["status"]
    appointment.notes = data.get("notes") or ""
    appointment.updated_at = now_iso()

    # Keep the redundant patient link on treatments in step
    db.query(Treatment).filter(Treatment.appointment_id == appointment_id).update(
        {Treatment.patient_id: data["patient_id"]}, synchronize_session=False
    )

    db.flush()
    return appointment


# -----------------------------
# Delete an appointment and its treatments
# -----------------------------
def delete_appointment(db: Session, appointment_id: int) -> bool:
    appointment = db.get(Appointment, appointment_id)
    if not appointment:
        return False

    db.query(Treatment).filter(Treatment.appointment_id == appointment_id).delete(
        synchronize_session=False
    )
    db.delete(appointment)
    db.flush()
    return True
