"""
Clinic data layer: CRUD for patients, appointments and treatments, plus the
in-memory projections the UI renders from.

Every write runs in one transaction and, once committed, re-fetches the
whole projection(s) it touched before returning. Readers therefore always
see at least the write that triggered the reload.
"""

from core import config
from core.database import Database
from core.errors import NotFound, ValidationFault
from core.logging_utils import get_logger
from core.setup_db import ensure_schema
from services import appointment_service, patient_service, revenue_service, treatment_service
from services.reminder_service import ReminderScheduler
from services.seed_service import seed_if_empty
from services.validation import validate_appointment, validate_patient, validate_treatment

logger = get_logger(__name__)


class ClinicRepository:
    def __init__(
        self,
        database: Database,
        reminders: ReminderScheduler | None = None,
        reschedule_reminders: bool | None = None,
    ):
        self.database = database
        self.reminders = reminders
        self.reschedule_reminders = (
            config.RESCHEDULE_REMINDERS if reschedule_reminders is None else reschedule_reminders
        )

        self.patients: list[dict] = []
        self.appointments: list[dict] = []
        self.treatments: list[dict] = []
        self.is_db_initialized = False

    # ------------------------------------------
    # Startup
    # ------------------------------------------
    def initialize(self, seed: bool = True) -> None:
        ensure_schema(self.database)
        if seed:
            with self.database.session_scope() as db:
                seed_if_empty(db)
        self.reload_all()
        self.is_db_initialized = True
        logger.info("Database initialized successfully")

    # ------------------------------------------
    # Projection reloads
    # ------------------------------------------
    def load_patients(self) -> list[dict]:
        with self.database.session_scope() as db:
            self.patients = patient_service.fetch_patients(db)
        return self.patients

    def load_appointments(self) -> list[dict]:
        with self.database.session_scope() as db:
            self.appointments = appointment_service.fetch_appointments(db)
        return self.appointments

    def load_treatments(self) -> list[dict]:
        with self.database.session_scope() as db:
            self.treatments = treatment_service.fetch_treatments(db)
        return self.treatments

    def reload_all(self) -> None:
        self.load_patients()
        self.load_appointments()
        self.load_treatments()

    # ------------------------------------------
    # Patients
    # ------------------------------------------
    def list_patients(self) -> list[dict]:
        return list(self.patients)

    def search_patients(self, query: str) -> list[dict]:
        """Name or phone substring match, case-insensitive. Blank query lists all.

        Returns the matches; the patient projection itself is left untouched.
        """
        if not (query or "").strip():
            return self.list_patients()
        with self.database.session_scope() as db:
            return patient_service.search_patients(db, query)

    def get_patient(self, patient_id: int) -> dict | None:
        return next((p for p in self.patients if p["id"] == patient_id), None)

    def create_patient(self, fields: dict) -> int:
        data = validate_patient(fields)
        with self.database.session_scope() as db:
            patient_id = patient_service.insert_patient(db, data)
        logger.info("Patient %s created", patient_id)
        self.load_patients()
        return patient_id

    def update_patient(self, patient_id: int, fields: dict) -> None:
        data = validate_patient(fields)
        with self.database.session_scope() as db:
            if patient_service.update_patient(db, patient_id, data) is None:
                raise NotFound(f"Patient {patient_id} not found")
        logger.info("Patient %s updated", patient_id)
        # Appointment/treatment rows carry the patient name
        self.reload_all()

    def delete_patient(self, patient_id: int) -> None:
        with self.database.session_scope() as db:
            removed_appointments = patient_service.delete_patient(db, patient_id)
            if removed_appointments is None:
                raise NotFound(f"Patient {patient_id} not found")
        logger.info(
            "Patient %s deleted with %d appointment(s)", patient_id, len(removed_appointments)
        )
        if self.reschedule_reminders:
            for appointment_id in removed_appointments:
                self._cancel_reminder(appointment_id)
        self.reload_all()

    # ------------------------------------------
    # Appointments
    # ------------------------------------------
    def list_appointments(self) -> list[dict]:
        return list(self.appointments)

    def get_appointment(self, appointment_id: int) -> dict | None:
        return next((a for a in self.appointments if a["id"] == appointment_id), None)

    def appointments_for_patient(self, patient_id: int) -> list[dict]:
        return [a for a in self.appointments if a["patient_id"] == patient_id]

    def _require_patient(self, db, patient_id: int):
        patient = patient_service.get_patient(db, patient_id)
        if patient is None:
            raise ValidationFault({"patient_id": "Patient not found"})
        return patient

    def create_appointment(self, fields: dict) -> int:
        data = validate_appointment(fields)
        with self.database.session_scope() as db:
            patient = self._require_patient(db, data["patient_id"])
            appointment_id = appointment_service.insert_appointment(db, data)
            patient_name = patient.full_name
        logger.info("Appointment %s created for patient %s", appointment_id, data["patient_id"])
        self.load_appointments()

        if data["status"] == config.STATUS_SCHEDULED:
            self._schedule_reminder({**data, "id": appointment_id, "patient_name": patient_name})
        return appointment_id

    def update_appointment(self, appointment_id: int, fields: dict) -> None:
        data = validate_appointment(fields)
        with self.database.session_scope() as db:
            patient = self._require_patient(db, data["patient_id"])
            if appointment_service.update_appointment(db, appointment_id, data) is None:
                raise NotFound(f"Appointment {appointment_id} not found")
            patient_name = patient.full_name
        logger.info("Appointment %s updated", appointment_id)
        self.load_appointments()
        # Treatment rows carry the appointment slot
        self.load_treatments()

        if self.reschedule_reminders:
            self._cancel_reminder(appointment_id)
            if data["status"] == config.STATUS_SCHEDULED:
                self._schedule_reminder({**data, "id": appointment_id, "patient_name": patient_name})

    def delete_appointment(self, appointment_id: int) -> None:
        with self.database.session_scope() as db:
            if not appointment_service.delete_appointment(db, appointment_id):
                raise NotFound(f"Appointment {appointment_id} not found")
        logger.info("Appointment %s deleted", appointment_id)
        if self.reschedule_reminders:
            self._cancel_reminder(appointment_id)
        self.load_appointments()
        self.load_treatments()

    def _schedule_reminder(self, appointment: dict) -> None:
        if self.reminders is None:
            return
        try:
            self.reminders.schedule_reminder(appointment)
        except Exception as e:
            # Reminders never fail the owning write
            logger.error("Error scheduling notification for appointment %s: %s", appointment["id"], e)

    def _cancel_reminder(self, appointment_id: int) -> None:
        if self.reminders is None:
            return
        try:
            self.reminders.cancel_for_appointment(appointment_id)
        except Exception as e:
            logger.error("Error canceling reminder for appointment %s: %s", appointment_id, e)

    # ------------------------------------------
    # Treatments
    # ------------------------------------------
    def list_treatments(self) -> list[dict]:
        return list(self.treatments)

    def get_treatment(self, treatment_id: int) -> dict | None:
        return next((t for t in self.treatments if t["id"] == treatment_id), None)

    def treatments_for_patient(self, patient_id: int) -> list[dict]:
        return [t for t in self.treatments if t["patient_id"] == patient_id]

    def treatments_for_appointment(self, appointment_id: int) -> list[dict]:
        return [t for t in self.treatments if t["appointment_id"] == appointment_id]

    def _check_treatment_links(self, db, data: dict) -> None:
        appointment = appointment_service.get_appointment(db, data["appointment_id"])
        if appointment is None:
            raise ValidationFault({"appointment_id": "Appointment not found"})
        if appointment.patient_id != data["patient_id"]:
            raise ValidationFault({"patient_id": "Patient does not match the appointment"})

    def create_treatment(self, fields: dict) -> int:
        data = validate_treatment(fields)
        with self.database.session_scope() as db:
            self._check_treatment_links(db, data)
            treatment_id = treatment_service.insert_treatment(db, data)
        logger.info("Treatment %s created for appointment %s", treatment_id, data["appointment_id"])
        self.load_treatments()
        return treatment_id

    def update_treatment(self, treatment_id: int, fields: dict) -> None:
        data = validate_treatment(fields)
        with self.database.session_scope() as db:
            self._check_treatment_links(db, data)
            if treatment_service.update_treatment(db, treatment_id, data) is None:
                raise NotFound(f"Treatment {treatment_id} not found")
        logger.info("Treatment %s updated", treatment_id)
        self.load_treatments()

    def delete_treatment(self, treatment_id: int) -> None:
        with self.database.session_scope() as db:
            if not treatment_service.delete_treatment(db, treatment_id):
                raise NotFound(f"Treatment {treatment_id} not found")
        logger.info("Treatment %s deleted", treatment_id)
        self.load_treatments()

    # ------------------------------------------
    # Derived views
    # ------------------------------------------
    def appointments_by_date(self, date: str) -> list[dict]:
        return revenue_service.appointments_by_date(self.appointments, date)

    def daily_revenue(self, date: str) -> float:
        return revenue_service.daily_revenue(self.treatments, date)

    def total_revenue(self) -> float:
        return revenue_service.total_revenue(self.treatments)

    def appointment_status_counts(self) -> dict[str, int]:
        return revenue_service.status_counts(self.appointments)

    def export_patients(self) -> str:
        return revenue_service.export_patients(self.patients)
