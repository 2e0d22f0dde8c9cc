# models/appointment.py

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from core.config import STATUS_SCHEDULED
from core.database import Base

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # Link to patient
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)

    # Local wall-clock slot: 'YYYY-MM-DD' + 'HH:MM'
    date = Column(String, nullable=False, index=True)
    time = Column(String, nullable=False)

    # scheduled | completed | canceled
    status = Column(String, nullable=False, default=STATUS_SCHEDULED)
    notes = Column(Text, nullable=False, default="")

    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    # ORM relationships
    patient = relationship("Patient", back_populates="appointments")
    treatments = relationship("Treatment", back_populates="appointment", passive_deletes=True)

    def to_dict(self):
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "date": self.date,
            "time": self.time,
            "status": self.status,
            "notes": self.notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __repr__(self):
        return f"<Appointment {self.id} for Patient {self.patient_id} on {self.date} {self.time}>"
