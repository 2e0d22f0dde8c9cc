from sqlalchemy import Column, Integer, String, Float, Text, ForeignKey
from sqlalchemy.orm import relationship
from core.database import Base

class Treatment(Base):
    __tablename__ = "treatments"

    id = Column(Integer, primary_key=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id", ondelete="CASCADE"), nullable=False, index=True)
    # Stored alongside the appointment's own patient_id for direct filtering
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)

    description = Column(Text, nullable=False)
    prescriptions = Column(Text, nullable=False, default="")
    cost = Column(Float, nullable=False, default=0)
    follow_up_date = Column(String, nullable=True)

    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)

    appointment = relationship("Appointment", back_populates="treatments")
    patient = relationship("Patient", back_populates="treatments")

    def to_dict(self):
        return {
            "id": self.id,
            "appointment_id": self.appointment_id,
            "patient_id": self.patient_id,
            "description": self.description,
            "prescriptions": self.prescriptions,
            "cost": self.cost,
            "follow_up_date": self.follow_up_date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
