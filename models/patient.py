# models/patient.py

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from core.database import Base

class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)

    # Demographics
    full_name = Column(String, nullable=False)
    age = Column(Integer, nullable=False)
    phone_number = Column(String, nullable=False)

    # Optional free-text classification tag
    category = Column(String, nullable=True)
    medical_notes = Column(Text, nullable=False, default="")

    # ISO-8601 UTC timestamps
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)

    # Deletes are cascaded by the database (ON DELETE CASCADE)
    appointments = relationship("Appointment", back_populates="patient", passive_deletes=True)
    treatments = relationship("Treatment", back_populates="patient", passive_deletes=True)

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "age": self.age,
            "phone_number": self.phone_number,
            "category": self.category,
            "medical_notes": self.medical_notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __repr__(self):
        return f"<Patient {self.id} - {self.full_name}>"
