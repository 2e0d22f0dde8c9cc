from .patient import Patient
from .appointment import Appointment
from .treatment import Treatment
from .setting import Setting

__all__ = ["Patient", "Appointment", "Treatment", "Setting"]
