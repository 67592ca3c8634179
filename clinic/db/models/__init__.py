# Models package (re-export feature modules for stable imports)
from .parties.doctor import Doctor
from .parties.patient import Patient
from .scheduling.appointment import Appointment
from .records.prescription import Prescription
from .admin.admin import Admin

__all__ = [
    "Doctor",
    "Patient",
    "Appointment",
    "Prescription",
    "Admin",
]
