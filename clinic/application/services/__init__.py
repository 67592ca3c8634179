# Application services (re-export for stable imports)
from .party_service import PartyService
from .doctor_service import DoctorService
from .patient_service import PatientService
from .availability_service import AvailabilityService
from .appointments_service import AppointmentsService
from .prescription_service import PrescriptionService
from .prescribing_service import PrescribingService
from .admin_service import AdminService

__all__ = [
    "PartyService",
    "DoctorService",
    "PatientService",
    "AvailabilityService",
    "AppointmentsService",
    "PrescriptionService",
    "PrescribingService",
    "AdminService",
]
