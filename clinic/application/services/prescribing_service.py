from dataclasses import dataclass
from typing import Optional

from ..ports.parties_repo import DoctorRepository, PatientRepository
from ..ports.prescriptions_repo import PrescriptionDto
from .appointments_service import AppointmentsService
from .prescription_service import PrescriptionService
from ...domain import AppointmentStatus
from ...exceptions import NotFoundError, StateError


@dataclass
class PrescribingService:
    """Writes a prescription once an appointment has been completed.

    Doctor and patient names are copied at this moment; later profile edits
    do not change existing prescriptions.
    """

    ledger: AppointmentsService
    doctors: DoctorRepository
    patients: PatientRepository
    prescriptions: PrescriptionService

    def prescribe(self, appointment_id: str, medication: str, dosage: str, doctor_notes: Optional[str] = None,
                  refill_count: int = 0, pharmacy_name: Optional[str] = None) -> PrescriptionDto:
        appt = self.ledger.get(appointment_id)
        if appt.is_deleted:
            raise NotFoundError("Appointment", appointment_id)
        if appt.status is not AppointmentStatus.COMPLETED:
            raise StateError(appt.status.value, AppointmentStatus.COMPLETED.value,
                             "Prescriptions can only be written for completed appointments")
        doctor = self.doctors.get_by_id(appt.doctor_id)
        patient = self.patients.get_by_id(appt.patient_id)
        if not doctor:
            raise NotFoundError("Doctor", appt.doctor_public_id)
        if not patient:
            raise NotFoundError("Patient", appt.patient_public_id)
        return self.prescriptions.create({
            "patient_name": patient.name,
            "doctor_name": doctor.name,
            "appointment_id": appt.id,
            "medication": medication,
            "dosage": dosage,
            "doctor_notes": doctor_notes,
            "refill_count": refill_count,
            "pharmacy_name": pharmacy_name,
        })
