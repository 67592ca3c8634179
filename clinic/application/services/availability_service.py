from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence
import logging

from ..ports.audit_logger import AuditLogger
from ..ports.parties_repo import DoctorDto, DoctorRepository
from .appointments_service import AppointmentsService
from ...domain import overlaps, parse_slot, validate_slots
from ...exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class AvailabilityService:
    doctors: DoctorRepository
    ledger: Optional[AppointmentsService] = None
    audit: Optional[AuditLogger] = None

    def _active_doctor(self, doctor_id: str) -> DoctorDto:
        doctor = self.doctors.get_by_public_id(doctor_id)
        if not doctor or doctor.is_deleted:
            raise NotFoundError("Doctor", doctor_id)
        return doctor

    def available_slots_for(self, doctor_id: str, day: date) -> List[str]:
        """Declared recurring slots; existing bookings are not taken into account."""
        return list(self._active_doctor(doctor_id).available_times)

    def set_available_times(self, doctor_id: str, slots: Sequence[str]) -> DoctorDto:
        doctor = self._active_doctor(doctor_id)
        if isinstance(slots, str) or slots is None:
            raise ValidationError.single("available_times", "available times must be a list of HH:MM-HH:MM labels")
        parsed, errors = validate_slots(list(slots))
        if errors:
            raise ValidationError(errors)
        updated = self.doctors.set_available_times(doctor.id, [s.label for s in parsed])
        if self.audit:
            self.audit.log("set_available_times", "Doctor", doctor_id, details={"slots": len(parsed)})
        return updated

    def free_slots_for(self, doctor_id: str, day: date) -> List[str]:
        """Declared slots on ``day`` that no active booking overlaps."""
        labels = self.available_slots_for(doctor_id, day)
        if self.ledger is None:
            return labels
        busy = self.ledger.busy_intervals(doctor_id, day)
        free = []
        for label in labels:
            slot_start, slot_end = parse_slot(label).on(day)
            if not any(overlaps(slot_start, slot_end, b_start, b_end) for b_start, b_end in busy):
                free.append(label)
        return free
