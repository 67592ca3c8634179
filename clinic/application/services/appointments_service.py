from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple
import logging
import uuid

from ..ports.appointments_repo import AppointmentsRepository, AppointmentDto
from ..ports.audit_logger import AuditLogger
from ..ports.parties_repo import DoctorDto, DoctorRepository, PatientDto, PatientRepository
from ...domain import (
    APPOINTMENT_DURATION,
    AppointmentStatus,
    conflict_window,
    day_bounds,
    end_time,
    ensure_transition,
    find_conflict,
    parse_slot,
    slot_contains,
)
from ...exceptions import ConflictError, NotFoundError, StateError, ValidationError
from ...utils import to_naive_utc, utcnow

logger = logging.getLogger(__name__)


@dataclass
class AppointmentsService:
    """The appointment ledger.

    Owns booking, rescheduling and the SCHEDULED -> COMPLETED | CANCELLED
    status machine. A doctor never holds two overlapping one-hour
    appointments among the non-deleted SCHEDULED/COMPLETED ones; the overlap
    check and the write happen under ``repo.schedule_lock`` so concurrent
    bookings for the same doctor are serialized.
    """

    repo: AppointmentsRepository
    doctors: DoctorRepository
    patients: PatientRepository
    audit: Optional[AuditLogger] = None
    clock: Callable[[], datetime] = field(default=utcnow)
    enforce_availability: bool = False

    def _audit(self, action: str, appt: AppointmentDto, **details) -> None:
        if self.audit:
            self.audit.log(action, "Appointment", appt.public_id, details=details)

    def _active_doctor(self, doctor_id: str) -> DoctorDto:
        doctor = self.doctors.get_by_public_id(doctor_id)
        if not doctor or doctor.is_deleted:
            raise NotFoundError("Doctor", doctor_id)
        return doctor

    def _any_doctor(self, doctor_id: str) -> DoctorDto:
        doctor = self.doctors.get_by_public_id(doctor_id)
        if not doctor:
            raise NotFoundError("Doctor", doctor_id)
        return doctor

    def _active_patient(self, patient_id: str) -> PatientDto:
        patient = self.patients.get_by_public_id(patient_id)
        if not patient or patient.is_deleted:
            raise NotFoundError("Patient", patient_id)
        return patient

    def _any_patient(self, patient_id: str) -> PatientDto:
        patient = self.patients.get_by_public_id(patient_id)
        if not patient:
            raise NotFoundError("Patient", patient_id)
        return patient

    def _future_start(self, start: datetime) -> datetime:
        if not isinstance(start, datetime):
            raise ValidationError.single("appointment_time", "appointment time must be a date and time")
        start = to_naive_utc(start)
        if start <= to_naive_utc(self.clock()):
            raise ValidationError.single("appointment_time", "Appointment time must be in the future")
        return start

    def _ensure_within_availability(self, doctor: DoctorDto, start: datetime) -> None:
        finish = end_time(start)
        for label in doctor.available_times:
            if slot_contains(parse_slot(label), start, finish):
                return
        raise ValidationError.single(
            "appointment_time",
            f"{start:%H:%M}-{finish:%H:%M} is outside the doctor's available times",
        )

    def _ensure_free(self, doctor_id: int, start: datetime, exclude_id: Optional[int] = None) -> None:
        window_start, window_end = conflict_window(start)
        existing = self.repo.list_blocking(doctor_id, window_start, window_end, exclude_id=exclude_id)
        clash = find_conflict(start, existing)
        if clash:
            logger.info(f"Booking at {start.isoformat()} clashes with appointment {clash.public_id}")
            raise ConflictError(
                f"The doctor already has an appointment from {clash.appointment_time:%Y-%m-%d %H:%M} "
                f"to {clash.end_time:%H:%M}",
                conflicting_id=clash.public_id,
            )

    def _live(self, appointment_id: str) -> AppointmentDto:
        """Appointment that can still be acted on (not soft-deleted)."""
        appt = self.get(appointment_id)
        if appt.is_deleted:
            raise NotFoundError("Appointment", appointment_id)
        return appt

    def propose(self, doctor_id: str, patient_id: str, start: datetime) -> AppointmentDto:
        start = self._future_start(start)
        doctor = self._active_doctor(doctor_id)
        patient = self._active_patient(patient_id)
        if self.enforce_availability:
            self._ensure_within_availability(doctor, start)

        with self.repo.schedule_lock(doctor.id):
            self._ensure_free(doctor.id, start)
            appt = self.repo.create(str(uuid.uuid4()), doctor.id, patient.id, start)

        logger.info(f"Booked appointment {appt.public_id} for doctor {doctor_id} at {start.isoformat()}")
        self._audit("propose", appt, doctor_id=doctor_id, patient_id=patient_id)
        return appt

    def reschedule(self, appointment_id: str, new_start: datetime) -> AppointmentDto:
        appt = self._live(appointment_id)
        if appt.status is not AppointmentStatus.SCHEDULED:
            raise StateError(appt.status.value, AppointmentStatus.SCHEDULED.value, "Only scheduled appointments can be rescheduled")
        new_start = self._future_start(new_start)
        doctor = self._active_doctor(appt.doctor_public_id)
        if self.enforce_availability:
            self._ensure_within_availability(doctor, new_start)

        with self.repo.schedule_lock(appt.doctor_id):
            self._ensure_free(appt.doctor_id, new_start, exclude_id=appt.id)
            moved = self.repo.update_time(appt.id, new_start)

        self._audit("reschedule", moved, previous=appt.appointment_time.isoformat())
        return moved

    def complete(self, appointment_id: str) -> AppointmentDto:
        appt = self._live(appointment_id)
        ensure_transition(appt.status, AppointmentStatus.COMPLETED)
        done = self.repo.update_status(appt.id, AppointmentStatus.COMPLETED)
        self._audit("complete", done)
        return done

    def cancel(self, appointment_id: str, reason: str) -> AppointmentDto:
        if not isinstance(reason, str) or not reason.strip():
            raise ValidationError.single("reason", "A cancellation reason is required")
        appt = self._live(appointment_id)
        ensure_transition(appt.status, AppointmentStatus.CANCELLED)
        cancelled = self.repo.update_status(appt.id, AppointmentStatus.CANCELLED, cancel_reason=reason.strip())
        self._audit("cancel", cancelled)
        return cancelled

    def soft_delete(self, appointment_id: str) -> AppointmentDto:
        appt = self.get(appointment_id)
        if appt.is_deleted:
            return appt
        deleted = self.repo.soft_delete(appt.id)
        logger.info(f"Soft-deleted appointment {appointment_id} ({appt.status.value})")
        self._audit("soft_delete", deleted, status=appt.status.value)
        return deleted

    def get(self, appointment_id: str) -> AppointmentDto:
        appt = self.repo.get_by_public_id(appointment_id)
        if not appt:
            raise NotFoundError("Appointment", appointment_id)
        return appt

    def list_for_doctor(self, doctor_id: str, include_deleted: bool = False) -> List[AppointmentDto]:
        doctor = self._any_doctor(doctor_id)
        return self.repo.list_for_doctor(doctor.id, include_deleted=include_deleted)

    def list_for_patient(self, patient_id: str, include_deleted: bool = False) -> List[AppointmentDto]:
        patient = self._any_patient(patient_id)
        return self.repo.list_for_patient(patient.id, include_deleted=include_deleted)

    def busy_intervals(self, doctor_id: str, day: date) -> List[Tuple[datetime, datetime]]:
        doctor = self._active_doctor(doctor_id)
        day_start, day_end = day_bounds(day)
        booked = self.repo.list_blocking(doctor.id, day_start - APPOINTMENT_DURATION, day_end)
        return [(a.appointment_time, a.end_time) for a in booked]
