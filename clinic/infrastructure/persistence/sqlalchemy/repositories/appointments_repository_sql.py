from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .....db.models import Appointment, Doctor, Patient
from .....domain import AppointmentStatus, BLOCKING_STATUSES
from .....application.ports.appointments_repo import (
    AppointmentsRepository,
    AppointmentDto,
)
from .....utils import utcnow


class SqlAppointmentsRepository(AppointmentsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _select(self):
        return (
            select(Appointment, Doctor.public_id, Patient.public_id)
            .join(Doctor, Doctor.id == Appointment.doctor_id)
            .join(Patient, Patient.id == Appointment.patient_id)
        )

    def _to_dto(self, row) -> AppointmentDto:
        a, doctor_public_id, patient_public_id = row
        return AppointmentDto(
            id=a.id,
            public_id=a.public_id,
            doctor_id=a.doctor_id,
            doctor_public_id=doctor_public_id,
            patient_id=a.patient_id,
            patient_public_id=patient_public_id,
            appointment_time=a.appointment_time,
            status=AppointmentStatus(a.status),
            cancel_reason=a.cancel_reason,
            is_deleted=bool(a.is_deleted),
            created_at=a.created_at,
            updated_at=a.updated_at,
        )

    def _get(self, appointment_id: int) -> Optional[AppointmentDto]:
        row = self.session.exec(self._select().where(Appointment.id == appointment_id)).first()
        return self._to_dto(row) if row else None

    def _save(self, a: Appointment) -> AppointmentDto:
        a.updated_at = utcnow()
        self.session.add(a)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return self._get(a.id)

    @contextmanager
    def schedule_lock(self, doctor_id: int) -> Iterator[None]:
        # Row lock on server databases; SQLite already holds the write lock (BEGIN IMMEDIATE)
        try:
            self.session.exec(select(Doctor.id).where(Doctor.id == doctor_id).with_for_update()).first()
            yield
        except Exception:
            self.session.rollback()
            raise

    def get_by_public_id(self, public_id: str) -> Optional[AppointmentDto]:
        row = self.session.exec(self._select().where(Appointment.public_id == public_id)).first()
        return self._to_dto(row) if row else None

    def list_blocking(self, doctor_id: int, window_start: datetime, window_end: datetime, exclude_id: Optional[int] = None) -> List[AppointmentDto]:
        query = (
            self._select()
            .where(Appointment.doctor_id == doctor_id)
            .where(Appointment.is_deleted == False)  # noqa: E712
            .where(Appointment.status.in_([s.value for s in BLOCKING_STATUSES]))
            .where(Appointment.appointment_time > window_start)
            .where(Appointment.appointment_time < window_end)
        )
        if exclude_id is not None:
            query = query.where(Appointment.id != exclude_id)
        rows = self.session.exec(query.order_by(Appointment.appointment_time)).all()
        return [self._to_dto(r) for r in rows]

    def list_for_doctor(self, doctor_id: int, include_deleted: bool = False) -> List[AppointmentDto]:
        query = self._select().where(Appointment.doctor_id == doctor_id)
        if not include_deleted:
            query = query.where(Appointment.is_deleted == False)  # noqa: E712
        rows = self.session.exec(query.order_by(Appointment.appointment_time)).all()
        return [self._to_dto(r) for r in rows]

    def list_for_patient(self, patient_id: int, include_deleted: bool = False) -> List[AppointmentDto]:
        query = self._select().where(Appointment.patient_id == patient_id)
        if not include_deleted:
            query = query.where(Appointment.is_deleted == False)  # noqa: E712
        rows = self.session.exec(query.order_by(Appointment.appointment_time)).all()
        return [self._to_dto(r) for r in rows]

    def create(self, public_id: str, doctor_id: int, patient_id: int, appointment_time: datetime) -> AppointmentDto:
        appt = Appointment(
            public_id=public_id,
            doctor_id=doctor_id,
            patient_id=patient_id,
            appointment_time=appointment_time,
            status=AppointmentStatus.SCHEDULED.value,
        )
        return self._save(appt)

    def update_time(self, appointment_id: int, appointment_time: datetime) -> Optional[AppointmentDto]:
        a = self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()
        if not a:
            return None
        a.appointment_time = appointment_time
        return self._save(a)

    def update_status(self, appointment_id: int, status: AppointmentStatus, cancel_reason: Optional[str] = None) -> Optional[AppointmentDto]:
        a = self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()
        if not a:
            return None
        a.status = AppointmentStatus(status).value
        a.cancel_reason = cancel_reason
        return self._save(a)

    def soft_delete(self, appointment_id: int) -> Optional[AppointmentDto]:
        a = self.session.exec(select(Appointment).where(Appointment.id == appointment_id)).first()
        if not a:
            return None
        a.is_deleted = True
        return self._save(a)
