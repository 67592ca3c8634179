# clinic/schemas/appointments/appointment.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date, time

from ...domain import AppointmentStatus


class AppointmentCreate(BaseModel):
    doctor_id: str
    patient_id: str
    appointment_time: datetime


class AppointmentReschedule(BaseModel):
    appointment_time: datetime


class AppointmentCancel(BaseModel):
    reason: str = Field("", description="Why the appointment is being cancelled")


class AppointmentResponse(BaseModel):
    id: str
    doctor_id: str
    patient_id: str
    appointment_time: datetime
    end_time: datetime
    appointment_date: date
    appointment_time_only: time
    status: AppointmentStatus
    cancel_reason: Optional[str] = None
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dto(cls, a) -> "AppointmentResponse":
        return cls(
            id=a.public_id,
            doctor_id=a.doctor_public_id,
            patient_id=a.patient_public_id,
            appointment_time=a.appointment_time,
            end_time=a.end_time,
            appointment_date=a.date_only,
            appointment_time_only=a.time_only,
            status=a.status,
            cancel_reason=a.cancel_reason,
            is_deleted=a.is_deleted,
            created_at=a.created_at,
            updated_at=a.updated_at,
        )


class BusyInterval(BaseModel):
    start: datetime
    end: datetime
