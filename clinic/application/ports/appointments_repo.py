from dataclasses import dataclass
from typing import ContextManager, List, Optional, Protocol
from datetime import datetime, date, time

from ...domain import AppointmentStatus, end_time, date_only, time_only


@dataclass
class AppointmentDto:
    id: int
    public_id: str
    doctor_id: int
    doctor_public_id: str
    patient_id: int
    patient_public_id: str
    appointment_time: datetime
    status: AppointmentStatus
    cancel_reason: Optional[str]
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        self.status = AppointmentStatus(self.status)
        # A reason belongs to the CANCELLED state and only to it
        if self.status is AppointmentStatus.CANCELLED:
            if not (self.cancel_reason and self.cancel_reason.strip()):
                raise ValueError("A cancelled appointment needs a cancel reason")
        elif self.cancel_reason is not None:
            raise ValueError(f"A {self.status.value} appointment cannot carry a cancel reason")

    @property
    def end_time(self) -> datetime:
        return end_time(self.appointment_time)

    @property
    def date_only(self) -> date:
        return date_only(self.appointment_time)

    @property
    def time_only(self) -> time:
        return time_only(self.appointment_time)


class AppointmentsRepository(Protocol):
    def schedule_lock(self, doctor_id: int) -> ContextManager[None]:
        """Serialize bookings for one doctor until the enclosed write commits."""
        ...

    def get_by_public_id(self, public_id: str) -> Optional[AppointmentDto]:
        """Direct lookup; soft-deleted appointments are returned too."""
        ...

    def list_blocking(self, doctor_id: int, window_start: datetime, window_end: datetime, exclude_id: Optional[int] = None) -> List[AppointmentDto]:
        """Non-deleted SCHEDULED/COMPLETED appointments starting strictly inside the window."""
        ...

    def list_for_doctor(self, doctor_id: int, include_deleted: bool = False) -> List[AppointmentDto]:
        ...

    def list_for_patient(self, patient_id: int, include_deleted: bool = False) -> List[AppointmentDto]:
        ...

    def create(self, public_id: str, doctor_id: int, patient_id: int, appointment_time: datetime) -> AppointmentDto:
        ...

    def update_time(self, appointment_id: int, appointment_time: datetime) -> AppointmentDto:
        ...

    def update_status(self, appointment_id: int, status: AppointmentStatus, cancel_reason: Optional[str] = None) -> AppointmentDto:
        ...

    def soft_delete(self, appointment_id: int) -> AppointmentDto:
        ...
