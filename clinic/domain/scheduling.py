"""Scheduling rules for appointments.

Everything here is a pure function of its arguments: the appointment status
machine, the fixed appointment length and the half-open interval test used to
detect double-booking.
"""
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterable, Tuple

from ..exceptions import StateError


class AppointmentStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


APPOINTMENT_DURATION = timedelta(hours=1)

# Statuses that occupy the doctor's time
BLOCKING_STATUSES = frozenset({AppointmentStatus.SCHEDULED, AppointmentStatus.COMPLETED})

_TRANSITIONS = {
    AppointmentStatus.SCHEDULED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


def is_terminal(status: AppointmentStatus) -> bool:
    return not _TRANSITIONS[status]


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return target in _TRANSITIONS[current]


def ensure_transition(current: AppointmentStatus, target: AppointmentStatus) -> None:
    if not can_transition(current, target):
        raise StateError(current.value, target.value)


def end_time(start: datetime) -> datetime:
    return start + APPOINTMENT_DURATION


def date_only(start: datetime) -> date:
    return start.date()


def time_only(start: datetime) -> time:
    return start.time()


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open test: [a_start, a_end) and [b_start, b_end) share an instant."""
    return a_start < b_end and b_start < a_end


def find_conflict(start: datetime, existing: Iterable, duration: timedelta = APPOINTMENT_DURATION):
    """First appointment in ``existing`` overlapping ``[start, start + duration)``."""
    new_end = start + duration
    for appt in existing:
        if overlaps(appt.appointment_time, appt.appointment_time + duration, start, new_end):
            return appt
    return None


def conflict_window(start: datetime) -> Tuple[datetime, datetime]:
    """Range of start instants that could overlap an appointment starting at ``start``.

    Any blocking appointment with ``window_start < appointment_time < window_end``
    is a candidate; the bounds are exclusive because the intervals are half-open.
    """
    return start - APPOINTMENT_DURATION, end_time(start)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
