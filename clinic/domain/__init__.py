# Domain rules (no I/O)
from enum import Enum

from .scheduling import (
    APPOINTMENT_DURATION,
    BLOCKING_STATUSES,
    AppointmentStatus,
    can_transition,
    conflict_window,
    date_only,
    day_bounds,
    end_time,
    ensure_transition,
    find_conflict,
    is_terminal,
    overlaps,
    time_only,
)
from .availability import TimeSlot, parse_slot, slot_contains, validate_slots


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


__all__ = [
    "APPOINTMENT_DURATION",
    "BLOCKING_STATUSES",
    "AppointmentStatus",
    "Gender",
    "TimeSlot",
    "can_transition",
    "conflict_window",
    "date_only",
    "day_bounds",
    "end_time",
    "ensure_transition",
    "find_conflict",
    "is_terminal",
    "overlaps",
    "parse_slot",
    "slot_contains",
    "time_only",
    "validate_slots",
]
