from datetime import date, datetime, time, timedelta

import pytest

from clinic.application.ports.appointments_repo import AppointmentDto
from clinic.domain import (
    AppointmentStatus,
    can_transition,
    conflict_window,
    ensure_transition,
    find_conflict,
    is_terminal,
    overlaps,
    parse_slot,
    slot_contains,
    validate_slots,
)
from clinic.exceptions import StateError


def appt(status, reason=None):
    now = datetime(2030, 1, 1, 8)
    return AppointmentDto(1, "a", 1, "d", 1, "p", datetime(2030, 1, 2, 10), status, reason, False, now, now)


def test_status_machine():
    assert can_transition(AppointmentStatus.SCHEDULED, AppointmentStatus.COMPLETED)
    assert can_transition(AppointmentStatus.SCHEDULED, AppointmentStatus.CANCELLED)
    assert not can_transition(AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)
    assert is_terminal(AppointmentStatus.CANCELLED) and is_terminal(AppointmentStatus.COMPLETED)
    assert not is_terminal(AppointmentStatus.SCHEDULED)
    with pytest.raises(StateError):
        ensure_transition(AppointmentStatus.CANCELLED, AppointmentStatus.SCHEDULED)


def test_overlap_is_half_open():
    ten, eleven, noon = datetime(2030, 1, 2, 10), datetime(2030, 1, 2, 11), datetime(2030, 1, 2, 12)
    assert not overlaps(ten, eleven, eleven, noon)
    assert overlaps(ten, eleven, datetime(2030, 1, 2, 10, 59), noon)
    assert conflict_window(ten) == (datetime(2030, 1, 2, 9), eleven)


def test_cancel_reason_belongs_to_cancelled_only():
    assert appt("CANCELLED", "sick").status is AppointmentStatus.CANCELLED
    with pytest.raises(ValueError):
        appt(AppointmentStatus.CANCELLED)
    with pytest.raises(ValueError):
        appt(AppointmentStatus.CANCELLED, "  ")
    with pytest.raises(ValueError):
        appt(AppointmentStatus.SCHEDULED, "sick")


def test_derived_times():
    a = appt(AppointmentStatus.SCHEDULED)
    assert a.end_time == datetime(2030, 1, 2, 11)
    assert a.date_only == date(2030, 1, 2)
    assert a.time_only == time(10)


def test_parse_slot():
    slot = parse_slot("09:00-10:30")
    assert slot.label == "09:00-10:30"
    assert slot.contains(datetime(2030, 1, 2, 9, 30), datetime(2030, 1, 2, 10, 30))
    assert not slot.contains(datetime(2030, 1, 2, 10), datetime(2030, 1, 2, 11))
    for bad in ("9:00-10:00", "10:00-10:00", "25:00-26:00", None):
        with pytest.raises(ValueError):
            parse_slot(bad)


def test_validate_slots_keeps_good_ones():
    slots, errors = validate_slots(["09:00-10:00", "bad", "09:00-10:00"])
    assert [s.label for s in slots] == ["09:00-10:00"]
    assert len(errors) == 2


def test_find_conflict_returns_first_overlap():
    booked = [appt(AppointmentStatus.SCHEDULED)]
    assert find_conflict(datetime(2030, 1, 2, 9, 30), booked) is booked[0]
    assert find_conflict(datetime(2030, 1, 2, 11), booked) is None
    assert find_conflict(datetime(2030, 1, 2, 9), booked) is None
    assert find_conflict(datetime(2030, 1, 2, 9), booked, duration=timedelta(minutes=90)) is booked[0]


def test_slot_contains():
    slot = parse_slot("09:00-11:00")
    assert slot_contains(slot, datetime(2030, 1, 2, 10), datetime(2030, 1, 2, 11))
    assert not slot_contains(slot, datetime(2030, 1, 2, 10, 30), datetime(2030, 1, 2, 11, 30))


def test_slot_may_end_at_midnight():
    slot = parse_slot("23:00-24:00")
    assert slot.label == "23:00-24:00"
    assert slot.on(date(2030, 1, 2)) == (datetime(2030, 1, 2, 23), datetime(2030, 1, 3))
    assert slot_contains(slot, datetime(2030, 1, 2, 23), datetime(2030, 1, 3))
    assert parse_slot("00:00-24:00").label == "00:00-24:00"
    for bad in ("23:00-00:00", "24:00-24:00", "23:00-24:30"):
        with pytest.raises(ValueError):
            parse_slot(bad)
