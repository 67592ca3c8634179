from datetime import date, datetime, timedelta

import pytest

from clinic.domain import AppointmentStatus
from clinic.exceptions import ConflictError, NotFoundError, StateError, ValidationError

from conftest import NOW, doctor_data, patient_data

DAY = date(2030, 1, 2)


def at(hour, minute=0, day=DAY):
    return datetime(day.year, day.month, day.day, hour, minute)


def test_propose_books_one_hour(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    assert appt.status is AppointmentStatus.SCHEDULED
    assert appt.cancel_reason is None
    assert appt.end_time == at(11)
    assert appt.date_only == DAY
    assert appt.time_only.hour == 10
    assert appt.doctor_public_id == doctor.public_id
    assert clinic.appt_repo.locked == [doctor.id]


def test_propose_outside_declared_slot_is_allowed_by_default(clinic, doctor, patient):
    assert doctor.available_times == ["09:00-10:00"]
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    assert appt.appointment_time == at(10)


def test_propose_enforcing_availability(clinic, doctor, patient):
    clinic.ledger.enforce_availability = True
    with pytest.raises(ValidationError) as exc:
        clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    assert exc.value.fields() == ["appointment_time"]
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(9))
    assert appt.appointment_time == at(9)


def test_overlapping_booking_is_rejected(clinic, doctor, patient):
    first = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    with pytest.raises(ConflictError) as exc:
        clinic.ledger.propose(doctor.public_id, patient.public_id, at(9, 30))
    assert exc.value.conflicting_id == first.public_id
    assert len(clinic.appt_repo.rows) == 1


def test_back_to_back_bookings_do_not_conflict(clinic, doctor, patient):
    clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    clinic.ledger.propose(doctor.public_id, patient.public_id, at(11))
    clinic.ledger.propose(doctor.public_id, patient.public_id, at(9))
    assert len(clinic.ledger.list_for_doctor(doctor.public_id)) == 3


def test_other_doctor_is_independent(clinic, doctor, patient):
    other = clinic.doctors.register(doctor_data(email="wilson@clinic.example", name="James Wilson"))
    clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    appt = clinic.ledger.propose(other.public_id, patient.public_id, at(10))
    assert appt.doctor_public_id == other.public_id


def test_start_must_be_strictly_future(clinic, doctor, patient):
    with pytest.raises(ValidationError) as exc:
        clinic.ledger.propose(doctor.public_id, patient.public_id, NOW)
    assert exc.value.fields() == ["appointment_time"]
    with pytest.raises(ValidationError):
        clinic.ledger.propose(doctor.public_id, patient.public_id, NOW - timedelta(days=1))


def test_unknown_or_retired_parties(clinic, doctor, patient):
    with pytest.raises(NotFoundError):
        clinic.ledger.propose("missing", patient.public_id, at(10))
    with pytest.raises(NotFoundError):
        clinic.ledger.propose(doctor.public_id, "missing", at(10))
    clinic.doctors.soft_delete(doctor.public_id)
    with pytest.raises(NotFoundError):
        clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))


def test_complete_then_cancel_is_refused(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    done = clinic.ledger.complete(appt.public_id)
    assert done.status is AppointmentStatus.COMPLETED
    with pytest.raises(StateError) as exc:
        clinic.ledger.cancel(appt.public_id, "patient ill")
    assert exc.value.current == "COMPLETED"
    assert clinic.ledger.get(appt.public_id).status is AppointmentStatus.COMPLETED


def test_cancelled_is_terminal(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    cancelled = clinic.ledger.cancel(appt.public_id, "  patient ill ")
    assert cancelled.status is AppointmentStatus.CANCELLED
    assert cancelled.cancel_reason == "patient ill"
    with pytest.raises(StateError):
        clinic.ledger.complete(appt.public_id)
    with pytest.raises(StateError):
        clinic.ledger.cancel(appt.public_id, "again")


def test_cancel_requires_reason(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    for reason in ("", "   "):
        with pytest.raises(ValidationError) as exc:
            clinic.ledger.cancel(appt.public_id, reason)
        assert exc.value.fields() == ["reason"]
    assert clinic.ledger.get(appt.public_id).status is AppointmentStatus.SCHEDULED


def test_cancelled_appointment_frees_the_hour(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    clinic.ledger.cancel(appt.public_id, "doctor away")
    again = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10, 30))
    assert again.status is AppointmentStatus.SCHEDULED


def test_completed_appointment_still_blocks(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    clinic.ledger.complete(appt.public_id)
    with pytest.raises(ConflictError):
        clinic.ledger.propose(doctor.public_id, patient.public_id, at(10, 15))


def test_soft_delete_frees_the_hour_and_hides_the_appointment(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    deleted = clinic.ledger.soft_delete(appt.public_id)
    assert deleted.is_deleted
    assert clinic.ledger.soft_delete(appt.public_id).is_deleted
    clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))

    visible = clinic.ledger.list_for_doctor(doctor.public_id)
    everything = clinic.ledger.list_for_doctor(doctor.public_id, include_deleted=True)
    assert appt.public_id not in [a.public_id for a in visible]
    assert len(visible) == 1
    assert len(everything) == 2


def test_soft_deleted_appointment_cannot_change(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    clinic.ledger.soft_delete(appt.public_id)
    with pytest.raises(NotFoundError):
        clinic.ledger.complete(appt.public_id)
    with pytest.raises(NotFoundError):
        clinic.ledger.cancel(appt.public_id, "gone")
    with pytest.raises(NotFoundError):
        clinic.ledger.reschedule(appt.public_id, at(14))
    assert clinic.ledger.get(appt.public_id).is_deleted


def test_reschedule_moves_and_ignores_itself(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    moved = clinic.ledger.reschedule(appt.public_id, at(10, 30))
    assert moved.appointment_time == at(10, 30)
    assert moved.public_id == appt.public_id


def test_reschedule_into_another_booking_conflicts(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    other = clinic.ledger.propose(doctor.public_id, patient.public_id, at(13))
    with pytest.raises(ConflictError) as exc:
        clinic.ledger.reschedule(appt.public_id, at(12, 30))
    assert exc.value.conflicting_id == other.public_id
    assert clinic.ledger.get(appt.public_id).appointment_time == at(10)


def test_reschedule_requires_scheduled_and_future(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    with pytest.raises(ValidationError):
        clinic.ledger.reschedule(appt.public_id, NOW)
    clinic.ledger.complete(appt.public_id)
    with pytest.raises(StateError):
        clinic.ledger.reschedule(appt.public_id, at(15))


def test_lists_and_busy_intervals(clinic, doctor, patient):
    second = clinic.patients.register(patient_data(email="john@example.com", name="John Roe"))
    a = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    b = clinic.ledger.propose(doctor.public_id, second.public_id, at(14))
    clinic.ledger.propose(doctor.public_id, second.public_id, at(10, day=DAY + timedelta(days=1)))
    clinic.ledger.cancel(b.public_id, "conflict at work")

    assert [x.public_id for x in clinic.ledger.list_for_patient(patient.public_id)] == [a.public_id]
    assert len(clinic.ledger.list_for_patient(second.public_id)) == 2
    assert clinic.ledger.busy_intervals(doctor.public_id, DAY) == [(at(10), at(11))]


def test_get_unknown_appointment(clinic):
    with pytest.raises(NotFoundError):
        clinic.ledger.get("nope")


def test_audit_trail(clinic, doctor, patient):
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(10))
    clinic.ledger.cancel(appt.public_id, "sick")
    actions = [e[0] for e in clinic.audit.entries if e[1] == "Appointment"]
    assert actions == ["propose", "cancel"]


def test_late_evening_slot_accepts_last_hour(clinic, doctor, patient):
    clinic.availability.set_available_times(doctor.public_id, ["23:00-24:00"])
    clinic.ledger.enforce_availability = True
    appt = clinic.ledger.propose(doctor.public_id, patient.public_id, at(23))
    assert appt.end_time == datetime(2030, 1, 3)
