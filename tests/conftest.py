from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
import uuid

import pytest

from clinic.application.ports.admin_repo import AdminDto
from clinic.application.ports.appointments_repo import AppointmentDto
from clinic.application.ports.parties_repo import DoctorDto, PatientDto
from clinic.application.ports.prescriptions_repo import PrescriptionDto
from clinic.application.services import (
    AdminService,
    AppointmentsService,
    AvailabilityService,
    DoctorService,
    PatientService,
    PrescribingService,
    PrescriptionService,
)
from clinic.domain import AppointmentStatus, BLOCKING_STATUSES

NOW = datetime(2030, 1, 1, 8, 0)


class FakePartyRepo:
    dto = None

    def __init__(self):
        self._id = 1
        self.rows = {}
        self.hashes = {}

    def get_by_public_id(self, public_id):
        return next((p for p in self.rows.values() if p.public_id == public_id), None)

    def get_by_id(self, party_id):
        return self.rows.get(party_id)

    def get_by_email(self, email):
        return next((p for p in self.rows.values() if p.email == email and not p.is_deleted), None)

    def email_taken(self, email, exclude_id=None):
        return any(p.email == email and not p.is_deleted and p.id != exclude_id for p in self.rows.values())

    def create(self, fields, password_hash):
        fields = dict(fields)
        if "gender" in fields:
            fields["gender"] = getattr(fields["gender"], "value", fields["gender"])
        party = self.dto(
            id=self._id, public_id=str(uuid.uuid4()), is_deleted=False,
            created_at=NOW, updated_at=NOW, **fields,
        )
        self.rows[party.id] = party
        self.hashes[party.id] = password_hash
        self._id += 1
        return party

    def update(self, party_id, fields):
        fields = dict(fields)
        password_hash = fields.pop("password_hash", None)
        if password_hash:
            self.hashes[party_id] = password_hash
        if "gender" in fields:
            fields["gender"] = getattr(fields["gender"], "value", fields["gender"])
        self.rows[party_id] = replace(self.rows[party_id], **fields)
        return self.rows[party_id]

    def soft_delete(self, party_id):
        self.rows[party_id] = replace(self.rows[party_id], is_deleted=True)
        return self.rows[party_id]


class FakeDoctorRepo(FakePartyRepo):
    dto = DoctorDto

    def set_available_times(self, doctor_id, slots):
        self.rows[doctor_id] = replace(self.rows[doctor_id], available_times=list(slots))
        return self.rows[doctor_id]

    def list_active(self, specialty=None):
        out = [d for d in self.rows.values() if not d.is_deleted]
        if specialty:
            out = [d for d in out if specialty.lower() in d.specialty.lower()]
        return sorted(out, key=lambda d: d.name)


class FakePatientRepo(FakePartyRepo):
    dto = PatientDto


class FakeAppointmentsRepo:
    def __init__(self, doctors, patients):
        self._id = 1
        self.doctors = doctors
        self.patients = patients
        self.rows = {}
        self.locked = []

    @contextmanager
    def schedule_lock(self, doctor_id):
        self.locked.append(doctor_id)
        yield

    def get_by_public_id(self, public_id):
        return next((a for a in self.rows.values() if a.public_id == public_id), None)

    def list_blocking(self, doctor_id, window_start, window_end, exclude_id=None):
        return sorted(
            (a for a in self.rows.values()
             if a.doctor_id == doctor_id and not a.is_deleted and a.status in BLOCKING_STATUSES
             and window_start < a.appointment_time < window_end and a.id != exclude_id),
            key=lambda a: a.appointment_time,
        )

    def list_for_doctor(self, doctor_id, include_deleted=False):
        return [a for a in self.rows.values() if a.doctor_id == doctor_id and (include_deleted or not a.is_deleted)]

    def list_for_patient(self, patient_id, include_deleted=False):
        return [a for a in self.rows.values() if a.patient_id == patient_id and (include_deleted or not a.is_deleted)]

    def create(self, public_id, doctor_id, patient_id, appointment_time):
        appt = AppointmentDto(
            id=self._id,
            public_id=public_id,
            doctor_id=doctor_id,
            doctor_public_id=self.doctors.get_by_id(doctor_id).public_id,
            patient_id=patient_id,
            patient_public_id=self.patients.get_by_id(patient_id).public_id,
            appointment_time=appointment_time,
            status=AppointmentStatus.SCHEDULED,
            cancel_reason=None,
            is_deleted=False,
            created_at=NOW,
            updated_at=NOW,
        )
        self.rows[appt.id] = appt
        self._id += 1
        return appt

    def update_time(self, appointment_id, appointment_time):
        self.rows[appointment_id] = replace(self.rows[appointment_id], appointment_time=appointment_time)
        return self.rows[appointment_id]

    def update_status(self, appointment_id, status, cancel_reason=None):
        self.rows[appointment_id] = replace(self.rows[appointment_id], status=status, cancel_reason=cancel_reason)
        return self.rows[appointment_id]

    def soft_delete(self, appointment_id):
        self.rows[appointment_id] = replace(self.rows[appointment_id], is_deleted=True)
        return self.rows[appointment_id]


class FakePrescriptionRepo:
    def __init__(self):
        self.rows = {}

    def create(self, fields):
        p = PrescriptionDto(id=uuid.uuid4().hex, created_at=NOW, updated_at=NOW, **fields)
        self.rows[p.id] = p
        return p

    def get(self, prescription_id):
        return self.rows.get(prescription_id)

    def list_for_appointment(self, appointment_id):
        return [p for p in self.rows.values() if p.appointment_id == appointment_id]

    def update(self, prescription_id, fields):
        if prescription_id not in self.rows:
            return None
        self.rows[prescription_id] = replace(self.rows[prescription_id], **fields)
        return self.rows[prescription_id]

    def delete(self, prescription_id):
        return self.rows.pop(prescription_id, None) is not None


class FakeAdminRepo:
    def __init__(self):
        self.rows = {}

    def get_by_username(self, username):
        return self.rows.get(username)

    def create(self, username, password_hash):
        admin = AdminDto(len(self.rows) + 1, username, password_hash, NOW)
        self.rows[username] = admin
        return admin


class FakeHasher:
    def hash(self, password):
        return "hashed$" + password

    def verify(self, password, hashed):
        return hashed == "hashed$" + password


class FakeAudit:
    def __init__(self):
        self.entries = []

    def log(self, action, entity, entity_id=None, success=True, details=None):
        self.entries.append((action, entity, entity_id, success, details or {}))


def doctor_data(**overrides):
    data = {
        "name": "Gregory House",
        "email": "house@clinic.example",
        "password": "secret123",
        "phone": "555-123-4567",
        "specialty": "Diagnostics",
        "years_of_experience": 20,
        "clinic_address": "221B Baker Street",
        "available_times": ["09:00-10:00"],
    }
    data.update(overrides)
    return data


def patient_data(**overrides):
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "secret123",
        "phone": "555-987-6543",
        "address": "12 Elm Street",
        "date_of_birth": date(1990, 5, 17),
        "gender": "female",
    }
    data.update(overrides)
    return data


class Clinic:
    """Every service wired to in-memory repositories."""

    def __init__(self):
        self.audit = FakeAudit()
        self.hasher = FakeHasher()
        self.doctor_repo = FakeDoctorRepo()
        self.patient_repo = FakePatientRepo()
        self.appt_repo = FakeAppointmentsRepo(self.doctor_repo, self.patient_repo)
        self.rx_repo = FakePrescriptionRepo()
        self.doctors = DoctorService(repo=self.doctor_repo, hasher=self.hasher, audit=self.audit)
        self.patients = PatientService(repo=self.patient_repo, hasher=self.hasher, audit=self.audit)
        self.ledger = AppointmentsService(
            repo=self.appt_repo,
            doctors=self.doctor_repo,
            patients=self.patient_repo,
            audit=self.audit,
            clock=lambda: NOW,
        )
        self.availability = AvailabilityService(doctors=self.doctor_repo, ledger=self.ledger, audit=self.audit)
        self.prescriptions = PrescriptionService(repo=self.rx_repo, audit=self.audit)
        self.prescribing = PrescribingService(
            ledger=self.ledger,
            doctors=self.doctor_repo,
            patients=self.patient_repo,
            prescriptions=self.prescriptions,
        )
        self.admins = AdminService(repo=FakeAdminRepo(), hasher=self.hasher, audit=self.audit)


@pytest.fixture
def clinic():
    return Clinic()


@pytest.fixture
def doctor(clinic):
    return clinic.doctors.register(doctor_data())


@pytest.fixture
def patient(clinic):
    return clinic.patients.register(patient_data())
