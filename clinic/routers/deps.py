from fastapi import Depends
from sqlmodel import Session

from ..config import settings
from ..database import get_session
from ..application.services import (
    AdminService,
    AppointmentsService,
    AvailabilityService,
    DoctorService,
    PatientService,
    PrescribingService,
    PrescriptionService,
)
from ..infrastructure.audit.std_logger import StdAuditLogger
from ..infrastructure.persistence.sqlalchemy.repositories.admin_repository_sql import SqlAdminRepository
from ..infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.doctor_repository_sql import SqlDoctorRepository
from ..infrastructure.persistence.sqlalchemy.repositories.patient_repository_sql import SqlPatientRepository
from ..infrastructure.persistence.sqlalchemy.repositories.prescription_repository_sql import SqlPrescriptionRepository
from ..infrastructure.security.passlib_hasher import PasslibPasswordHasher

_audit = StdAuditLogger()
_hasher = PasslibPasswordHasher()


def get_doctor_service(session: Session = Depends(get_session)) -> DoctorService:
    return DoctorService(repo=SqlDoctorRepository(session), hasher=_hasher, audit=_audit)


def get_patient_service(session: Session = Depends(get_session)) -> PatientService:
    return PatientService(repo=SqlPatientRepository(session), hasher=_hasher, audit=_audit)


def get_appointments_service(session: Session = Depends(get_session)) -> AppointmentsService:
    return AppointmentsService(
        repo=SqlAppointmentsRepository(session),
        doctors=SqlDoctorRepository(session),
        patients=SqlPatientRepository(session),
        audit=_audit,
        enforce_availability=settings.ENFORCE_AVAILABILITY,
    )


def get_availability_service(
    session: Session = Depends(get_session),
    ledger: AppointmentsService = Depends(get_appointments_service),
) -> AvailabilityService:
    return AvailabilityService(doctors=SqlDoctorRepository(session), ledger=ledger, audit=_audit)


def get_prescription_service(session: Session = Depends(get_session)) -> PrescriptionService:
    return PrescriptionService(repo=SqlPrescriptionRepository(session), audit=_audit)


def get_prescribing_service(
    session: Session = Depends(get_session),
    ledger: AppointmentsService = Depends(get_appointments_service),
    prescriptions: PrescriptionService = Depends(get_prescription_service),
) -> PrescribingService:
    return PrescribingService(
        ledger=ledger,
        doctors=SqlDoctorRepository(session),
        patients=SqlPatientRepository(session),
        prescriptions=prescriptions,
    )


def get_admin_service(session: Session = Depends(get_session)) -> AdminService:
    return AdminService(repo=SqlAdminRepository(session), hasher=_hasher, audit=_audit)
