from typing import List
from fastapi import APIRouter, Depends, Query

from ..application.services import AppointmentsService, PatientService
from ..schemas.appointments.appointment import AppointmentResponse
from ..schemas.parties.patient import PatientCreate, PatientResponse, PatientUpdate
from .deps import get_appointments_service, get_patient_service

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post("/", response_model=PatientResponse, status_code=201)
def register_patient(
    body: PatientCreate,
    service: PatientService = Depends(get_patient_service),
):
    return PatientResponse.from_dto(service.register(body.model_dump()))


@router.get("/by-email", response_model=PatientResponse)
def get_patient_by_email(email: str = Query(...), service: PatientService = Depends(get_patient_service)):
    return PatientResponse.from_dto(service.get_by_email(email))


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(patient_id: str, service: PatientService = Depends(get_patient_service)):
    return PatientResponse.from_dto(service.get(patient_id))


@router.patch("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: str,
    body: PatientUpdate,
    service: PatientService = Depends(get_patient_service),
):
    return PatientResponse.from_dto(service.update_profile(patient_id, body.model_dump(exclude_unset=True)))


@router.delete("/{patient_id}", response_model=PatientResponse)
def delete_patient(patient_id: str, service: PatientService = Depends(get_patient_service)):
    return PatientResponse.from_dto(service.soft_delete(patient_id))


@router.get("/{patient_id}/appointments", response_model=List[AppointmentResponse])
def get_patient_appointments(
    patient_id: str,
    include_deleted: bool = Query(False),
    ledger: AppointmentsService = Depends(get_appointments_service),
):
    return [AppointmentResponse.from_dto(a) for a in ledger.list_for_patient(patient_id, include_deleted=include_deleted)]
