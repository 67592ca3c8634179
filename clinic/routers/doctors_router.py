from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..application.services import AppointmentsService, AvailabilityService, DoctorService
from ..schemas.appointments.appointment import AppointmentResponse, BusyInterval
from ..schemas.parties.doctor import (
    AvailableTimesUpdate,
    DoctorCreate,
    DoctorResponse,
    DoctorSlotsResponse,
    DoctorUpdate,
)
from .deps import (
    get_appointments_service,
    get_availability_service,
    get_doctor_service,
)

router = APIRouter(prefix="/doctors", tags=["Doctors"])


@router.post("/", response_model=DoctorResponse, status_code=201)
def register_doctor(
    body: DoctorCreate,
    service: DoctorService = Depends(get_doctor_service),
):
    return DoctorResponse.from_dto(service.register(body.model_dump()))


@router.get("/", response_model=List[DoctorResponse])
def list_doctors(
    specialty: Optional[str] = Query(None),
    service: DoctorService = Depends(get_doctor_service),
):
    return [DoctorResponse.from_dto(d) for d in service.list_doctors(specialty)]


@router.get("/by-email", response_model=DoctorResponse)
def get_doctor_by_email(email: str = Query(...), service: DoctorService = Depends(get_doctor_service)):
    return DoctorResponse.from_dto(service.get_by_email(email))


@router.get("/{doctor_id}", response_model=DoctorResponse)
def get_doctor(doctor_id: str, service: DoctorService = Depends(get_doctor_service)):
    return DoctorResponse.from_dto(service.get(doctor_id))


@router.patch("/{doctor_id}", response_model=DoctorResponse)
def update_doctor(
    doctor_id: str,
    body: DoctorUpdate,
    service: DoctorService = Depends(get_doctor_service),
):
    return DoctorResponse.from_dto(service.update_profile(doctor_id, body.model_dump(exclude_unset=True)))


@router.delete("/{doctor_id}", response_model=DoctorResponse)
def retire_doctor(doctor_id: str, service: DoctorService = Depends(get_doctor_service)):
    return DoctorResponse.from_dto(service.soft_delete(doctor_id))


@router.put("/{doctor_id}/available-times", response_model=DoctorResponse)
def set_available_times(
    doctor_id: str,
    body: AvailableTimesUpdate,
    availability: AvailabilityService = Depends(get_availability_service),
):
    return DoctorResponse.from_dto(availability.set_available_times(doctor_id, body.available_times))


@router.get("/{doctor_id}/slots", response_model=DoctorSlotsResponse)
def get_slots(
    doctor_id: str,
    day: date = Query(..., alias="date"),
    free_only: bool = Query(False),
    availability: AvailabilityService = Depends(get_availability_service),
):
    if free_only:
        slots = availability.free_slots_for(doctor_id, day)
    else:
        slots = availability.available_slots_for(doctor_id, day)
    return DoctorSlotsResponse(doctor_id=doctor_id, date=day.isoformat(), slots=slots)


@router.get("/{doctor_id}/busy", response_model=List[BusyInterval])
def get_busy_intervals(
    doctor_id: str,
    day: date = Query(..., alias="date"),
    ledger: AppointmentsService = Depends(get_appointments_service),
):
    return [BusyInterval(start=s, end=e) for s, e in ledger.busy_intervals(doctor_id, day)]


@router.get("/{doctor_id}/appointments", response_model=List[AppointmentResponse])
def get_doctor_appointments(
    doctor_id: str,
    include_deleted: bool = Query(False),
    ledger: AppointmentsService = Depends(get_appointments_service),
):
    return [AppointmentResponse.from_dto(a) for a in ledger.list_for_doctor(doctor_id, include_deleted=include_deleted)]
