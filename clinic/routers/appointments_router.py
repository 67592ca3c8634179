from typing import List
from fastapi import APIRouter, Depends

from ..application.services import AppointmentsService, PrescribingService, PrescriptionService
from ..schemas.appointments.appointment import (
    AppointmentCancel,
    AppointmentCreate,
    AppointmentReschedule,
    AppointmentResponse,
)
from ..schemas.prescriptions.prescription import PrescribeRequest, PrescriptionResponse
from .deps import get_appointments_service, get_prescribing_service, get_prescription_service

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("/", response_model=AppointmentResponse, status_code=201)
def book_appointment(
    body: AppointmentCreate,
    ledger: AppointmentsService = Depends(get_appointments_service),
):
    appt = ledger.propose(body.doctor_id, body.patient_id, body.appointment_time)
    return AppointmentResponse.from_dto(appt)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(appointment_id: str, ledger: AppointmentsService = Depends(get_appointments_service)):
    return AppointmentResponse.from_dto(ledger.get(appointment_id))


@router.put("/{appointment_id}/time", response_model=AppointmentResponse)
def reschedule_appointment(
    appointment_id: str,
    body: AppointmentReschedule,
    ledger: AppointmentsService = Depends(get_appointments_service),
):
    return AppointmentResponse.from_dto(ledger.reschedule(appointment_id, body.appointment_time))


@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
def complete_appointment(appointment_id: str, ledger: AppointmentsService = Depends(get_appointments_service)):
    return AppointmentResponse.from_dto(ledger.complete(appointment_id))


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: str,
    body: AppointmentCancel,
    ledger: AppointmentsService = Depends(get_appointments_service),
):
    return AppointmentResponse.from_dto(ledger.cancel(appointment_id, body.reason))


@router.delete("/{appointment_id}", response_model=AppointmentResponse)
def delete_appointment(appointment_id: str, ledger: AppointmentsService = Depends(get_appointments_service)):
    return AppointmentResponse.from_dto(ledger.soft_delete(appointment_id))


@router.post("/{appointment_id}/prescriptions", response_model=PrescriptionResponse, status_code=201)
def prescribe(
    appointment_id: str,
    body: PrescribeRequest,
    prescribing: PrescribingService = Depends(get_prescribing_service),
):
    return PrescriptionResponse.from_dto(prescribing.prescribe(appointment_id, **body.model_dump()))


@router.get("/{appointment_id}/prescriptions", response_model=List[PrescriptionResponse])
def list_prescriptions(
    appointment_id: str,
    ledger: AppointmentsService = Depends(get_appointments_service),
    prescriptions: PrescriptionService = Depends(get_prescription_service),
):
    appt = ledger.get(appointment_id)
    return [PrescriptionResponse.from_dto(p) for p in prescriptions.list_for_appointment(appt.id)]
