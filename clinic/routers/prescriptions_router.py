from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..application.services import PrescriptionService
from ..schemas.prescriptions.prescription import PrescriptionResponse
from .deps import get_prescription_service

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])


class PrescriptionPatch(BaseModel):
    refill_count: Optional[int] = None
    doctor_notes: Optional[str] = None


@router.get("/{prescription_id}", response_model=PrescriptionResponse)
def get_prescription(prescription_id: str, service: PrescriptionService = Depends(get_prescription_service)):
    return PrescriptionResponse.from_dto(service.get(prescription_id))


@router.patch("/{prescription_id}", response_model=PrescriptionResponse)
def update_prescription(
    prescription_id: str,
    body: PrescriptionPatch,
    service: PrescriptionService = Depends(get_prescription_service),
):
    return PrescriptionResponse.from_dto(
        service.update(prescription_id, refill_count=body.refill_count, doctor_notes=body.doctor_notes)
    )


@router.delete("/{prescription_id}", status_code=204)
def delete_prescription(prescription_id: str, service: PrescriptionService = Depends(get_prescription_service)):
    service.delete(prescription_id)
