# clinic/schemas/prescriptions/prescription.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Optional
from datetime import datetime

from ..common.types import bounded, NonBlankStr, PersonName

MAX_REFILLS = 10

MedicationName = bounded(3, 100)
RefillCount = Annotated[int, Field(ge=0, le=MAX_REFILLS)]
DoctorNotes = Annotated[str, Field(max_length=500)]
PharmacyName = Annotated[str, Field(max_length=100)]


class PrescriptionCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    patient_name: PersonName
    doctor_name: PersonName
    appointment_id: int = Field(..., ge=1)
    medication: MedicationName
    dosage: NonBlankStr
    doctor_notes: Optional[DoctorNotes] = None
    refill_count: RefillCount = 0
    pharmacy_name: Optional[PharmacyName] = None


class PrescriptionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    refill_count: Optional[RefillCount] = None
    doctor_notes: Optional[DoctorNotes] = None


class PrescribeRequest(BaseModel):
    """Body for writing a prescription against a completed appointment."""
    medication: str
    dosage: str
    doctor_notes: Optional[str] = None
    refill_count: int = 0
    pharmacy_name: Optional[str] = None


class PrescriptionResponse(BaseModel):
    id: str
    patient_name: str
    doctor_name: str
    appointment_id: int
    medication: str
    dosage: str
    doctor_notes: Optional[str] = None
    refill_count: int
    pharmacy_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dto(cls, p) -> "PrescriptionResponse":
        return cls(**{name: getattr(p, name) for name in cls.model_fields})
