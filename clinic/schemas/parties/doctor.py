# clinic/schemas/parties/doctor.py
from pydantic import BaseModel
from typing import List, Optional

from ..common.types import OptionalText255, SlotLabels, Specialty, YearsOfExperience
from .party import PartyCreate, PartyUpdate, PartyResponse


class DoctorCreate(PartyCreate):
    specialty: Specialty
    years_of_experience: Optional[YearsOfExperience] = None
    clinic_address: Optional[OptionalText255] = None
    available_times: SlotLabels = []


class DoctorUpdate(PartyUpdate):
    specialty: Optional[Specialty] = None
    years_of_experience: Optional[YearsOfExperience] = None
    clinic_address: Optional[OptionalText255] = None


class AvailableTimesUpdate(BaseModel):
    available_times: List[str]


class DoctorResponse(PartyResponse):
    specialty: str
    years_of_experience: Optional[int] = None
    clinic_address: Optional[str] = None
    available_times: List[str] = []

    @classmethod
    def from_dto(cls, d) -> "DoctorResponse":
        return cls(
            id=d.public_id,
            name=d.name,
            email=d.email,
            phone=d.phone,
            specialty=d.specialty,
            years_of_experience=d.years_of_experience,
            clinic_address=d.clinic_address,
            available_times=list(d.available_times),
            created_at=d.created_at,
            updated_at=d.updated_at,
        )


class DoctorSlotsResponse(BaseModel):
    doctor_id: str
    date: str  # YYYY-MM-DD
    slots: List[str]
