# clinic/schemas/parties/patient.py
from datetime import date
from typing import Optional

from ...domain import Gender
from ..common.types import Address, GenderField, PastDate
from .party import PartyCreate, PartyUpdate, PartyResponse


class PatientCreate(PartyCreate):
    address: Address
    date_of_birth: PastDate
    gender: GenderField


class PatientUpdate(PartyUpdate):
    address: Optional[Address] = None
    date_of_birth: Optional[PastDate] = None
    gender: Optional[GenderField] = None


class PatientResponse(PartyResponse):
    address: str
    date_of_birth: date
    gender: Gender

    @classmethod
    def from_dto(cls, p) -> "PatientResponse":
        return cls(
            id=p.public_id,
            name=p.name,
            email=p.email,
            phone=p.phone,
            address=p.address,
            date_of_birth=p.date_of_birth,
            gender=p.gender,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )
