from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime, date


@dataclass
class PartyDto:
    id: int
    public_id: str
    name: str
    email: str
    phone: str
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class DoctorDto(PartyDto):
    specialty: str = ""
    years_of_experience: Optional[int] = None
    clinic_address: Optional[str] = None
    available_times: List[str] = field(default_factory=list)


@dataclass
class PatientDto(PartyDto):
    address: str = ""
    date_of_birth: Optional[date] = None
    gender: str = ""


class PartyRepository(Protocol):
    """Storage shared by doctors and patients. Lookups include soft-deleted rows."""

    def get_by_public_id(self, public_id: str) -> Optional[PartyDto]:
        ...

    def get_by_id(self, party_id: int) -> Optional[PartyDto]:
        ...

    def get_by_email(self, email: str) -> Optional[PartyDto]:
        """Active (non-deleted) party registered under ``email``."""
        ...

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        ...

    def create(self, fields: Dict[str, Any], password_hash: str) -> PartyDto:
        ...

    def update(self, party_id: int, fields: Dict[str, Any]) -> PartyDto:
        ...

    def soft_delete(self, party_id: int) -> PartyDto:
        ...


class DoctorRepository(PartyRepository, Protocol):
    def set_available_times(self, doctor_id: int, slots: List[str]) -> DoctorDto:
        ...

    def list_active(self, specialty: Optional[str] = None) -> List[DoctorDto]:
        ...


class PatientRepository(PartyRepository, Protocol):
    pass
