from dataclasses import dataclass
from typing import List, Optional

from ..ports.parties_repo import DoctorDto, DoctorRepository
from ...schemas.parties.doctor import DoctorCreate, DoctorUpdate
from .party_service import PartyService


@dataclass
class DoctorService(PartyService):
    repo: DoctorRepository

    entity = "Doctor"
    create_schema = DoctorCreate
    update_schema = DoctorUpdate

    def list_doctors(self, specialty: Optional[str] = None) -> List[DoctorDto]:
        return self.repo.list_active(specialty.strip() if specialty else None)
