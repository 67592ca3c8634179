from dataclasses import dataclass

from ..ports.parties_repo import PatientRepository
from ...schemas.parties.patient import PatientCreate, PatientUpdate
from .party_service import PartyService


@dataclass
class PatientService(PartyService):
    repo: PatientRepository

    entity = "Patient"
    create_schema = PatientCreate
    update_schema = PatientUpdate
