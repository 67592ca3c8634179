from typing import Any, Dict

from .....db.models import Patient
from .....application.ports.parties_repo import PatientRepository, PatientDto
from .party_repository_sql import SqlPartyRepository


class SqlPatientRepository(SqlPartyRepository, PatientRepository):
    model = Patient

    def _to_dto(self, p: Patient) -> PatientDto:
        return PatientDto(
            id=p.id,
            public_id=p.public_id,
            name=p.name,
            email=p.email,
            phone=p.phone,
            is_deleted=bool(p.is_deleted),
            created_at=p.created_at,
            updated_at=p.updated_at,
            address=p.address,
            date_of_birth=p.date_of_birth,
            gender=p.gender,
        )

    def _columns(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(fields)
        if "gender" in out and out["gender"] is not None:
            out["gender"] = getattr(out["gender"], "value", out["gender"])
        return out
