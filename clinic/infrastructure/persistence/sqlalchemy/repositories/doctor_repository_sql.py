import json
from typing import Any, Dict, List, Optional
from sqlmodel import select

from .....db.models import Doctor
from .....application.ports.parties_repo import DoctorRepository, DoctorDto
from .....utils import utcnow
from .party_repository_sql import SqlPartyRepository


class SqlDoctorRepository(SqlPartyRepository, DoctorRepository):
    model = Doctor

    def _to_dto(self, d: Doctor) -> DoctorDto:
        return DoctorDto(
            id=d.id,
            public_id=d.public_id,
            name=d.name,
            email=d.email,
            phone=d.phone,
            is_deleted=bool(d.is_deleted),
            created_at=d.created_at,
            updated_at=d.updated_at,
            specialty=d.specialty,
            years_of_experience=d.years_of_experience,
            clinic_address=d.clinic_address,
            available_times=json.loads(d.available_times or "[]"),
        )

    def _columns(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(fields)
        if "available_times" in out:
            out["available_times"] = json.dumps(list(out["available_times"]))
        return out

    def set_available_times(self, doctor_id: int, slots: List[str]) -> Optional[DoctorDto]:
        d = self._row(doctor_id)
        if not d:
            return None
        d.available_times = json.dumps(list(slots))
        d.updated_at = utcnow()
        self.session.add(d)
        self._commit()
        self.session.refresh(d)
        return self._to_dto(d)

    def list_active(self, specialty: Optional[str] = None) -> List[DoctorDto]:
        query = select(Doctor).where(Doctor.is_deleted == False)  # noqa: E712
        if specialty:
            query = query.where(Doctor.specialty.ilike(f"%{specialty}%"))
        rows = self.session.exec(query.order_by(Doctor.name)).all()
        return [self._to_dto(r) for r in rows]
