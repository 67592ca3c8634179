from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .....db.models import Prescription
from .....application.ports.prescriptions_repo import PrescriptionRepository, PrescriptionDto
from .....utils import utcnow


class SqlPrescriptionRepository(PrescriptionRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, p: Prescription) -> PrescriptionDto:
        return PrescriptionDto(
            id=p.id,
            patient_name=p.patient_name,
            doctor_name=p.doctor_name,
            appointment_id=p.appointment_id,
            medication=p.medication,
            dosage=p.dosage,
            doctor_notes=p.doctor_notes,
            refill_count=p.refill_count,
            pharmacy_name=p.pharmacy_name,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def create(self, fields: Dict[str, Any]) -> PrescriptionDto:
        p = Prescription(**fields)
        self.session.add(p)
        self._commit()
        self.session.refresh(p)
        return self._to_dto(p)

    def get(self, prescription_id: str) -> Optional[PrescriptionDto]:
        p = self.session.exec(select(Prescription).where(Prescription.id == prescription_id)).first()
        return self._to_dto(p) if p else None

    def list_for_appointment(self, appointment_id: int) -> List[PrescriptionDto]:
        rows = self.session.exec(
            select(Prescription)
            .where(Prescription.appointment_id == appointment_id)
            .order_by(Prescription.created_at)
        ).all()
        return [self._to_dto(r) for r in rows]

    def update(self, prescription_id: str, fields: Dict[str, Any]) -> Optional[PrescriptionDto]:
        p = self.session.exec(select(Prescription).where(Prescription.id == prescription_id)).first()
        if not p:
            return None
        for key, value in fields.items():
            setattr(p, key, value)
        p.updated_at = utcnow()
        self.session.add(p)
        self._commit()
        self.session.refresh(p)
        return self._to_dto(p)

    def delete(self, prescription_id: str) -> bool:
        p = self.session.exec(select(Prescription).where(Prescription.id == prescription_id)).first()
        if not p:
            return False
        self.session.delete(p)
        self._commit()
        return True
