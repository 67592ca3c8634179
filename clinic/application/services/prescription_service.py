from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError as PydanticValidationError

from ..ports.audit_logger import AuditLogger
from ..ports.prescriptions_repo import PrescriptionRepository, PrescriptionDto
from ...exceptions import NotFoundError, ValidationError
from ...schemas.common.common import field_errors_from
from ...schemas.prescriptions.prescription import PrescriptionCreate, PrescriptionUpdate

logger = logging.getLogger(__name__)


@dataclass
class PrescriptionService:
    """Prescription documents.

    Linked to an appointment by its numeric id only. The store does not look
    the appointment up, so it never checks that the appointment is completed;
    that is the caller's job (see ``PrescribingService``).
    """

    repo: PrescriptionRepository
    audit: Optional[AuditLogger] = None

    def create(self, data: Dict[str, Any]) -> PrescriptionDto:
        try:
            payload = PrescriptionCreate.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(field_errors_from(e))
        prescription = self.repo.create(payload.model_dump())
        logger.info(f"Created prescription {prescription.id} for appointment {prescription.appointment_id}")
        if self.audit:
            self.audit.log("create", "Prescription", prescription.id, details={"appointment_id": prescription.appointment_id})
        return prescription

    def get(self, prescription_id: str) -> PrescriptionDto:
        prescription = self.repo.get(prescription_id)
        if not prescription:
            raise NotFoundError("Prescription", prescription_id)
        return prescription

    def list_for_appointment(self, appointment_id: int) -> List[PrescriptionDto]:
        return self.repo.list_for_appointment(appointment_id)

    def update(self, prescription_id: str, refill_count: Optional[int] = None, doctor_notes: Optional[str] = None) -> PrescriptionDto:
        try:
            payload = PrescriptionUpdate(refill_count=refill_count, doctor_notes=doctor_notes)
        except PydanticValidationError as e:
            raise ValidationError(field_errors_from(e))
        current = self.get(prescription_id)
        fields = payload.model_dump(exclude_none=True)
        if not fields:
            return current
        updated = self.repo.update(prescription_id, fields)
        if updated is None:
            raise NotFoundError("Prescription", prescription_id)
        if self.audit:
            self.audit.log("update", "Prescription", prescription_id, details={"fields": sorted(fields)})
        return updated

    def delete(self, prescription_id: str) -> None:
        if not self.repo.delete(prescription_id):
            raise NotFoundError("Prescription", prescription_id)
        if self.audit:
            self.audit.log("delete", "Prescription", prescription_id)
