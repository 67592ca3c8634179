from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol
from datetime import datetime


@dataclass
class PrescriptionDto:
    id: str
    patient_name: str
    doctor_name: str
    appointment_id: int
    medication: str
    dosage: str
    doctor_notes: Optional[str]
    refill_count: int
    pharmacy_name: Optional[str]
    created_at: datetime
    updated_at: datetime


class PrescriptionRepository(Protocol):
    def create(self, fields: Dict[str, Any]) -> PrescriptionDto:
        ...

    def get(self, prescription_id: str) -> Optional[PrescriptionDto]:
        ...

    def list_for_appointment(self, appointment_id: int) -> List[PrescriptionDto]:
        ...

    def update(self, prescription_id: str, fields: Dict[str, Any]) -> Optional[PrescriptionDto]:
        ...

    def delete(self, prescription_id: str) -> bool:
        ...
