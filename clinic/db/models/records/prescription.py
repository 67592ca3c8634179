# clinic/db/models/records/prescription.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from ....utils import utcnow

class Prescription(SQLModel, table=True):
    __tablename__ = "prescriptions"
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    patient_name: str = Field(max_length=100)
    doctor_name: str = Field(max_length=100)
    # internal appointment id; no foreign key
    appointment_id: int = Field(index=True)
    medication: str = Field(max_length=100)
    dosage: str
    doctor_notes: Optional[str] = Field(default=None, max_length=500)
    refill_count: int = Field(default=0)
    pharmacy_name: Optional[str] = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
