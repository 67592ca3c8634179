# clinic/db/models/scheduling/appointment.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from ....utils import utcnow

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: str = Field(default_factory=lambda: str(uuid.uuid4()), max_length=36, unique=True, index=True)
    doctor_id: int = Field(foreign_key="doctors.id", index=True)
    patient_id: int = Field(foreign_key="patients.id", index=True)
    appointment_time: datetime = Field(index=True)
    status: str = Field(default="SCHEDULED", max_length=20)
    cancel_reason: Optional[str] = None
    is_deleted: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
