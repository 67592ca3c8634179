# clinic/db/models/parties/doctor.py
from typing import Optional
from sqlalchemy import Index, text
from sqlmodel import Field

from .party import PartyBase

class Doctor(PartyBase, table=True):
    __tablename__ = "doctors"
    __table_args__ = (
        # email is unique among doctors that have not been retired
        Index(
            "uq_doctors_active_email",
            "email",
            unique=True,
            sqlite_where=text("is_deleted = 0"),
            postgresql_where=text("is_deleted = false"),
        ),
    )
    specialty: str = Field(max_length=50)
    years_of_experience: Optional[int] = None
    clinic_address: Optional[str] = Field(default=None, max_length=255)
    available_times: str = Field(default="[]")  # JSON list of "HH:MM-HH:MM" labels, in declared order
