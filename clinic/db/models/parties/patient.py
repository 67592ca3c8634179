# clinic/db/models/parties/patient.py
from datetime import date
from sqlalchemy import Index, text
from sqlmodel import Field

from .party import PartyBase

class Patient(PartyBase, table=True):
    __tablename__ = "patients"
    __table_args__ = (
        Index(
            "uq_patients_active_email",
            "email",
            unique=True,
            sqlite_where=text("is_deleted = 0"),
            postgresql_where=text("is_deleted = false"),
        ),
    )
    address: str = Field(max_length=255)
    date_of_birth: date
    gender: str = Field(max_length=10)
