# clinic/schemas/parties/party.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..common.types import ContactEmail, Password, PersonName, PhoneStr


class PartyCreate(BaseModel):
    """Fields and rules every registered person shares."""
    model_config = ConfigDict(extra="forbid")

    name: PersonName
    email: ContactEmail
    password: Password
    phone: PhoneStr


class PartyUpdate(BaseModel):
    """Partial profile update; a None value leaves the field unchanged."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[PersonName] = None
    email: Optional[ContactEmail] = None
    password: Optional[Password] = None
    phone: Optional[PhoneStr] = None


class PartyResponse(BaseModel):
    id: str  # public identifier, never the internal key
    name: str
    email: str
    phone: str
    created_at: datetime
    updated_at: datetime
