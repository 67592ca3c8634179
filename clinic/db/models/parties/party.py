# clinic/db/models/parties/party.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from ....utils import utcnow

class PartyBase(SQLModel):
    """Columns shared by every person registered with the clinic."""
    id: Optional[int] = Field(default=None, primary_key=True)
    public_id: str = Field(default_factory=lambda: str(uuid.uuid4()), max_length=36, unique=True, index=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=100)
    phone: str = Field(max_length=15)
    password_hash: str = Field(max_length=255)
    is_deleted: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
