# clinic/db/models/admin/admin.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

from ....utils import utcnow

class Admin(SQLModel, table=True):
    __tablename__ = "admins"
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=50, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
