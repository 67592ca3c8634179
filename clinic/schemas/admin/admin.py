# clinic/schemas/admin/admin.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from ..common.types import bounded

Username = bounded(3, 50)


class AdminCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: Username
    password: str = Field(..., min_length=6, max_length=128)


class AdminResponse(BaseModel):
    username: str
    created_at: datetime
