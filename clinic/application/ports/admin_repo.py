from typing import Protocol, Optional
from datetime import datetime

class AdminDto:
    def __init__(self, id: int, username: str, password_hash: str, created_at: datetime):
        self.id = id
        self.username = username
        self.password_hash = password_hash
        self.created_at = created_at

class AdminRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[AdminDto]:
        ...

    def create(self, username: str, password_hash: str) -> AdminDto:
        ...
