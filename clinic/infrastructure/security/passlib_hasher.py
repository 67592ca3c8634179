from typing import List, Optional

from passlib.context import CryptContext

from ...application.ports.password_hasher import PasswordHasher
from ...config import settings


class PasslibPasswordHasher(PasswordHasher):
    def __init__(self, schemes: Optional[List[str]] = None) -> None:
        self._context = CryptContext(schemes=schemes or settings.password_schemes_list, deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            # unrecognised or malformed hash
            return False
