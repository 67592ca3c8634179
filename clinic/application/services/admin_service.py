from dataclasses import dataclass
from typing import Optional
import logging

from pydantic import ValidationError as PydanticValidationError

from ..ports.admin_repo import AdminDto, AdminRepository
from ..ports.audit_logger import AuditLogger
from ..ports.password_hasher import PasswordHasher
from ...exceptions import FieldErrors, NotFoundError
from ...schemas.admin.admin import AdminCreate
from ...schemas.common.common import field_errors_from

logger = logging.getLogger(__name__)


@dataclass
class AdminService:
    repo: AdminRepository
    hasher: PasswordHasher
    audit: Optional[AuditLogger] = None

    def create(self, username: str, password: str) -> AdminDto:
        errors = FieldErrors()
        payload = None
        try:
            payload = AdminCreate(username=username, password=password)
        except PydanticValidationError as e:
            errors.extend(field_errors_from(e))
        if payload is not None and self.repo.get_by_username(payload.username):
            errors.add("username", "username is already taken")
        errors.raise_if_any()

        admin = self.repo.create(payload.username, self.hasher.hash(payload.password))
        logger.info(f"Created admin {admin.username}")
        if self.audit:
            self.audit.log("create", "Admin", admin.username)
        return admin

    def get_by_username(self, username: str) -> AdminDto:
        admin = self.repo.get_by_username(username)
        if not admin:
            raise NotFoundError("Admin", username)
        return admin

    def verify_credentials(self, username: str, password: str) -> bool:
        admin = self.repo.get_by_username(username)
        if not admin:
            return False
        ok = self.hasher.verify(password, admin.password_hash)
        if self.audit:
            self.audit.log("verify_credentials", "Admin", username, success=ok)
        return ok
