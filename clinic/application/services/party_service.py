from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Type
import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..ports.audit_logger import AuditLogger
from ..ports.parties_repo import PartyDto, PartyRepository
from ..ports.password_hasher import PasswordHasher
from ...exceptions import FieldErrors, NotFoundError
from ...schemas.common.common import field_errors_from
from ...utils import hash_identifier, normalize_email

logger = logging.getLogger(__name__)


@dataclass
class PartyService:
    """Registration and profile rules shared by doctors and patients.

    Subclasses name the entity and the pydantic schemas holding their extra
    fields; everything else (email uniqueness, password hashing, soft delete,
    lookups) is common.
    """

    repo: PartyRepository
    hasher: PasswordHasher
    audit: Optional[AuditLogger] = None

    entity: ClassVar[str] = "Party"
    create_schema: ClassVar[Type[BaseModel]]
    update_schema: ClassVar[Type[BaseModel]]

    def _validate(self, schema: Type[BaseModel], data: Dict[str, Any], errors: FieldErrors) -> Optional[BaseModel]:
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            errors.extend(field_errors_from(e))
            return None

    def _check_email_free(self, email: Any, errors: FieldErrors, exclude_id: Optional[int] = None) -> None:
        if errors.has("email") or not isinstance(email, str) or not email.strip():
            return
        if self.repo.email_taken(normalize_email(email), exclude_id=exclude_id):
            errors.add("email", "email is already registered")

    def _audit(self, action: str, party: PartyDto, **details) -> None:
        if self.audit:
            self.audit.log(action, self.entity, party.public_id, details=details)

    def register(self, data: Dict[str, Any]) -> PartyDto:
        errors = FieldErrors()
        payload = self._validate(self.create_schema, data, errors)
        self._check_email_free(data.get("email"), errors)
        errors.raise_if_any()

        fields = payload.model_dump(exclude={"password"})
        party = self.repo.create(fields, self.hasher.hash(payload.password))
        logger.info(f"Registered {self.entity.lower()} {party.public_id}")
        self._audit("register", party, email_hash=hash_identifier(party.email))
        return party

    def get(self, public_id: str, include_deleted: bool = False) -> PartyDto:
        party = self.repo.get_by_public_id(public_id)
        if not party or (party.is_deleted and not include_deleted):
            raise NotFoundError(self.entity, public_id)
        return party

    def get_by_email(self, email: str) -> PartyDto:
        party = self.repo.get_by_email(normalize_email(email))
        if not party:
            raise NotFoundError(self.entity, email)
        return party

    def update_profile(self, public_id: str, changes: Dict[str, Any]) -> PartyDto:
        party = self.get(public_id)
        errors = FieldErrors()
        payload = self._validate(self.update_schema, changes, errors)
        new_email = changes.get("email")
        if isinstance(new_email, str) and normalize_email(new_email) != party.email:
            self._check_email_free(new_email, errors, exclude_id=party.id)
        errors.raise_if_any()

        fields = payload.model_dump(exclude_none=True)
        password = fields.pop("password", None)
        if password is not None:
            fields["password_hash"] = self.hasher.hash(password)
        if not fields:
            return party
        updated = self.repo.update(party.id, fields)
        self._audit("update_profile", updated, fields=sorted(k for k in fields if k != "password_hash"))
        return updated

    def soft_delete(self, public_id: str) -> PartyDto:
        party = self.repo.get_by_public_id(public_id)
        if not party:
            raise NotFoundError(self.entity, public_id)
        if party.is_deleted:
            return party
        deleted = self.repo.soft_delete(party.id)
        logger.info(f"Soft-deleted {self.entity.lower()} {public_id}")
        self._audit("soft_delete", deleted)
        return deleted
