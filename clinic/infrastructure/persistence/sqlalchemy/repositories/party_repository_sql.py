from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from .....exceptions import ValidationError
from .....utils import normalize_email, utcnow


class SqlPartyRepository:
    """Storage shared by every party table (doctors, patients)."""

    model = None

    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, row):
        raise NotImplementedError

    def _columns(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return dict(fields)

    def _row(self, party_id: int):
        return self.session.exec(select(self.model).where(self.model.id == party_id)).first()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            # lost a race with another registration for the same address
            raise ValidationError.single("email", "email is already registered")
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def get_by_public_id(self, public_id: str):
        row = self.session.exec(select(self.model).where(self.model.public_id == public_id)).first()
        return self._to_dto(row) if row else None

    def get_by_id(self, party_id: int):
        row = self._row(party_id)
        return self._to_dto(row) if row else None

    def get_by_email(self, email: str):
        row = self.session.exec(
            select(self.model)
            .where(self.model.email == normalize_email(email))
            .where(self.model.is_deleted == False)  # noqa: E712
        ).first()
        return self._to_dto(row) if row else None

    def email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = (
            select(self.model.id)
            .where(self.model.email == normalize_email(email))
            .where(self.model.is_deleted == False)  # noqa: E712
        )
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        return self.session.exec(query).first() is not None

    def create(self, fields: Dict[str, Any], password_hash: str):
        row = self.model(**self._columns(fields), password_hash=password_hash)
        self.session.add(row)
        self._commit()
        self.session.refresh(row)
        return self._to_dto(row)

    def update(self, party_id: int, fields: Dict[str, Any]):
        row = self._row(party_id)
        if not row:
            return None
        for key, value in self._columns(fields).items():
            setattr(row, key, value)
        row.updated_at = utcnow()
        self.session.add(row)
        self._commit()
        self.session.refresh(row)
        return self._to_dto(row)

    def soft_delete(self, party_id: int):
        row = self._row(party_id)
        if not row:
            return None
        if not row.is_deleted:
            row.is_deleted = True
            row.updated_at = utcnow()
            self.session.add(row)
            self._commit()
            self.session.refresh(row)
        return self._to_dto(row)
