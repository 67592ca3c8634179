from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .....db.models import Admin
from .....application.ports.admin_repo import AdminRepository, AdminDto
from .....exceptions import ValidationError

class SqlAdminRepository(AdminRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, admin: Admin) -> AdminDto:
        return AdminDto(
            id=admin.id,
            username=admin.username,
            password_hash=admin.password_hash,
            created_at=admin.created_at,
        )

    def get_by_username(self, username: str) -> Optional[AdminDto]:
        admin = self.session.exec(select(Admin).where(Admin.username == username)).first()
        return self._to_dto(admin) if admin else None

    def create(self, username: str, password_hash: str) -> AdminDto:
        admin = Admin(username=username, password_hash=password_hash)
        self.session.add(admin)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ValidationError.single("username", "username is already taken")
        self.session.refresh(admin)
        return self._to_dto(admin)
