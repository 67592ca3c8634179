from fastapi import APIRouter, Depends

from ..application.services import AdminService
from ..schemas.admin.admin import AdminCreate, AdminResponse
from .deps import get_admin_service

router = APIRouter(prefix="/admins", tags=["Admins"])


@router.post("/", response_model=AdminResponse, status_code=201)
def create_admin(body: AdminCreate, service: AdminService = Depends(get_admin_service)):
    admin = service.create(body.username, body.password)
    return AdminResponse(username=admin.username, created_at=admin.created_at)


@router.get("/{username}", response_model=AdminResponse)
def get_admin(username: str, service: AdminService = Depends(get_admin_service)):
    admin = service.get_by_username(username)
    return AdminResponse(username=admin.username, created_at=admin.created_at)


@router.post("/verify")
def verify_admin(body: AdminCreate, service: AdminService = Depends(get_admin_service)):
    return {"valid": service.verify_credentials(body.username, body.password)}
