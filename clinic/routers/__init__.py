# Routers package
from . import admins_router
from . import appointments_router
from . import doctors_router
from . import patients_router
from . import prescriptions_router

__all__ = [
    "admins_router",
    "appointments_router",
    "doctors_router",
    "patients_router",
    "prescriptions_router",
]
