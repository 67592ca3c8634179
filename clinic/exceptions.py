from dataclasses import dataclass
from typing import List, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ClinicError(Exception):
    """Base class for business-rule failures reported to the caller."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    """One or more caller-correctable field violations, reported together."""

    status_code = 422

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = list(errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])

    def fields(self) -> List[str]:
        return [e.field for e in self.errors]

    def __str__(self) -> str:
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        return f"{self.message}: {details}" if details else self.message


class ConflictError(ClinicError):
    status_code = 409

    def __init__(self, message: str, conflicting_id: Optional[str] = None):
        super().__init__(message)
        self.conflicting_id = conflicting_id


class StateError(ClinicError):
    status_code = 409

    def __init__(self, current: str, requested: str, message: Optional[str] = None):
        super().__init__(message or f"Cannot move appointment from {current} to {requested}")
        self.current = current
        self.requested = requested


class NotFoundError(ClinicError):
    status_code = 404

    def __init__(self, entity: str, identifier):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.identifier = identifier


class FieldErrors:
    """Collects field violations so a caller sees every problem in one round trip."""

    def __init__(self) -> None:
        self._errors: List[FieldError] = []

    def add(self, field: str, message: str) -> None:
        self._errors.append(FieldError(field, message))

    def extend(self, errors: List[FieldError]) -> None:
        self._errors.extend(errors)

    def has(self, field: str) -> bool:
        return any(e.field == field for e in self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def raise_if_any(self) -> None:
        if self._errors:
            raise ValidationError(self._errors)


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


async def clinic_exception_handler(request: Request, exc: ClinicError) -> JSONResponse:
    """Translate a domain error into the standard error envelope"""
    content = create_error_response(exc.message, exc.status_code)
    if isinstance(exc, ValidationError):
        content["fields"] = [{"field": e.field, "message": e.message} for e in exc.errors]
    elif isinstance(exc, ConflictError) and exc.conflicting_id:
        content["conflicting_id"] = exc.conflicting_id
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )
