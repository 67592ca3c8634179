# Reusable constrained field types
import re
from datetime import date
from typing import Annotated, List

from pydantic import AfterValidator, BeforeValidator, Field

from ...domain import Gender, validate_slots
from ...utils import utcnow

PHONE_RE = re.compile(r"^[0-9]{3}-[0-9]{3}-[0-9]{4}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")


def not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


def check_phone(v: str) -> str:
    v = v.strip()
    if not PHONE_RE.match(v):
        raise ValueError("The phone number should have this format XXX-XXX-XXXX")
    return v


def check_email(v: str) -> str:
    v = v.strip().lower()
    if not EMAIL_RE.match(v):
        raise ValueError("email should have a valid format like name@example.com")
    return v


def check_past_date(v: date) -> date:
    if v >= utcnow().date():
        raise ValueError("Date of birth must be in the past")
    return v


def check_slot_labels(v: list) -> list:
    slots, errors = validate_slots(v)
    if errors:
        raise ValueError("; ".join(e.message for e in errors))
    return [s.label for s in slots]


def strip(v):
    return v.strip() if isinstance(v, str) else v


def upper(v):
    return v.strip().upper() if isinstance(v, str) else v


NonBlankStr = Annotated[str, AfterValidator(not_blank)]
PhoneStr = Annotated[str, AfterValidator(check_phone)]
PastDate = Annotated[date, AfterValidator(check_past_date)]
SlotLabels = Annotated[List[str], AfterValidator(check_slot_labels)]
GenderField = Annotated[Gender, BeforeValidator(upper)]


def bounded(min_length: int = 0, max_length: int = 255):
    """Non-blank string with length bounds checked after trimming."""
    return Annotated[
        str,
        Field(min_length=min_length, max_length=max_length),
        AfterValidator(not_blank),
        BeforeValidator(strip),
    ]


PersonName = bounded(3, 100)
Specialty = bounded(3, 50)
Address = bounded(1, 255)
Password = Annotated[str, Field(min_length=6, max_length=128)]
ContactEmail = Annotated[str, Field(max_length=100), AfterValidator(check_email)]
YearsOfExperience = Annotated[int, Field(ge=0, le=60)]
OptionalText255 = Annotated[str, Field(max_length=255)]
