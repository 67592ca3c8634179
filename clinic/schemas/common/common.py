# clinic/schemas/common/common.py
from pydantic import ValidationError as PydanticValidationError
from typing import List

from ...exceptions import FieldError


def field_errors_from(exc: PydanticValidationError) -> List[FieldError]:
    """Flatten pydantic's error list into one FieldError per violation."""
    out = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "__root__"
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append(FieldError(field, msg))
    return out
