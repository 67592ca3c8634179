from datetime import datetime, timezone
import hashlib


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching what the tables store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_identifier(value: str) -> str:
    return hashlib.sha256(value.encode()).hexdigest()
