import re
import uuid

from aptiquest.core.exceptions import InvalidIdError

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    """Generate a new opaque entity identifier"""
    return uuid.uuid4().hex


def is_valid_id(value) -> bool:
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


def ensure_valid_id(value, label: str = "ID") -> str:
    """Return the trimmed identifier or raise InvalidIdError"""
    cleaned = value.strip() if isinstance(value, str) else value
    if not is_valid_id(cleaned):
        raise InvalidIdError(f"Invalid {label} format")
    return cleaned
