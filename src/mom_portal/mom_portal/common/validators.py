from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import SEQUENCE_MAX, SEQUENCE_STEP
from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
PHONE_RE = re.compile(r"^[0-9+\-\s()]*$")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_max_length(value: Optional[str], field_name: str, max_len: int) -> Optional[str]:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def required_text(value: Any, field_name: str, max_len: int) -> str:
    text = require_non_empty(value, field_name)
    require_max_length(text, field_name, max_len)
    return text


def optional_text(value: Any, field_name: str, max_len: int) -> Optional[str]:
    """Trimmed text or None when blank."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    text = value.strip()
    if not text:
        return None
    require_max_length(text, field_name, max_len)
    return text


def optional_email(value: Any, field_name: str, max_len: int) -> Optional[str]:
    email = optional_text(value, field_name, max_len)
    if email is None:
        return None
    email = email.lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Please provide a valid email")
    return email


def require_email(value: Any, field_name: str, max_len: int) -> str:
    email = optional_email(value, field_name, max_len)
    if email is None:
        raise ValidationError(f"{field_name} is required")
    return email


def optional_phone(value: Any, field_name: str, max_len: int) -> Optional[str]:
    phone = optional_text(value, field_name, max_len)
    if phone is not None and not PHONE_RE.match(phone):
        raise ValidationError("Please provide a valid mobile number")
    return phone


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_int(value, field_name)


def require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "1"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "0"}:
        return False
    raise ValidationError(f"{field_name} must be true or false")


def optional_sequence(value: Any, field_name: str = "Sequence") -> Optional[Decimal]:
    """Non-negative decimal that fits DECIMAL(10,2), or None when omitted."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        seq = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not seq.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if seq < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    if seq > SEQUENCE_MAX:
        raise ValidationError(f"{field_name} cannot exceed {SEQUENCE_MAX}")
    if seq != seq.quantize(SEQUENCE_STEP):
        raise ValidationError(f"{field_name} can have at most 2 decimal places")
    return seq
