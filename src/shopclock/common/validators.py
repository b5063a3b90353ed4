from __future__ import annotations

import re
from typing import Optional

from ..core.constants import MIN_OWNER_PASSWORD_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_non_negative_or_none(value: Optional[int], field_name: str) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def is_strong_password(password: str) -> bool:
    """At least MIN_OWNER_PASSWORD_LENGTH characters with a letter, a digit and a symbol."""
    if not password or len(password) < MIN_OWNER_PASSWORD_LENGTH:
        return False
    has_letter = re.search(r"[A-Za-z]", password) is not None
    has_digit = re.search(r"[0-9]", password) is not None
    has_symbol = re.search(r"[^A-Za-z0-9]", password) is not None
    return has_letter and has_digit and has_symbol
