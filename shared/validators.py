"""
Input validators — framework-agnostic, pure functions.

All validators are stateless and never raise: they answer ``True`` or
``False`` and leave the choice of error to the calling service.
"""

from __future__ import annotations

import re
from typing import Any, List

import validators as _validators

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_SPECIAL_CHARACTERS = r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>\/?~`]'
_SAFE_PASSWORD = r'^[a-zA-Z0-9!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>\/?~`\s]+$'

_PHONE_SEPARATORS = re.compile(r"[\s.\-()]")
_INTERNATIONAL_PHONE = re.compile(r"^\+\d{8,15}$")
_NATIONAL_PHONE = re.compile(r"^0\d{9}$")


def is_email_valid(email: Any) -> bool:
    """Return True if *email* is a syntactically valid email address."""
    if not isinstance(email, str) or not email:
        return False
    return bool(_validators.email(email))


def get_missing_password_requirements(password: Any) -> List[str]:
    """Return the human-readable requirements *password* does not meet.

    An empty list means the password is acceptable.
    """
    if not isinstance(password, str) or not password:
        return ["Password is required"]

    missing = []

    if len(password) < PASSWORD_MIN_LENGTH:
        missing.append(f"At least {PASSWORD_MIN_LENGTH} characters")

    if len(password) > PASSWORD_MAX_LENGTH:
        missing.append(f"Maximum {PASSWORD_MAX_LENGTH} characters")

    if not re.search(r"[A-Z]", password):
        missing.append("At least one uppercase letter")

    if not re.search(r"[a-z]", password):
        missing.append("At least one lowercase letter")

    if not re.search(r"[0-9]", password):
        missing.append("At least one number")

    if not re.search(_SPECIAL_CHARACTERS, password):
        missing.append("At least one special character")

    if not re.match(_SAFE_PASSWORD, password):
        missing.append("Contains invalid characters")

    return missing


def is_password_secure(password: Any) -> bool:
    """Return True if *password* meets every strength requirement."""
    return not get_missing_password_requirements(password)


def is_phone_number_valid(phone_number: Any) -> bool:
    """Return True if *phone_number* looks like a dialable number.

    Accepts international numbers (``+`` followed by 8 to 15 digits) and
    10-digit national numbers starting with ``0``. Spaces, dots, dashes and
    parentheses are ignored. ``None`` and ``""`` are accepted since the
    phone number is optional.
    """
    if phone_number is None or phone_number == "":
        return True
    if not isinstance(phone_number, str):
        return False

    compact = _PHONE_SEPARATORS.sub("", phone_number)
    return bool(_INTERNATIONAL_PHONE.match(compact) or _NATIONAL_PHONE.match(compact))
