import re
from typing import Any, Dict

from app.core.constants import (
    REQUIRED_FIELDS,
    MSG_REQUIRED,
    MSG_INVALID_EMAIL,
    MSG_INVALID_PHONE,
)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(phone: str) -> str:
    return NON_DIGITS.sub("", phone)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


def is_valid_phone(phone: str) -> bool:
    return len(normalize_phone(phone)) == 10


def validate_form(form_data: Dict[str, Any]) -> Dict[str, str]:
    """
    Returns {field: message} for every problem found.
    An empty dict means the personal details may be committed.
    """
    errors: Dict[str, str] = {}

    for field in REQUIRED_FIELDS:
        if not form_data.get(field):
            errors[field] = MSG_REQUIRED

    email = form_data.get("email")
    if email and not is_valid_email(str(email)):
        errors["email"] = MSG_INVALID_EMAIL

    phone = form_data.get("phone")
    if phone and not is_valid_phone(str(phone)):
        errors["phone"] = MSG_INVALID_PHONE

    return errors
