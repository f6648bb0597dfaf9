"""
Validation layer for waitlist registrations.

Every rule is checked so the caller gets all violations in one message,
not just the first.
"""
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from app.core.exceptions import ValidationError

NAME_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 20
PHONE_PATTERN = re.compile(r"^[0-9\s\-+()]+$", re.ASCII)

INVALID_EMAIL = "Please provide a valid email address"
NAME_REQUIRED = "Name is required"
NAME_LENGTH = f"Name must be between 1 and {NAME_MAX_LENGTH} characters"
PHONE_LENGTH = f"Phone number must be less than {PHONE_MAX_LENGTH} characters"
INVALID_PHONE = "Please provide a valid phone number"


@dataclass(frozen=True)
class WaitlistRegistration:
    email: str
    name: str
    phone: Optional[str] = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _check_email(value: Any, errors: List[str]) -> Optional[str]:
    if not isinstance(value, str):
        errors.append(INVALID_EMAIL)
        return None
    email = normalize_email(value)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        errors.append(INVALID_EMAIL)
        return None
    return email


def _check_name(value: Any, errors: List[str]) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        errors.append(NAME_REQUIRED)
        return None
    name = (value or "").strip()
    if not name:
        errors.append(NAME_REQUIRED)
        return None
    if len(name) > NAME_MAX_LENGTH:
        errors.append(NAME_LENGTH)
        return None
    return name


def _check_phone(value: Any, errors: List[str]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        errors.append(INVALID_PHONE)
        return None
    phone = value.strip()
    if not phone:
        # blank counts as not provided
        return None
    ok = True
    if len(phone) > PHONE_MAX_LENGTH:
        errors.append(PHONE_LENGTH)
        ok = False
    if not PHONE_PATTERN.match(phone):
        errors.append(INVALID_PHONE)
        ok = False
    return phone if ok else None


def validate_registration(payload: Mapping[str, Any]) -> WaitlistRegistration:
    """Normalize and check a raw ``{email, name, phone?}`` payload.

    Raises ``ValidationError`` carrying every failure joined with ", ".
    """
    errors: List[str] = []
    email = _check_email(payload.get("email"), errors)
    name = _check_name(payload.get("name"), errors)
    phone = _check_phone(payload.get("phone"), errors)
    if errors:
        raise ValidationError(", ".join(errors))
    return WaitlistRegistration(email=email, name=name, phone=phone)
