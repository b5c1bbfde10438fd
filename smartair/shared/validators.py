"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def validate_local_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate an 8 digit local phone number.

    Spaces and dashes are stripped before checking, so "9123 4567" is
    accepted and stored as "91234567".

    Raises:
        ValueError: If the number is not exactly 8 digits
    """
    if phone is None:
        return phone

    digits = re.sub(r"[\s-]", "", phone)
    if not re.fullmatch(r"[0-9]{8}", digits):
        raise ValueError("Contact phone must be 8 digits")
    return digits


def validate_postal_code(postal_code: Optional[str]) -> Optional[str]:
    """Validate a 6 digit postal code. Empty strings are treated as missing."""
    if not postal_code:
        return None

    postal_code = postal_code.strip()
    if not re.fullmatch(r"\d{6}", postal_code):
        raise ValueError("Postal code must be 6 digits")
    return postal_code


def validate_time_of_day(value: Optional[str]) -> Optional[str]:
    """Validate a 24h HH:MM time string"""
    if not value:
        return None
    if not _TIME_PATTERN.match(value):
        raise ValueError("Scheduled time must be in HH:MM format")
    return value


def validate_not_past(value: Optional[date]) -> Optional[date]:
    """Reject calendar dates earlier than today"""
    if value is not None and value < date.today():
        raise ValueError("Preferred date must be today or in the future")
    return value


def blank_to_none(value):
    """Treat empty strings from form posts as missing"""
    if isinstance(value, str) and value.strip() == "":
        return None
    return value
