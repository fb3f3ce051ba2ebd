"""
Phone Number Helpers
Ghana mobile-money numbers travel as 233XXXXXXXXX on the wire and are
stored on registrations in local form (0XXXXXXXXX).
"""

import re
from typing import List, Optional

COUNTRY_PREFIX = '233'


def format_phone_number(phone: str) -> str:
    """
    Format a phone number to the gateway's international form (233XXXXXXXXX)

    Args:
        phone: Phone number in local, international or partial form

    Returns:
        Digits-only phone number starting with 233
    """
    cleaned = re.sub(r'\D', '', phone or '')

    if cleaned.startswith('0'):
        cleaned = COUNTRY_PREFIX + cleaned[1:]
    elif not cleaned.startswith(COUNTRY_PREFIX):
        cleaned = COUNTRY_PREFIX + cleaned

    return cleaned


def to_local_phone_number(phone: str) -> str:
    """Digits-only local form (0XXXXXXXXX) used when storing a phone number"""
    return '0' + format_phone_number(phone)[len(COUNTRY_PREFIX):]


def phone_number_variants(phone: str) -> List[str]:
    """
    Formats a phone number may have been stored under

    Returns the number as received, with a leading 233 swapped for 0,
    and with a leading 0 swapped for 233. Duplicates are dropped, order kept.
    """
    variants = [
        phone,
        re.sub(r'^233', '0', phone),
        re.sub(r'^0', COUNTRY_PREFIX, phone),
    ]
    return list(dict.fromkeys(variants))


def validate_phone_number(phone: str) -> tuple[bool, Optional[str]]:
    """
    Validate a Ghana mobile number

    Args:
        phone: Phone number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone:
        return False, "Phone number is required"

    phone_clean = re.sub(r'[\s\-\(\)]', '', phone)

    if not re.match(r'^\+?\d+$', phone_clean):
        return False, "Phone number must contain only digits and optional leading +"

    if len(format_phone_number(phone_clean)) != 12:
        return False, "Phone number should be 10 digits (0XXXXXXXXX) or 12 digits (233XXXXXXXXX)"

    return True, None
