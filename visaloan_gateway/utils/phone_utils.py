"""Korean phone number formatting"""

import re

_NON_DIGITS = re.compile(r"\D")


def format_phone_number(value: str) -> str:
    """
    Hyphenate a mobile number as typed: 01012345678 → 010-1234-5678.

    Non-digits are dropped and anything past 11 digits is cut off.
    """
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) <= 3:
        return digits
    if len(digits) <= 7:
        return f"{digits[:3]}-{digits[3:]}"
    return f"{digits[:3]}-{digits[3:7]}-{digits[7:11]}"


def format_phone_international(phone: str) -> str:
    """E.164-style +82 number for the CRM board (010-1234-5678 → +821012345678)"""
    if not phone:
        return ""
    digits = _NON_DIGITS.sub("", phone)
    if digits.startswith("010"):
        return "+82" + digits[1:]
    if digits.startswith("82"):
        return "+" + digits
    return "+82" + digits
