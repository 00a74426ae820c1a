import re
import secrets

MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(phone_number) -> str:
    """Digits-only canonical form, so "+1 (555) 010-9999" and "15550109999" are one user."""
    return _NON_DIGITS.sub("", str(phone_number or "").strip())


def is_valid_phone(normalized: str) -> bool:
    return MIN_PHONE_DIGITS <= len(normalized) <= MAX_PHONE_DIGITS


def generate_otp() -> str:
    """Six-digit one-time code."""
    return str(100000 + secrets.randbelow(900000))
