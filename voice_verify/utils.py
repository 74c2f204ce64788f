import hashlib
from typing import Optional

TRUNK_PREFIX = "0"


# =========================
# Phone Number Handling
# =========================
def compose_phone_number(country_code: Optional[str], phone_number: Optional[str]) -> str:
    """Join country code and national number, dropping one leading trunk zero.

    No validation happens here; the verification provider rejects malformed
    numbers.
    """
    country_code = country_code or ""
    phone_number = phone_number or ""
    if phone_number.startswith(TRUNK_PREFIX):
        phone_number = phone_number[1:]
    return f"{country_code}{phone_number}"


def hash_phone_number(phone: str) -> str:
    """Hash phone number for logs (one-way hash)"""
    return hashlib.sha256(phone.encode()).hexdigest()
