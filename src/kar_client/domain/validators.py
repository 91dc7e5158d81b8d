"""
Identifier validators — format checks run before any request is sent.

Both Norwegian customer numbers (national identity / organisation numbers
padded to 11 digits) and bank account numbers are exactly 11 ASCII digits.
Only the format is checked; check digits are left to KAR, which reports
them through its own response codes.
"""

from __future__ import annotations

import re
from typing import Any

_ELEVEN_DIGITS = re.compile(r"[0-9]{11}")


def _is_eleven_digits(value: Any) -> bool:
    """True for a str of exactly 11 ASCII digits; never raises."""
    if not isinstance(value, str):
        return False
    return _ELEVEN_DIGITS.fullmatch(value) is not None


def validate_customer_no(customer_no: Any) -> bool:
    """Return True if `customer_no` is a well-formed 11-digit customer number."""
    return _is_eleven_digits(customer_no)


def validate_account_no(account_no: Any) -> bool:
    """Return True if `account_no` is a well-formed 11-digit account number."""
    return _is_eleven_digits(account_no)
