"""
Ports — Protocol-based interface for account verification.

Callers that embed the KAR client depend on this contract rather than on
the concrete HTTP adapter, so a stub verifier can stand in for tests or
offline runs. Adapters satisfy it structurally — no inheritance.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from kar_client.domain.models import VerificationResult


@runtime_checkable
class AccountVerifier(Protocol):
    """
    Port: look up account ownership and payment eligibility in KAR.

    Both methods raise InvalidInputError for malformed identifiers before
    any I/O takes place. Transport failures propagate to the caller.
    """

    async def verify_owner(self, customer_no: str, account_no: str) -> VerificationResult:
        """Check that `account_no` belongs to `customer_no`."""
        ...

    async def verify_payment(self, account_no: str) -> VerificationResult:
        """Check that `account_no` exists and can receive payments."""
        ...
