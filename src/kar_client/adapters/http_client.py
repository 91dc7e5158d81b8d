"""
HTTP adapter — certificate-authenticated KAR lookups via httpx.

Adapter layer — implements the AccountVerifier port using httpx.AsyncClient
with a mutual-TLS client certificate (PKCS#12 bundle + passphrase).

Request flow (one GET per call):
  1. Validate identifiers (raise InvalidInputError, no I/O)
  2. Build SSLContext from the stored bundle and passphrase
  3. GET {base_uri}/kar-direct/... and raise on non-2xx
  4. Decode the text body against the matching response code table

No retries and no custom timeout: httpx and ssl exceptions propagate to
the caller unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import httpx
import structlog

from kar_client.adapters.tls import build_ssl_context
from kar_client.domain.decoder import parse_response
from kar_client.domain.models import (
    BASE_URIS,
    KAR_DEVELOPMENT,
    OWNERSHIP_MESSAGES,
    PAYMENT_MESSAGES,
    VerificationResult,
)
from kar_client.domain.validators import validate_account_no, validate_customer_no
from kar_client.errors import InvalidInputError

log = structlog.get_logger()


def _mask(identifier: str) -> str:
    """Keep only the last four digits of an identifier for logging."""
    return "*" * (len(identifier) - 4) + identifier[-4:]


def resolve_base_uri(mode: str | None) -> str:
    """
    Map a service mode to its base URI.

    None or empty selects development. Unknown modes also fall back to
    development; a warning is logged but nothing is raised.
    """
    if not mode:
        return BASE_URIS[KAR_DEVELOPMENT]
    if mode not in BASE_URIS:
        log.warning("kar.mode.unknown", mode=mode, fallback=KAR_DEVELOPMENT)
        return BASE_URIS[KAR_DEVELOPMENT]
    return BASE_URIS[mode]


class KarClient:
    """
    Verify account ownership and payment eligibility against KAR.

    Implements the AccountVerifier port. Configuration is fixed at
    construction; instances hold no other state and can be shared
    between tasks. Use create_kar() to build one from a certificate file.
    """

    def __init__(self, base_uri: str, certificate: bytes, passphrase: str = "") -> None:
        self._base_uri = base_uri
        self._certificate = certificate
        self._passphrase = passphrase

    @property
    def base_uri(self) -> str:
        return self._base_uri

    async def verify_owner(self, customer_no: str, account_no: str) -> VerificationResult:
        """
        Check that `account_no` is owned by `customer_no`.

        Raises InvalidInputError before any request when either identifier
        is not 11 digits. Codes 01 and 02 are positive answers; 02 also
        carries the renumbered account in `new_account_no`.
        """
        if not validate_customer_no(customer_no) or not validate_account_no(account_no):
            log.info("kar.input.invalid", operation="karVerifyAccountOwner")
            raise InvalidInputError()

        endpoint = (
            f"/kar-direct/customers/{customer_no}"
            f"/accounts/{account_no}/karVerifyAccountOwner"
        )
        body = await self._get(
            endpoint,
            operation="karVerifyAccountOwner",
            customer=_mask(customer_no),
            account=_mask(account_no),
        )
        return self._decode(OWNERSHIP_MESSAGES, body, "karVerifyAccountOwner")

    async def verify_payment(self, account_no: str) -> VerificationResult:
        """
        Check that `account_no` exists and can receive payments.

        Raises InvalidInputError before any request when the account number
        is not 11 digits.
        """
        if not validate_account_no(account_no):
            log.info("kar.input.invalid", operation="karVerifyAccountPayment")
            raise InvalidInputError()

        endpoint = f"/kar-direct/accounts/{account_no}/karVerifyAccountPayment"
        body = await self._get(
            endpoint,
            operation="karVerifyAccountPayment",
            account=_mask(account_no),
        )
        return self._decode(PAYMENT_MESSAGES, body, "karVerifyAccountPayment")

    async def _get(self, endpoint: str, **context: str) -> str:
        """Single authenticated GET — exceptions propagate to the caller."""
        ssl_context = build_ssl_context(self._certificate, self._passphrase)
        async with httpx.AsyncClient(verify=ssl_context) as client:
            log.info("kar.request.sent", base_uri=self._base_uri, **context)
            response = await client.get(f"{self._base_uri}{endpoint}")
            response.raise_for_status()
            return response.text

    @staticmethod
    def _decode(
        messages: Mapping[str, str], body: str, operation: str
    ) -> VerificationResult:
        result = parse_response(messages, body)
        log.info(
            "kar.response.decoded",
            operation=operation,
            code=result.code,
            success=result.success,
        )
        return result


def create_kar(
    certificate: str | Path,
    passphrase: str = "",
    mode: str | None = KAR_DEVELOPMENT,
) -> KarClient:
    """
    Create a KAR client bound to a PKCS#12 client certificate.

    The certificate file is read once, here, so a bad path fails this call
    with the underlying OSError. The passphrase is only used when a request
    is made; a wrong passphrase surfaces as CertificateError from the
    verification call.

    Example:
        kar = create_kar("cert.p12", passphrase="secret", mode=KAR_PRODUCTION)
        result = await kar.verify_owner("00000000000", "11111111111")
    """
    base_uri = resolve_base_uri(mode)
    pfx = Path(certificate).read_bytes()
    log.info("kar.client.created", base_uri=base_uri, certificate_bytes=len(pfx))
    return KarClient(base_uri=base_uri, certificate=pfx, passphrase=passphrase)
