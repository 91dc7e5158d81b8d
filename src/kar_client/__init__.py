"""
kar_client — client for the Nets KAR bank-account registry.

Verifies account ownership and payment eligibility over mutual TLS with a
PKCS#12 client certificate, and decodes KAR's form-encoded answers into
VerificationResult objects.

    kar = create_kar("cert.p12", passphrase="secret", mode=KAR_PRODUCTION)
    result = await kar.verify_payment("12345678901")
"""

__version__ = "0.1.0"

from kar_client.adapters.http_client import KarClient, create_kar
from kar_client.domain.decoder import parse_response
from kar_client.domain.models import (
    BASE_URIS,
    KAR_DEVELOPMENT,
    KAR_PRODUCTION,
    OWNERSHIP_MESSAGES,
    PAYMENT_MESSAGES,
    VerificationResult,
)
from kar_client.domain.validators import validate_account_no, validate_customer_no
from kar_client.errors import CertificateError, InvalidInputError, KarError

__all__ = [
    "BASE_URIS",
    "KAR_DEVELOPMENT",
    "KAR_PRODUCTION",
    "OWNERSHIP_MESSAGES",
    "PAYMENT_MESSAGES",
    "CertificateError",
    "InvalidInputError",
    "KarClient",
    "KarError",
    "VerificationResult",
    "create_kar",
    "parse_response",
    "validate_account_no",
    "validate_customer_no",
]
