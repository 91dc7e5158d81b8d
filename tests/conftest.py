"""
Shared test fixtures and helpers for the kar-client test suite.

PKCS#12 client certificates are generated on the fly with cryptography
(self-signed EC certificates), so no key material is checked in.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    NoEncryption,
    pkcs12,
)

PASSPHRASE = "test-passphrase"
CUSTOMER_NO = "11037934560"
ACCOUNT_NO = "12048831581"
NEW_ACCOUNT_NO = "12077735249"


def self_signed_certificate(
    common_name: str = "KAR Test Client",
) -> tuple[ec.EllipticCurvePrivateKey, x509.Certificate]:
    """Create an EC key and a one-day self-signed certificate for it."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(x509.oid.NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.UTC)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    return key, cert


def make_pkcs12(
    passphrase: str = PASSPHRASE,
    with_key: bool = True,
    extra_certs: list[x509.Certificate] | None = None,
) -> bytes:
    """Serialize a fresh client certificate (and optional chain) as a PKCS#12 bundle."""
    key, cert = self_signed_certificate()
    encryption = BestAvailableEncryption(passphrase.encode()) if passphrase else NoEncryption()
    return pkcs12.serialize_key_and_certificates(
        name=b"kar-test",
        key=key if with_key else None,
        cert=cert,
        cas=extra_certs,
        encryption_algorithm=encryption,
    )


@pytest.fixture(scope="session")
def p12_bytes() -> bytes:
    """A PKCS#12 bundle protected with PASSPHRASE."""
    return make_pkcs12()


@pytest.fixture()
def certificate_path(tmp_path: Path, p12_bytes: bytes) -> Path:
    """Write the PKCS#12 bundle to a temp file and return its path."""
    path = tmp_path / "client.p12"
    path.write_bytes(p12_bytes)
    return path


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
