"""
TLS adapter — builds a client-authenticating SSLContext from a PKCS#12 bundle.

KAR authenticates callers with a Nets-issued PKCS#12 (.p12) certificate.
The standard library ssl module only loads PEM from files, so the bundle is
opened with cryptography (PyCA) and re-serialized:

  .p12 bytes + passphrase
    → cryptography: pkcs12.load_key_and_certificates()
    → PEM (key encrypted with a one-time password) in a 0700 temp dir
    → ssl: SSLContext.load_cert_chain()
    → temp dir removed

The one-time password never leaves this function, so the key file is
useless even if the temp dir outlives the process.
"""

from __future__ import annotations

import secrets
import ssl
import tempfile
from pathlib import Path

import structlog
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    Encoding,
    PrivateFormat,
    pkcs12,
)

from kar_client.errors import CertificateError

log = structlog.get_logger()


def _to_pem_chain(pkcs12_data: bytes, passphrase: str, key_password: bytes) -> bytes:
    """Open the bundle and return key + leaf + chain certificates as one PEM blob."""
    try:
        key, cert, additional = pkcs12.load_key_and_certificates(
            pkcs12_data, passphrase.encode() if passphrase else None
        )
    except ValueError as e:
        raise CertificateError(f"Unable to open PKCS#12 bundle: {e}") from e

    if key is None or cert is None:
        raise CertificateError("PKCS#12 bundle must contain a private key and a certificate")

    parts = [
        key.private_bytes(
            Encoding.PEM, PrivateFormat.PKCS8, BestAvailableEncryption(key_password)
        ),
        cert.public_bytes(Encoding.PEM),
    ]
    parts.extend(extra.public_bytes(Encoding.PEM) for extra in additional)
    return b"".join(parts)


def build_ssl_context(pkcs12_data: bytes, passphrase: str = "") -> ssl.SSLContext:
    """
    Create a server-verifying SSLContext that presents the bundle's client certificate.

    Raises CertificateError when the bundle cannot be opened (wrong passphrase,
    corrupt data) or lacks a key or certificate.
    """
    key_password = secrets.token_urlsafe(32).encode()
    pem_chain = _to_pem_chain(pkcs12_data, passphrase, key_password)

    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    with tempfile.TemporaryDirectory(prefix="kar-") as tmp:
        chain_path = Path(tmp) / "client.pem"
        chain_path.write_bytes(pem_chain)
        context.load_cert_chain(str(chain_path), password=key_password)

    log.debug("kar.tls.context_ready")
    return context
