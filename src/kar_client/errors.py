"""
Exceptions raised by kar_client.

Transport failures are not wrapped: httpx and ssl exceptions reach the
caller unchanged, as do OSErrors from reading the certificate file.
"""

from __future__ import annotations


class KarError(Exception):
    """Base class for errors raised by this package."""


class InvalidInputError(KarError, ValueError):
    """A customer or account number failed the 11-digit format check."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)


class CertificateError(KarError):
    """The PKCS#12 client certificate could not be opened."""
