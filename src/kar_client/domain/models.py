"""
Domain models — service modes, response code tables, and the verification result.

These are pure value objects with no I/O. The code tables are built once at
import time and exposed read-only; their enumeration order is significant
because the decoder picks the first table code present in a response.

KAR answers with a two-digit code. Codes below 03 are positive answers,
everything else is a negative answer or a service-side fault.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any

KAR_DEVELOPMENT = "development"
"""Test environment at Nets."""

KAR_PRODUCTION = "production"
"""Live environment at Nets."""

BASE_URIS: Mapping[str, str] = MappingProxyType(
    {
        KAR_DEVELOPMENT: "https://ajour-test.nets.no",
        KAR_PRODUCTION: "https://ajour.nets.no",
    }
)

# ─────────────────────── Response code tables ───────────────────────
# Message text is reproduced exactly as published by the service.

OWNERSHIP_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "01": "Konto finnes og eies av angitt kunde.",
        "02": "Konto er omnummerert og ny konto eies av angitt kunde.",
        "03": "Konto finnes, men eies ikke av angitt kunde.",
        "04": "Konto finnes ikke.",
        "05": "Angitt konto er omnummerert, men ny konto finnes ikke.",
        "06": "Angitt konto er omnummerert. Ny konto finnes, men eies ikke av angitt kunde.",
        "09": "Ukjent registernummer i angitt konto.",
        "10": "Angitt konto er ikke CDV-gyldig.",
        "11": "Angitt kundenummer er ikke gyldig.",
        "13": "Bankens data er sperret for oppslag fra andre banker.",
        "14": "Kan ikke verifiseres",
        "15": "Kan ikke verifiseres",
    }
)

PAYMENT_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "01": "Ja, konto finnes",
        "02": "Ja, men omnummerert",
        "03": "Nei, konto finnes ikke",
        "04": "Nei, omnummerert tilkonto finnes ikke",
        "05": "Nei, omnummerert til bank som ikke deltar i KAR",
        "06": "Oppgitt bank ikke i KAR",
        "07": "Oppgitt regnr finnes ikke",
        "08": "Oppgitt konto ikke CDV-gyldig",
        "09": "Spørrende banks sdgang til å slå opp I KAR er sperret",
        "10": "Bankens data er sperret for oppslag fra andre banker",
        "99": "Generell svarmelding som benyttes ved tekniske feil internt i KAR",
    }
)

SUCCESS_CODE_LIMIT = 3
"""Numeric codes strictly below this value are positive answers."""


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """
    Decoded answer from a KAR verification call.

    `code` is None when the response carried none of the known codes.
    In that case `success` is False and `message` is None; use `recognized`
    to tell an unparseable answer apart from a negative one.

    `new_account_no` is set when KAR reports that the account has been
    renumbered and carries the replacement account number.
    """

    code: str | None
    success: bool
    message: str | None
    new_account_no: str | None = None

    @property
    def recognized(self) -> bool:
        return self.code is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
