"""
Command-line entry point — wires settings, logging and the KAR client.

Composition root: loads configuration, configures structlog, creates the
client and runs one verification.

Usage:
  kar-verify owner <customer_no> <account_no>
  kar-verify payment <account_no>

The decoded result is printed to stdout as JSON; logs go to stderr.

Exit codes:
  0 — positive answer (code 01 or 02)
  1 — configuration, input, certificate or transport error
  3 — negative or unrecognized answer
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import structlog

from kar_client import __version__
from kar_client.adapters.http_client import create_kar
from kar_client.config import KarSettings
from kar_client.domain.models import VerificationResult
from kar_client.domain.ports import AccountVerifier

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NEGATIVE = 3


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for human-readable console logging on stderr.

    stdout is reserved for the JSON result. Unknown levels fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kar-verify",
        description="Verify bank accounts against the KAR registry",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", required=True)

    owner = commands.add_parser("owner", help="Verify that an account belongs to a customer")
    owner.add_argument("customer_no", help="11-digit customer number")
    owner.add_argument("account_no", help="11-digit account number")

    payment = commands.add_parser("payment", help="Verify that an account can receive payments")
    payment.add_argument("account_no", help="11-digit account number")
    return parser


async def run(verifier: AccountVerifier, args: argparse.Namespace) -> VerificationResult:
    """Dispatch the parsed command to the verifier."""
    if args.command == "owner":
        return await verifier.verify_owner(args.customer_no, args.account_no)
    return await verifier.verify_payment(args.account_no)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, load settings and run a single verification."""
    args = build_parser().parse_args(argv)

    try:
        settings = KarSettings()  # type: ignore[call-arg]
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(EXIT_ERROR)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info("app.starting", version=__version__, mode=settings.mode, command=args.command)

    try:
        kar = create_kar(
            settings.certificate,
            passphrase=settings.passphrase.get_secret_value(),
            mode=settings.mode,
        )
        result = asyncio.run(run(kar, args))
    except Exception as e:
        log.error("app.verification_failed", error=str(e), error_type=type(e).__name__)
        sys.exit(EXIT_ERROR)

    print(json.dumps(result.to_dict(), ensure_ascii=False))  # noqa: T201
    sys.exit(EXIT_OK if result.success else EXIT_NEGATIVE)


if __name__ == "__main__":
    main()
