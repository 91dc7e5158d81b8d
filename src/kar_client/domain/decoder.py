"""
Response decoder — turns a raw KAR answer into a VerificationResult.

KAR answers with a single form-encoded line. The first token is the bare
response code, followed by a free-text token and key=value echoes of the
request, e.g.:

    02&Ja&req=karVerifyAccountOwner&customer=11037934560&account=12048831581&newaccount=12077735249

The decoder is shared by both verification calls and is parameterized by
the code table to match against.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import parse_qsl

import structlog

from kar_client.domain.models import SUCCESS_CODE_LIMIT, VerificationResult

log = structlog.get_logger()

NEW_ACCOUNT_KEY = "newaccount"


def _parse_pairs(response: str) -> dict[str, str]:
    """
    Split a form-encoded line into a key→value mapping.

    Bare tokens (no "=") are kept with an empty value, since the response
    code itself is one. A repeated key keeps its last value.
    """
    return dict(parse_qsl(response, keep_blank_values=True))


def _find_code(messages: Mapping[str, str], pairs: Mapping[str, str]) -> str | None:
    """First code of the table, in table order, present as a key in `pairs`."""
    return next((code for code in messages if code in pairs), None)


def parse_response(messages: Mapping[str, str], response: str) -> VerificationResult:
    """
    Decode a raw KAR response against a response code table.

    Returns a result with `code=None`, `success=False` and `message=None`
    when none of the table codes is present. That case is reported as an
    unrecognized answer, not raised.
    """
    pairs = _parse_pairs(response)
    code = _find_code(messages, pairs)
    new_account_no = pairs.get(NEW_ACCOUNT_KEY)

    if code is None:
        log.warning("kar.response.unrecognized", tokens=len(pairs))
        return VerificationResult(
            code=None,
            success=False,
            message=None,
            new_account_no=new_account_no,
        )

    return VerificationResult(
        code=code,
        success=int(code) < SUCCESS_CODE_LIMIT,
        message=messages[code],
        new_account_no=new_account_no,
    )
