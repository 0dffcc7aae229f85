from __future__ import annotations

import logging

import requests

from check_http.checks.http_check import CheckError
from check_http.checks.results import ResponseOutcome, Status, Verdict
from check_http.formatting import status_line
from check_http.models import CheckConfig

logger = logging.getLogger(__name__)

SUCCESS_RANGE = range(200, 227)  # 200 OK .. 226 IM Used
REDIRECT_RANGE = range(300, 309)  # 300 Multiple Choices .. 308 Permanent Redirect


def classify_status(config: CheckConfig, status_code: int) -> Verdict | None:
    """Return a failing verdict for ``status_code``, or None when it matches.

    An explicit expected code always takes precedence over the default
    2xx/3xx classification.
    """
    line = status_line(status_code)

    if config.expects_explicit_status:
        if status_code == config.response_code:
            return None
        return Verdict(
            Status.CRITICAL,
            f"expected HTTP status {status_line(config.response_code)}, got {line}",
        )

    if status_code in SUCCESS_RANGE:
        return None

    if status_code in REDIRECT_RANGE:
        if config.redirect_ok:
            return None
        return Verdict(Status.WARNING, f"{line}: unexpected redirection")

    return Verdict(Status.CRITICAL, line)


def verify_body(config: CheckConfig, outcome: ResponseOutcome) -> Verdict:
    line = status_line(outcome.status_code)
    pattern = config.active_pattern
    if not pattern:
        return Verdict(Status.OK, line)

    try:
        body = outcome.read_body()
    except CheckError as exc:
        return exc.verdict
    except (requests.RequestException, OSError) as exc:
        logger.warning("Failed to read response body: %s", exc)
        return Verdict(Status.CRITICAL, str(exc))

    content_length = len(body)
    forbidden = not config.pattern
    found = pattern.encode("utf-8") in body
    logger.debug(
        "Searched %s pattern %r in %d bytes: found=%s",
        "forbidden" if forbidden else "required",
        pattern,
        content_length,
        found,
    )

    if found:
        status = Status.CRITICAL if forbidden else Status.OK
        return Verdict(status, f"{line} found /{pattern}/ in {content_length} bytes")

    status = Status.OK if forbidden else Status.CRITICAL
    return Verdict(status, f"did not find /{pattern}/ in {content_length} bytes")


def evaluate(config: CheckConfig, outcome: ResponseOutcome) -> Verdict:
    mismatch = classify_status(config, outcome.status_code)
    if mismatch is not None:
        logger.debug("Status %s rejected: %s", outcome.status_code, mismatch.message)
        return mismatch
    return verify_body(config, outcome)
