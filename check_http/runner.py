from __future__ import annotations

import logging
from typing import Callable

import requests

from check_http.check_logic import evaluate
from check_http.checks.http_check import (
    CheckError,
    Deadline,
    build_session,
    fetch,
    outcome_from_response,
    release_response,
)
from check_http.checks.results import Status, Verdict
from check_http.models import CheckConfig

logger = logging.getLogger(__name__)

Fetcher = Callable[..., requests.Response]


def validate_config(config: CheckConfig) -> Verdict | None:
    if not config.url:
        return Verdict(Status.UNKNOWN, "no URL specified")
    if config.pattern and config.missing_pattern:
        return Verdict(
            Status.UNKNOWN,
            "--query and --negquery can not be used simultaneously",
        )
    return None


def run_check(config: CheckConfig, fetcher: Fetcher = fetch) -> Verdict:
    invalid = validate_config(config)
    if invalid is not None:
        return invalid

    # One budget covers both the request and the body read.
    deadline = Deadline(config.timeout_s)
    with build_session() as session:
        try:
            resp = fetcher(config, session=session, deadline=deadline)
        except CheckError as exc:
            return exc.verdict

        try:
            verdict = evaluate(config, outcome_from_response(resp, deadline))
        finally:
            release_response(resp, deadline)

    logger.info("%s: %s", verdict.status.name, verdict.message)
    return verdict
