from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from pydantic import ValidationError

from check_http.checks.results import Status, Verdict
from check_http.config import settings
from check_http.models import CheckConfig
from check_http.runner import run_check

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CheckArgumentParser(argparse.ArgumentParser):
    """Report usage errors with the UNKNOWN exit code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(int(Status.UNKNOWN), f"{self.prog}: error: {message}\n")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = CheckArgumentParser(
        prog="check-http",
        description="Check an HTTP endpoint with a single GET request.",
    )
    p.add_argument("-u", "--url", default="", help="URL to connect to")
    p.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=settings.CHECK_HTTP_TIMEOUT,
        help="Time limit, in seconds, for the request",
    )
    p.add_argument(
        "-r", "--redirect-ok", action="store_true", help="Accept redirection"
    )
    p.add_argument(
        "--response-code", type=int, default=200, help="Expected HTTP status code"
    )
    p.add_argument(
        "-q", "--query", default="", help="Query for pattern that must exist in response body"
    )
    p.add_argument(
        "-n",
        "--negquery",
        default="",
        help="Query for pattern that must be absent in response body",
    )
    p.add_argument(
        "--log-level",
        default=settings.CHECK_HTTP_LOG_LEVEL,
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging verbosity (logs go to stderr)",
    )
    args = p.parse_args(argv)
    # argparse does not check choices against a default taken from the environment
    if args.log_level not in LOG_LEVELS:
        p.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    return args


def build_config(args: argparse.Namespace) -> CheckConfig:
    return CheckConfig(
        url=args.url,
        timeout_s=args.timeout,
        redirect_ok=args.redirect_ok,
        response_code=args.response_code,
        pattern=args.query,
        missing_pattern=args.negquery,
    )


def configure_logging(level: str) -> None:
    # stdout is reserved for the verdict message
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = build_config(args)
    except ValidationError as exc:
        logger.error("Invalid check configuration: %s", exc)
        verdict = Verdict(Status.UNKNOWN, f"invalid configuration: {exc.errors()[0]['msg']}")
    else:
        verdict = run_check(config)

    print(verdict.message)
    return int(verdict.status)
