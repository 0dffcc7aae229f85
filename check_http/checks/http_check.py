from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

import requests

from check_http.checks.results import ResponseOutcome, Status, Verdict
from check_http.models import CheckConfig

logger = logging.getLogger(__name__)


class CheckError(RuntimeError):
    """A failure that ends the check with a fixed verdict."""

    def __init__(self, verdict: Verdict) -> None:
        super().__init__(verdict.message)
        self.verdict = verdict


class RequestTimeout(CheckError):
    def __init__(self, timeout_s: int) -> None:
        super().__init__(
            Verdict(Status.CRITICAL, f"Request exceeded timeout of {timeout_s} seconds")
        )


class RequestFailed(CheckError):
    pass


class Deadline:
    """Wall-clock budget shared by the request and the body read.

    requests only bounds each socket operation, so a server trickling bytes
    never trips its timeout. Each bounded step runs in a daemon worker and the
    caller stops waiting once the budget is spent; a late result is handed to
    ``on_abandoned`` so it can be released.
    """

    def __init__(self, timeout_s: int) -> None:
        self.timeout_s = timeout_s
        self.expired = False
        self._expires_at = time.monotonic() + timeout_s if timeout_s else None

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def call(
        self,
        func: Callable[..., Any],
        *args: Any,
        on_abandoned: Callable[[Any], None] | None = None,
        **kwargs: Any,
    ) -> Any:
        lock = threading.Lock()
        state: dict[str, Any] = {}

        def target() -> None:
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                with lock:
                    state["error"] = exc
                return
            with lock:
                if not state.get("abandoned"):
                    state["result"] = result
                    return
            if on_abandoned is not None:
                on_abandoned(result)

        worker = threading.Thread(target=target, name="check-http-request", daemon=True)
        worker.start()
        worker.join(self.remaining())

        with lock:
            if "error" in state:
                raise state["error"]
            if "result" in state:
                return state["result"]
            state["abandoned"] = True
            self.expired = True

        logger.warning("Deadline of %ss exceeded", self.timeout_s)
        raise RequestTimeout(self.timeout_s)


def request_timeout(config: CheckConfig) -> int | None:
    # A zero timeout means no deadline at all.
    return config.timeout_s or None


def build_session() -> requests.Session:
    return requests.Session()


def _close_response(resp: requests.Response) -> None:
    resp.close()


def release_response(resp: requests.Response, deadline: Deadline | None = None) -> None:
    """Close ``resp``, off the calling thread if a read was abandoned.

    An abandoned worker may still hold the body stream, and closing it would
    block until that read returns.
    """
    if deadline is not None and deadline.expired:
        threading.Thread(
            target=_close_response, args=(resp,), name="check-http-close", daemon=True
        ).start()
        return
    _close_response(resp)


def fetch(
    config: CheckConfig,
    session: requests.Session | None = None,
    deadline: Deadline | None = None,
) -> requests.Response:
    """Issue the single GET for ``config.url``.

    Redirects are not followed: the first 3xx response is returned as-is.
    The body is left unread (``stream=True``) so it is only downloaded when a
    pattern has to be searched. The caller owns the response and must close it.
    """
    deadline = deadline or Deadline(config.timeout_s)
    if session is None:
        with build_session() as own_session:
            return fetch(config, session=own_session, deadline=deadline)

    timeout = request_timeout(config)
    logger.debug("GET %s (timeout=%s)", config.url, timeout)
    try:
        resp = deadline.call(
            session.get,
            config.url,
            timeout=timeout,
            allow_redirects=False,
            stream=True,
            on_abandoned=_close_response,
        )
    except requests.Timeout as exc:
        logger.warning("Request to %s timed out after %ss", config.url, config.timeout_s)
        raise RequestTimeout(config.timeout_s) from exc
    except (requests.RequestException, ValueError) as exc:
        # urllib3 reports some malformed hosts as a bare ValueError
        logger.warning(
            "Request to %s failed: %s: %s", config.url, exc.__class__.__name__, exc
        )
        raise RequestFailed(Verdict(Status.CRITICAL, f"Request error: {exc}")) from exc

    logger.debug("Received HTTP %s from %s", resp.status_code, config.url)
    return resp


def outcome_from_response(
    resp: requests.Response, deadline: Deadline | None = None
) -> ResponseOutcome:
    if deadline is None:
        return ResponseOutcome(status_code=resp.status_code, body_reader=lambda: resp.content)
    return ResponseOutcome(
        status_code=resp.status_code,
        body_reader=lambda: deadline.call(lambda: resp.content),
    )
