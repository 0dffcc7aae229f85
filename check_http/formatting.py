from __future__ import annotations

from http import HTTPStatus


def reason_phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


def status_line(code: int) -> str:
    return f"{code} {reason_phrase(code)}"
