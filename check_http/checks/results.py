from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable


class Status(IntEnum):
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class Verdict:
    status: Status
    message: str


@dataclass
class ResponseOutcome:
    status_code: int
    body_reader: Callable[[], bytes] | None = None

    def read_body(self) -> bytes:
        if self.body_reader is None:
            return b""
        return self.body_reader()

    @classmethod
    def from_bytes(cls, status_code: int, body: bytes = b"") -> "ResponseOutcome":
        return cls(status_code=status_code, body_reader=lambda: body)
