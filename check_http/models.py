from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_S = 15


class CheckConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = ""
    timeout_s: int = Field(default=DEFAULT_TIMEOUT_S, ge=0)
    redirect_ok: bool = False
    response_code: Optional[int] = None
    pattern: str = ""
    missing_pattern: str = ""

    @property
    def expects_explicit_status(self) -> bool:
        # 0 and 200 both mean "use the default 2xx/3xx policy"
        return self.response_code not in (None, 0, 200)

    @property
    def active_pattern(self) -> str:
        return self.pattern or self.missing_pattern
