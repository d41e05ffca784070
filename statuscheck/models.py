from __future__ import annotations

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class CheckOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    headers: Dict[str, str] = Field(default_factory=dict)
    enable_insecure: bool = False
    # Matched as str(code) in accept_codes, so "1500" also accepts 500.
    accept_codes: Optional[str] = None
    max_redirects: int = Field(default=0, ge=0)


class DecodedParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    options: CheckOptions = CheckOptions()
    headers_ignored: bool = False
