from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


_WIRE_KEYS = {
    "success_status": "successStatus",
    "status_code": "statusCode",
    "status_text": "statusText",
    "server_name": "serverName",
    "time_taken": "timeTaken",
    "message": "message",
}


@dataclass
class CheckResult:
    success_status: bool
    message: str = ""
    status_code: int | str | None = None
    status_text: str | None = None
    server_name: str | None = None
    time_taken: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for attr, key in _WIRE_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = value
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)
