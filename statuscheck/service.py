from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from statuscheck.checks.http_check import execute
from statuscheck.checks.results import CheckResult
from statuscheck.checks.trust import EMBEDDED_CA_PEM, load_ca_pem
from statuscheck.config import settings
from statuscheck.decoder import MalformedInput, decode
from statuscheck.formatting import format_unavailable_message, malformed_result

logger = logging.getLogger(__name__)

Render = Callable[[str], None]


class StatusChecker:
    def __init__(
        self, ca_pem: str | None = EMBEDDED_CA_PEM, timeout_s: float | None = None
    ) -> None:
        self.ca_pem = ca_pem
        self.timeout_s = timeout_s

    async def run(self, param_str: str | None) -> CheckResult:
        try:
            params = decode(param_str)
        except MalformedInput as e:
            logger.info("Rejected status check params: %s", e)
            return malformed_result()

        return await execute(
            params.url,
            params.options,
            ca_pem=self.ca_pem,
            timeout_s=self.timeout_s,
        )

    def run_sync(self, param_str: str | None) -> CheckResult:
        return asyncio.run(self.run(param_str))


def build_checker() -> StatusChecker:
    return StatusChecker(
        ca_pem=load_ca_pem(settings.STATUS_CHECK_CA_FILE),
        timeout_s=settings.STATUS_CHECK_TIMEOUT_SECONDS,
    )


async def check(
    param_str: str | None,
    render: Optional[Render] = None,
    checker: StatusChecker | None = None,
) -> str:
    """
    Run one status check and return the JSON payload.

    ``render``, when given, is called exactly once with the same payload.
    """
    try:
        result = await (checker or build_checker()).run(param_str)
    except Exception as e:
        logger.exception("Status check failed before completing")
        result = CheckResult(
            success_status=False,
            message=format_unavailable_message(None, type(e).__name__, None),
        )
    payload = result.to_json()
    if render is not None:
        render(payload)
    return payload
