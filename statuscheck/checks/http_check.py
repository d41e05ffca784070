from __future__ import annotations

import asyncio
import errno as errno_codes
import logging
import socket
import ssl
import time
from urllib.parse import urlparse

import requests

from statuscheck.checks.results import CheckResult
from statuscheck.checks.trust import build_session
from statuscheck.formatting import (
    format_response_message,
    format_service_error_message,
    format_unavailable_message,
)
from statuscheck.models import CheckOptions

logger = logging.getLogger(__name__)


def is_successful(code: int | str | None, accept_codes: str | None) -> bool:
    if accept_codes and str(code) in accept_codes:
        return True
    try:
        numeric = int(code)
    except (TypeError, ValueError):
        return False
    return 200 <= numeric <= 302


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _hostname(url: str) -> str | None:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def _server_name(response: requests.Response) -> str | None:
    # Plain http has no TLS handshake, so no SNI name to report
    parsed = urlparse(response.url)
    if parsed.scheme != "https":
        return None
    return parsed.hostname


def transport_error_code(exc: BaseException) -> tuple[str, int | None]:
    """
    Walk the exception chain for the most specific cause.

    Returns ``(code, errno)``: an errno name such as ``ECONNREFUSED``,
    ``ENOTFOUND`` for name resolution failures, the OpenSSL reason for TLS
    failures, or the outermost exception class name as a fallback.
    """
    seen: set[int] = set()
    pending: list[BaseException | None] = [exc]
    while pending:
        e = pending.pop(0)
        if e is None or id(e) in seen:
            continue
        seen.add(id(e))

        if isinstance(e, socket.gaierror):
            return "ENOTFOUND", e.errno
        if isinstance(e, ssl.SSLError):
            return getattr(e, "reason", None) or type(e).__name__, None
        if isinstance(e, OSError) and e.errno in errno_codes.errorcode:
            return errno_codes.errorcode[e.errno], e.errno

        reason = getattr(e, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.extend(a for a in e.args if isinstance(a, BaseException))
        pending.extend([e.__cause__, e.__context__])
    return type(exc).__name__, None


def _from_response(
    response: requests.Response, options: CheckOptions, time_taken: int
) -> CheckResult:
    result = CheckResult(
        success_status=is_successful(response.status_code, options.accept_codes),
        status_code=response.status_code,
        status_text=response.reason,
        server_name=_server_name(response),
        time_taken=time_taken,
    )
    result.message = format_response_message(result)
    return result


def _from_error(
    url: str, exc: requests.RequestException, options: CheckOptions, time_taken: int
) -> CheckResult:
    response = exc.response
    if response is not None:
        code = response.status_code
        accept_codes = options.accept_codes
        if accept_codes and str(code) in accept_codes:
            result = CheckResult(
                success_status=is_successful(code, accept_codes),
                status_code=code,
                status_text=response.reason,
                time_taken=time_taken,
            )
            result.message = format_response_message(result)
            return result
        logger.warning("Status check %s failed with HTTP %s", url, code)
        return CheckResult(
            success_status=False,
            message=format_service_error_message(code, response.reason),
        )

    code, errno = transport_error_code(exc)
    logger.warning("Status check %s unreachable: %s (%s)", url, code, exc)
    return CheckResult(
        success_status=False,
        message=format_unavailable_message(_hostname(url), code, errno),
    )


def run_http(
    url: str,
    options: CheckOptions,
    *,
    ca_pem: str | None,
    timeout_s: float | None = None,
) -> CheckResult:
    start = time.perf_counter()
    try:
        with build_session(options, ca_pem) as session:
            start = time.perf_counter()
            r = session.get(
                url,
                headers=dict(options.headers),
                allow_redirects=options.max_redirects > 0,
                timeout=timeout_s,
                # Explicit, or REQUESTS_CA_BUNDLE would re-enable verification
                verify=not options.enable_insecure,
            )
            time_taken = _elapsed_ms(start)
            r.raise_for_status()
    except requests.RequestException as e:
        return _from_error(url, e, options, _elapsed_ms(start))
    except Exception as e:
        logger.exception("Unexpected failure checking %s", url)
        return CheckResult(
            success_status=False,
            message=format_unavailable_message(_hostname(url), type(e).__name__, None),
        )

    result = _from_response(r, options, time_taken)
    logger.info(
        "Status check %s ok=%s status=%s took=%sms",
        url,
        result.success_status,
        result.status_code,
        result.time_taken,
    )
    return result


async def execute(
    url: str,
    options: CheckOptions,
    *,
    ca_pem: str | None,
    timeout_s: float | None = None,
) -> CheckResult:
    return await asyncio.to_thread(
        run_http, url, options, ca_pem=ca_pem, timeout_s=timeout_s
    )
