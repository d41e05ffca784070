from __future__ import annotations

from statuscheck.checks.results import CheckResult

MALFORMED_URL_MESSAGE = "❌ Missing or Malformed URL"


def format_response_message(result: CheckResult) -> str:
    # Used for plain responses and for errors recovered through acceptCodes
    icon = "✅" if result.success_status else "⚠️"
    server = result.server_name or "Server"
    return (
        f"{icon} {server} responded with "
        f"{result.status_code} - {result.status_text}. "
        f"\n⏱️Took {result.time_taken} ms"
    )


def format_unavailable_message(
    hostname: str | None, code: str | None, errno: int | None
) -> str:
    errno_part = f"({errno})" if errno else ""
    return (
        f"❌ Service Unavailable: {hostname or 'Server'} "
        f"resulted in {code or 'a fatal error'} {errno_part}"
    )


def format_service_error_message(status: int | str | None, status_text: str | None) -> str:
    return f"❌ Service Error - {status} - {status_text}"


def malformed_result() -> CheckResult:
    return CheckResult(success_status=False, message=MALFORMED_URL_MESSAGE)
