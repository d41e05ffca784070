import unittest

from statuscheck.checks.results import CheckResult
from statuscheck.formatting import (
    MALFORMED_URL_MESSAGE,
    format_response_message,
    format_service_error_message,
    format_unavailable_message,
    malformed_result,
)


class FormattingTests(unittest.TestCase):
    def test_response_message_success(self) -> None:
        result = CheckResult(
            success_status=True,
            status_code=200,
            status_text="OK",
            server_name="example.com",
            time_taken=42,
        )

        self.assertEqual(
            format_response_message(result),
            "✅ example.com responded with 200 - OK. \n⏱️Took 42 ms",
        )

    def test_response_message_warning_without_server_name(self) -> None:
        result = CheckResult(
            success_status=False, status_code=304, status_text="Not Modified", time_taken=7
        )

        self.assertEqual(
            format_response_message(result),
            "⚠️ Server responded with 304 - Not Modified. \n⏱️Took 7 ms",
        )

    def test_response_message_is_deterministic(self) -> None:
        result = CheckResult(
            success_status=True, status_code=201, status_text="Created", time_taken=3
        )
        self.assertEqual(format_response_message(result), format_response_message(result))

    def test_unavailable_message(self) -> None:
        self.assertEqual(
            format_unavailable_message("db.local", "ECONNREFUSED", 111),
            "❌ Service Unavailable: db.local resulted in ECONNREFUSED (111)",
        )
        self.assertEqual(
            format_unavailable_message(None, None, None),
            "❌ Service Unavailable: Server resulted in a fatal error ",
        )

    def test_service_error_message(self) -> None:
        self.assertEqual(
            format_service_error_message(503, "Service Unavailable"),
            "❌ Service Error - 503 - Service Unavailable",
        )

    def test_malformed_result(self) -> None:
        result = malformed_result()

        self.assertFalse(result.success_status)
        self.assertEqual(result.message, MALFORMED_URL_MESSAGE)
        self.assertEqual(
            result.to_dict(),
            {"successStatus": False, "message": "❌ Missing or Malformed URL"},
        )

    def test_result_json_keeps_emoji(self) -> None:
        self.assertIn("❌", malformed_result().to_json())


if __name__ == "__main__":
    unittest.main()
