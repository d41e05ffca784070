import unittest
from urllib.parse import quote

from pydantic import ValidationError

from statuscheck.decoder import MalformedInput, decode, decode_headers


class DecoderTests(unittest.TestCase):
    def test_rejects_empty_or_separatorless_input(self) -> None:
        for raw in ("", None, "novalidseparator"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedInput):
                    decode(raw)

    def test_rejects_missing_or_placeholder_url(self) -> None:
        for raw in ("url=undefined", "url=", "acceptCodes=200"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedInput):
                    decode(raw)

    def test_decodes_url_and_max_redirects(self) -> None:
        params = decode("url=https%3A%2F%2Fexample.com&maxRedirects=3")

        self.assertEqual(params.url, "https://example.com")
        self.assertEqual(params.options.max_redirects, 3)
        self.assertEqual(params.options.headers, {})
        self.assertFalse(params.options.enable_insecure)
        self.assertIsNone(params.options.accept_codes)
        self.assertFalse(params.headers_ignored)

    def test_defaults_max_redirects_to_zero(self) -> None:
        params = decode("url=http%3A%2F%2Fexample.local%2Fhealth")

        self.assertEqual(params.url, "http://example.local/health")
        self.assertEqual(params.options.max_redirects, 0)

    def test_invalid_max_redirects_is_malformed(self) -> None:
        for raw in ("url=http%3A%2F%2Fa&maxRedirects=lots", "url=http%3A%2F%2Fa&maxRedirects=-1"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedInput):
                    decode(raw)

    def test_bad_headers_degrade_to_empty(self) -> None:
        params = decode("url=https%3A%2F%2Fexample.com&headers=%7Bnotjson")

        self.assertEqual(params.options.headers, {})
        self.assertTrue(params.headers_ignored)

    def test_headers_are_parsed_from_json(self) -> None:
        params = decode(
            "url=https%3A%2F%2Fexample.com"
            "&headers=%7B%22Authorization%22%3A%22Bearer%20abc%22%2C%22X-Retry%22%3A1%7D"
        )

        self.assertEqual(
            params.options.headers,
            {"Authorization": "Bearer abc", "X-Retry": "1"},
        )
        self.assertFalse(params.headers_ignored)

    def test_deeply_nested_headers_are_ignored(self) -> None:
        params = decode("url=https%3A%2F%2Fexample.com&headers=" + quote("[" * 100000))

        self.assertEqual(params.options.headers, {})
        self.assertTrue(params.headers_ignored)

    def test_null_header_values_are_dropped(self) -> None:
        headers, ignored = decode_headers('{"X-Empty": null, "X-Flag": true, "X-Count": 2}')

        self.assertEqual(headers, {"X-Flag": "true", "X-Count": "2"})
        self.assertFalse(ignored)

    def test_nested_header_values_are_ignored(self) -> None:
        for raw in ('{"X-Obj": {"a": 1}}', '{"X-List": [1, 2]}'):
            with self.subTest(raw=raw):
                self.assertEqual(decode_headers(raw), ({}, True))

    def test_non_object_headers_are_ignored(self) -> None:
        headers, ignored = decode_headers("[1, 2]")

        self.assertEqual(headers, {})
        self.assertTrue(ignored)

    def test_accept_codes_kept_verbatim(self) -> None:
        params = decode("url=https%3A%2F%2Fexample.com&acceptCodes=200%2C404")
        self.assertEqual(params.options.accept_codes, "200,404")

    def test_accept_codes_null_is_unset(self) -> None:
        for raw in ("acceptCodes=null", "acceptCodes="):
            with self.subTest(raw=raw):
                params = decode(f"url=https%3A%2F%2Fexample.com&{raw}")
                self.assertIsNone(params.options.accept_codes)

    def test_enable_insecure_requires_a_value(self) -> None:
        self.assertTrue(
            decode("url=https%3A%2F%2Fexample.com&enableInsecure=true").options.enable_insecure
        )
        self.assertFalse(
            decode("url=https%3A%2F%2Fexample.com&enableInsecure=").options.enable_insecure
        )

    def test_options_are_immutable(self) -> None:
        options = decode("url=https%3A%2F%2Fexample.com").options
        with self.assertRaises(ValidationError):
            options.max_redirects = 5


if __name__ == "__main__":
    unittest.main()
