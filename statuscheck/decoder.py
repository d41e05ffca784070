from __future__ import annotations

import json
import logging
from urllib.parse import parse_qs, unquote

from pydantic import ValidationError

from statuscheck.models import CheckOptions, DecodedParams

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    pass


class MalformedInput(DecodeError):
    pass


def _param(params: dict[str, list[str]], key: str) -> str | None:
    values = params.get(key)
    if not values:
        return None
    # parse_qs has already decoded once; values may arrive double-encoded.
    return unquote(values[0])


def decode_headers(raw: str | None) -> tuple[dict[str, str], bool]:
    """
    Parse the ``headers`` parameter as a JSON object.

    Returns ``(headers, ignored)``. A value that is not a JSON object of
    scalars yields no headers and ``ignored=True`` instead of failing the
    decode. ``null`` values are dropped; numbers and booleans are sent in
    their JSON form.
    """
    if not raw:
        return {}, False
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        logger.debug("Ignoring headers param, not valid JSON: %.200r", raw)
        return {}, True
    if not isinstance(parsed, dict):
        logger.debug("Ignoring headers param, not a JSON object: %.200r", raw)
        return {}, True

    headers: dict[str, str] = {}
    for name, value in parsed.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            logger.debug("Ignoring headers param, %r is not a scalar", name)
            return {}, True
        headers[name] = value if isinstance(value, str) else json.dumps(value)
    return headers, False


def _max_redirects(raw: str | None) -> int:
    if not raw:
        return 0
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise MalformedInput(f"maxRedirects is not an integer: {raw!r}") from exc
    if value < 0:
        raise MalformedInput(f"maxRedirects must be >= 0, got {value}")
    return value


def decode(param_str: str | None) -> DecodedParams:
    if not param_str or "=" not in param_str:
        raise MalformedInput("Parameter string is empty or has no key=value pairs")

    params = parse_qs(param_str.lstrip("?"), keep_blank_values=True)

    url = _param(params, "url")
    if not url or url == "undefined":
        raise MalformedInput("Missing url parameter")

    accept_codes = _param(params, "acceptCodes")
    if not accept_codes or accept_codes == "null":
        accept_codes = None

    headers, headers_ignored = decode_headers(_param(params, "headers"))

    try:
        options = CheckOptions(
            headers=headers,
            enable_insecure=bool(_param(params, "enableInsecure")),
            accept_codes=accept_codes,
            max_redirects=_max_redirects(_param(params, "maxRedirects")),
        )
        decoded = DecodedParams(url=url, options=options, headers_ignored=headers_ignored)
    except ValidationError as exc:
        raise MalformedInput(str(exc)) from exc

    logger.debug("Decoded status check params url=%s options=%s", url, options)
    return decoded
