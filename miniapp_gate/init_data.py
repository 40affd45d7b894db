"""Parsing and canonicalization of Telegram Mini App initData.

initData arrives as a URL-encoded query string. Both the signature check
and the recency check start from the same parsed mapping, and the signature
is computed over a canonical "data-check-string" built from it.

Reference: https://core.telegram.org/bots/webapps#validating-data-received-via-the-mini-app
"""

import re
from urllib.parse import parse_qsl


HASH_FIELD = "hash"

# A '%' that does not start a two-digit hex escape.
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


class InitDataError(ValueError):
    """Structurally unusable initData. `code` is stable for API responses."""

    code = "invalid_init_data"


class MalformedInput(InitDataError):
    code = "malformed_input"


class MissingHashField(InitDataError):
    code = "missing_hash"


class MissingTimestamp(InitDataError):
    code = "missing_timestamp"


def parse(raw: str, max_length: int | None = None) -> dict[str, str]:
    """Parse the initData query string into a flat dict.

    Every segment must be `key=value` with a non-empty key. Values are
    form-decoded ('+' is a space) as strict UTF-8 and kept exactly,
    including empty ones. Duplicate keys: the last value wins.

    Raises MalformedInput for anything that is not a well-formed query string.
    """
    if not isinstance(raw, str):
        raise MalformedInput(f"expected a string, got {type(raw).__name__}")
    if max_length is not None and len(raw) > max_length:
        raise MalformedInput(f"init data too long ({len(raw)} > {max_length})")
    if not raw:
        return {}
    try:
        # lone surrogates pass through unquote untouched
        raw.encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedInput("init data is not valid UTF-8 text") from e
    if _BAD_PERCENT.search(raw):
        raise MalformedInput("invalid percent escape")

    try:
        pairs = parse_qsl(
            raw, keep_blank_values=True, strict_parsing=True, errors="strict",
        )
    except ValueError as e:
        # UnicodeDecodeError is a ValueError too
        raise MalformedInput(str(e)) from e

    result = {}
    for key, value in pairs:
        if not key:
            raise MalformedInput("empty field name")
        result[key] = value
    return result


def canonicalize(fields: dict[str, str]) -> str:
    """Build the sorted newline-separated data-check-string.

    The hash field is left out. Its absence is an error since there is
    nothing to compare the result against.
    """
    if HASH_FIELD not in fields:
        raise MissingHashField("missing hash")
    return build_data_check_string(fields)


def build_data_check_string(fields: dict[str, str]) -> str:
    """Render every field except the hash as sorted `key=value` lines."""
    return "\n".join(
        f"{k}={v}" for k, v in sorted(fields.items()) if k != HASH_FIELD
    )
