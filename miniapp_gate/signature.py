"""Telegram Mini App initData HMAC-SHA256 signature check.

The secret key is HMAC-SHA256("WebAppData", bot_token); the signature is
HMAC-SHA256(secret_key, data_check_string) in lowercase hex. Pure
functions, no I/O, no clock.
"""

import hashlib
import hmac
from urllib.parse import urlencode

from .init_data import HASH_FIELD, build_data_check_string, canonicalize, parse


WEBAPP_KEY = b"WebAppData"


def derive_key(bot_token: str) -> bytes:
    """Derive the per-bot secret key from the bot token."""
    if not bot_token:
        raise ValueError("bot token must not be empty")
    return hmac.new(WEBAPP_KEY, bot_token.encode(), hashlib.sha256).digest()


def compute_signature(secret_key: bytes, data_check_string: str) -> str:
    return hmac.new(
        secret_key, data_check_string.encode(), hashlib.sha256,
    ).hexdigest()


def check_signature(fields: dict[str, str], secret_key: bytes) -> bool:
    """Compare the received hash against the one recomputed from `fields`.

    Raises MissingHashField if there is no hash to compare against.
    """
    expected = compute_signature(secret_key, canonicalize(fields))
    # Compare bytes: compare_digest rejects non-ASCII str with TypeError
    received = fields[HASH_FIELD].encode("utf-8", "surrogatepass")
    return hmac.compare_digest(expected.encode(), received)


def verify(raw: str, bot_token: str) -> bool:
    """Return True only if `raw` was signed with `bot_token`.

    A wrong signature is False; unusable input raises MalformedInput
    or MissingHashField.
    """
    return check_signature(parse(raw), derive_key(bot_token))


def sign_fields(fields: dict[str, str], bot_token: str) -> str:
    """Compute the hash the issuer would attach to `fields`."""
    data_check_string = build_data_check_string(fields)
    return compute_signature(derive_key(bot_token), data_check_string)


def build_init_data(fields: dict[str, str], bot_token: str) -> str:
    """Encode `fields` as a signed initData query string."""
    params = {k: v for k, v in fields.items() if k != HASH_FIELD}
    params[HASH_FIELD] = sign_fields(params, bot_token)
    return urlencode(params)
