"""Anti-replay window check on the initData auth_date.

The only clock-dependent part of verification, so `now` is always passed in.
"""

import re

from .defaults import DEFAULT_FUTURE_SKEW_SECONDS
from .init_data import MissingTimestamp, parse


AUTH_DATE_FIELD = "auth_date"

# 12 digits reach past the year 30000 and stay well inside float range
_DECIMAL = re.compile(r"[0-9]{1,12}")


def extract_auth_date(fields: dict[str, str]) -> int:
    """Return auth_date as Unix seconds.

    Only plain ASCII digits are accepted; int() alone would also take
    signs, whitespace and underscores.
    """
    raw = fields.get(AUTH_DATE_FIELD)
    if raw is None:
        raise MissingTimestamp("missing auth_date")
    if not _DECIMAL.fullmatch(raw):
        raise MissingTimestamp(f"invalid auth_date: {raw[:32]!r}")
    return int(raw)


def is_fresh(
    auth_date: int, now: float, max_age_seconds: int,
    future_skew_seconds: int = DEFAULT_FUTURE_SKEW_SECONDS,
) -> bool:
    age = now - auth_date
    if age < -future_skew_seconds:
        return False
    return age <= max_age_seconds


def is_recent(
    raw: str, max_age_seconds: int, now: float,
    future_skew_seconds: int = DEFAULT_FUTURE_SKEW_SECONDS,
) -> bool:
    """True if `raw` was issued at most `max_age_seconds` before `now`.

    Timestamps more than `future_skew_seconds` ahead of `now` are not
    recent either. Raises MalformedInput or MissingTimestamp.
    """
    auth_date = extract_auth_date(parse(raw))
    return is_fresh(auth_date, now, max_age_seconds, future_skew_seconds)
