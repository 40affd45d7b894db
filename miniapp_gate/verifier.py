"""Configured initData verifier returning display-ready verdicts.

Wraps the pure signature and recency checks with a bot token fixed at
construction. check() turns every structural failure into a Verdict
instead of raising, so callers only ever branch on values.
"""

import time
from dataclasses import dataclass

from .config import Config
from .defaults import (
    DEFAULT_FUTURE_SKEW_SECONDS, DEFAULT_MAX_AGE_SECONDS, DEFAULT_MAX_LENGTH,
)
from .init_data import InitDataError, parse
from .recency import extract_auth_date, is_fresh
from .signature import check_signature, derive_key


@dataclass
class Verdict:
    valid: bool = False   # signature matches
    recent: bool = False  # auth_date inside the replay window
    error: str = ""       # InitDataError.code, empty if input was usable
    detail: str = ""

    @property
    def ok(self) -> bool:
        return not self.error and self.valid and self.recent

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "detail": self.detail}
        return {"valid": self.valid, "recent": self.recent}


class InitDataVerifier:
    def __init__(
        self,
        bot_token: str,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
        future_skew_seconds: int = DEFAULT_FUTURE_SKEW_SECONDS,
        max_length: int = DEFAULT_MAX_LENGTH,
    ):
        self._secret_key = derive_key(bot_token)
        self.max_age_seconds = max_age_seconds
        self.future_skew_seconds = future_skew_seconds
        self.max_length = max_length

    @classmethod
    def from_config(cls, config: Config) -> "InitDataVerifier":
        return cls(
            config.bot_token,
            max_age_seconds=config.max_age_seconds,
            future_skew_seconds=config.future_skew_seconds,
            max_length=config.max_length,
        )

    def __repr__(self) -> str:
        return (
            f"InitDataVerifier(max_age_seconds={self.max_age_seconds}, "
            f"future_skew_seconds={self.future_skew_seconds}, "
            f"max_length={self.max_length})"
        )

    def verify(self, raw: str) -> bool:
        return check_signature(parse(raw, self.max_length), self._secret_key)

    def is_recent(self, raw: str, now: float) -> bool:
        auth_date = extract_auth_date(parse(raw, self.max_length))
        return is_fresh(
            auth_date, now, self.max_age_seconds, self.future_skew_seconds,
        )

    def check(self, raw: str, now: float | None = None) -> Verdict:
        """Run both checks on one parse of `raw`. Never raises on bad input."""
        if now is None:
            now = time.time()
        try:
            fields = parse(raw, self.max_length)
            valid = check_signature(fields, self._secret_key)
            auth_date = extract_auth_date(fields)
        except InitDataError as e:
            length = len(raw) if isinstance(raw, str) else 0
            print(f"[Auth] rejected {e.code}: {e} (len={length})")
            return Verdict(error=e.code, detail=str(e))

        recent = is_fresh(
            auth_date, now, self.max_age_seconds, self.future_skew_seconds,
        )
        print(f"[Auth] valid={valid} recent={recent} age={int(now - auth_date)}s")
        return Verdict(valid=valid, recent=recent)
