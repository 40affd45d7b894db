import os
from dataclasses import dataclass, field

from .defaults import (
    BOT_TOKEN_ENV, DEFAULT_FUTURE_SKEW_SECONDS, DEFAULT_MAX_AGE_SECONDS,
    DEFAULT_MAX_LENGTH,
)


@dataclass
class Config:
    bot_token: str = field(repr=False)
    webapp_url: str = ""
    api_port: int = 0
    cors_origin: str = "*"
    notify_chat_id: int | None = None
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS
    future_skew_seconds: int = DEFAULT_FUTURE_SKEW_SECONDS
    max_length: int = DEFAULT_MAX_LENGTH


def _get_int(section, key: str, default: int, minimum: int = 0) -> int:
    """Read a non-negative integer option, falling back to `default` when blank."""
    raw = section.get(key, "").strip() if section is not None else ""
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got '{raw}'") from None
    if value < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {value}")
    return value


def load_config(config, environ=None) -> Config:
    """Build a Config from a parsed configparser object.

    The bot token may come from the environment instead of the file;
    the environment wins when both are set.
    """
    if environ is None:
        environ = os.environ

    telegram = config["TELEGRAM"] if config.has_section("TELEGRAM") else None
    limits = config["INIT_DATA"] if config.has_section("INIT_DATA") else None

    bot_token = environ.get(BOT_TOKEN_ENV, "").strip()
    if not bot_token and telegram is not None:
        bot_token = telegram.get("bot_token", "").strip()
    if not bot_token:
        raise ValueError(f"bot token not configured (set {BOT_TOKEN_ENV} or [TELEGRAM] bot_token)")

    webapp_url = telegram.get("webapp_url", "").strip() if telegram is not None else ""
    cors_origin = telegram.get("cors_origin", "").strip() if telegram is not None else ""

    notify = telegram.get("notify_chat_id", "").strip() if telegram is not None else ""
    notify_chat_id = int(notify) if notify else None

    return Config(
        bot_token=bot_token,
        webapp_url=webapp_url,
        api_port=_get_int(telegram, "api_port", 0),
        cors_origin=cors_origin or "*",
        notify_chat_id=notify_chat_id,
        max_age_seconds=_get_int(limits, "max_age_seconds", DEFAULT_MAX_AGE_SECONDS),
        future_skew_seconds=_get_int(limits, "future_skew_seconds", DEFAULT_FUTURE_SKEW_SECONDS),
        max_length=_get_int(limits, "max_length", DEFAULT_MAX_LENGTH, minimum=1),
    )
